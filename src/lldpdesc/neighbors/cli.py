"""
LLDP interface description CLI commands.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import json

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from lldpdesc.errors import LldpDescError, ConfigError
from lldpdesc.gnmi.client import GnmiSession
from lldpdesc.gnmi.config import TargetConfig, parse_address
from lldpdesc.neighbors.core import (
    DescriptionWriter,
    fetch_neighbors,
    reconcile,
)
from lldpdesc.neighbors.models import DescriptionFormat, WriteMode

console = Console()

# Replaced in tests to avoid a real gNMI connection
session_factory = GnmiSession


def target_options(func):
    """Connection arguments and options shared by the commands."""
    options = [
        click.argument("address"),
        click.argument("username"),
        click.argument("password"),
        click.option("--port", type=int, default=None, help="gNMI port if ADDRESS has none (default: 6030)"),
        click.option("--insecure/--tls", default=None, help="Plaintext gRPC (default) or TLS"),
        click.option("--skip-verify/--verify", default=None, help="Skip TLS certificate verification"),
        click.option("--root-cert", type=click.Path(dir_okay=False), help="CA certificate for TLS"),
        click.option("--timeout", "-t", type=int, default=None, help="gNMI timeout in seconds (default: 10)"),
        click.option(
            "--format", "description_format",
            type=click.Choice([f.value for f in DescriptionFormat]),
            default=None,
            help="What follows the neighbor name (default: peer-port)",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def build_config(
    address: str,
    username: str,
    password: str,
    port: int | None = None,
    insecure: bool | None = None,
    skip_verify: bool | None = None,
    root_cert: str | None = None,
    timeout: int | None = None,
    description_format: str | None = None,
    write_mode: str | None = None,
) -> TargetConfig:
    """Environment configuration overridden by command line values.

    Raises:
        ConfigError: If the result does not validate
    """
    config = TargetConfig.from_env()
    config.host, config.port = parse_address(address, port or config.port)
    config.username = username
    config.password = password

    if insecure is not None:
        config.insecure = insecure
    if skip_verify is not None:
        config.skip_verify = skip_verify
    if root_cert:
        config.root_cert = root_cert
    if timeout is not None:
        config.timeout = timeout
    if description_format:
        config.description_format = DescriptionFormat(description_format)
    if write_mode:
        config.write_mode = WriteMode(write_mode)

    errors = config.validate()
    if errors:
        raise ConfigError("; ".join(errors))
    return config


def print_update(update) -> None:
    console.print(f"[cyan]{escape(update.local_interface)}[/cyan]: {escape(update.description)}")


@click.command()
@target_options
@click.option(
    "--mode", "write_mode",
    type=click.Choice([m.value for m in WriteMode]),
    default=None,
    help="One Set per interface (sequential, default) or one Set for all (batched)",
)
@click.option("--dry-run", "-n", is_flag=True, help="Show the descriptions without writing them")
def sync(
    address: str,
    username: str,
    password: str,
    port: int | None,
    insecure: bool | None,
    skip_verify: bool | None,
    root_cert: str | None,
    timeout: int | None,
    description_format: str | None,
    write_mode: str | None,
    dry_run: bool,
):
    """Set interface descriptions from LLDP neighbors.

    Reads LLDP neighbor state over gNMI and writes "to:<neighbor> <port>"
    on every interface with one neighbor, or "to:multiple connections"
    where more than one neighbor is seen.

    Examples:
        lldpdesc sync 192.0.2.10 admin admin
        lldpdesc sync 192.0.2.10:6030 admin admin --format local-interface
        lldpdesc sync 192.0.2.10 admin admin --mode batched --dry-run
    """
    try:
        config = build_config(
            address, username, password, port, insecure, skip_verify,
            root_cert, timeout, description_format, write_mode,
        )

        with session_factory(config) as session:
            observations = fetch_neighbors(session)
            updates = reconcile(observations, config.description_format)

            if not updates:
                console.print("[yellow]No LLDP neighbors found, nothing to update[/yellow]")
                return

            if dry_run or config.write_mode == WriteMode.BATCHED:
                for update in updates:
                    print_update(update)

            if dry_run:
                console.print(f"\n[dim]Dry run: {len(updates)} description(s) not written[/dim]")
                return

            writer = DescriptionWriter(session, config.write_mode)
            if config.write_mode == WriteMode.BATCHED:
                for confirmation in writer.apply(updates):
                    console.print(escape(confirmation))
            else:
                # Only descriptions that were written get printed
                for update in updates:
                    confirmation = writer.apply_one(update)
                    print_update(update)
                    console.print(escape(confirmation))

    except LldpDescError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise SystemExit(1)

    console.print(f"\n[green]Updated {len(updates)} interface description(s)[/green]")


@click.command()
@target_options
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
def show(
    address: str,
    username: str,
    password: str,
    port: int | None,
    insecure: bool | None,
    skip_verify: bool | None,
    root_cert: str | None,
    timeout: int | None,
    description_format: str | None,
    json_output: bool,
):
    """Show LLDP neighbors and the description each interface would get.

    Examples:
        lldpdesc show 192.0.2.10 admin admin
        lldpdesc show 192.0.2.10 admin admin --json
    """
    try:
        config = build_config(
            address, username, password, port, insecure, skip_verify,
            root_cert, timeout, description_format,
        )
        with session_factory(config) as session:
            observations = fetch_neighbors(session)
    except LldpDescError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise SystemExit(1)

    updates = reconcile(observations, config.description_format)

    if json_output:
        data = {
            "neighbors": [
                {"local_interface": o.local_interface, **o.neighbor.to_dict()}
                for o in observations
            ],
            "descriptions": [
                {"path": u.path, "description": u.description} for u in updates
            ],
        }
        click.echo(json.dumps(data, indent=2))
        return

    if not observations:
        console.print("[yellow]No LLDP neighbors found[/yellow]")
        return

    table = Table(title=f"LLDP Neighbors on {escape(config.host)}", box=None)
    table.add_column("Local Port", style="cyan")
    table.add_column("System Name", style="white")
    table.add_column("Remote Port", style="green")
    table.add_column("Chassis ID", style="dim")
    table.add_column("Mgmt Address", style="yellow")

    for o in observations:
        table.add_row(
            escape(o.local_interface),
            escape(o.neighbor.system_name or "-"),
            escape(o.neighbor.port_id or "-"),
            escape(o.neighbor.chassis_id or "-"),
            escape(o.neighbor.management_address or "-"),
        )

    console.print(table)
    console.print()

    console.print("[cyan bold]Planned Descriptions:[/cyan bold]")
    for update in updates:
        console.print(f"  {escape(update.local_interface)}: {escape(update.description)}")
