"""
Configuration for gNMI targets.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from lldpdesc.errors import ConfigError
from lldpdesc.neighbors.models import DescriptionFormat, WriteMode

DEFAULT_GNMI_PORT = 6030  # Arista EOS gNMI default


def _env_flag(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.lower() in ("true", "yes", "1")


def parse_address(address: str, default_port: int = DEFAULT_GNMI_PORT) -> tuple[str, int]:
    """Split a target address into host and port.

    Accepts ``host``, ``host:port``, ``[v6addr]`` and ``[v6addr]:port``.
    A bare IPv6 address without brackets is taken as a host with the
    default port.

    Raises:
        ConfigError: If the port is not a number or the host is empty
    """
    address = address.strip()
    port_str = None

    if address.startswith("["):
        host, sep, rest = address[1:].partition("]")
        if not sep:
            raise ConfigError(f"Unterminated IPv6 address: {address}")
        if rest:
            if not rest.startswith(":"):
                raise ConfigError(f"Invalid address: {address}")
            port_str = rest[1:]
    elif address.count(":") == 1:
        host, port_str = address.split(":")
    else:
        host = address

    if not host:
        raise ConfigError(f"No host in address: {address!r}")

    if port_str is None or port_str == "":
        return host, default_port

    try:
        port = int(port_str)
    except ValueError:
        raise ConfigError(f"Invalid port in address: {address}") from None

    return host, port


@dataclass
class TargetConfig:
    """Connection and write policy settings for one gNMI target."""

    host: str = ""
    port: int = DEFAULT_GNMI_PORT
    username: str | None = None
    password: str | None = None

    # Plaintext and unverified TLS are the lab defaults
    insecure: bool = True
    skip_verify: bool = True
    root_cert: str | None = None

    timeout: int = 10  # seconds, passed to pygnmi as gnmi_timeout

    description_format: DescriptionFormat = DescriptionFormat.PEER_PORT
    write_mode: WriteMode = WriteMode.SEQUENTIAL

    @classmethod
    def from_env(cls) -> "TargetConfig":
        """Load configuration from environment variables."""
        try:
            description_format = DescriptionFormat(
                os.environ.get("LLDPDESC_FORMAT", DescriptionFormat.PEER_PORT.value).lower()
            )
        except ValueError:
            description_format = DescriptionFormat.PEER_PORT

        try:
            write_mode = WriteMode(
                os.environ.get("LLDPDESC_MODE", WriteMode.SEQUENTIAL.value).lower()
            )
        except ValueError:
            write_mode = WriteMode.SEQUENTIAL

        try:
            port = int(os.environ.get("LLDPDESC_PORT", str(DEFAULT_GNMI_PORT)))
        except ValueError:
            raise ConfigError("LLDPDESC_PORT must be an integer") from None

        try:
            timeout = int(os.environ.get("LLDPDESC_TIMEOUT", "10"))
        except ValueError:
            raise ConfigError("LLDPDESC_TIMEOUT must be an integer") from None

        return cls(
            port=port,
            insecure=_env_flag("LLDPDESC_INSECURE", True),
            skip_verify=_env_flag("LLDPDESC_SKIP_VERIFY", True),
            root_cert=os.environ.get("LLDPDESC_ROOT_CERT"),
            timeout=timeout,
            description_format=description_format,
            write_mode=write_mode,
        )

    @property
    def target(self) -> tuple[str, int]:
        """Target tuple in the form pygnmi expects."""
        return (self.host, self.port)

    def validate(self) -> list[str]:
        """Validate configuration. Returns list of errors."""
        errors = []

        if not self.host:
            errors.append("Target host required")
        if not 0 < self.port < 65536:
            errors.append(f"Port out of range: {self.port}")
        if self.timeout <= 0:
            errors.append("Timeout must be positive")
        if not self.insecure and self.root_cert and not Path(self.root_cert).is_file():
            errors.append(f"Root certificate not found: {self.root_cert}")

        return errors

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary (excludes the password)."""
        return {
            "host": self.host,
            "port": self.port,
            "username": self.username,
            "insecure": self.insecure,
            "skip_verify": self.skip_verify,
            "root_cert": self.root_cert,
            "timeout": self.timeout,
            "description_format": self.description_format.value,
            "write_mode": self.write_mode.value,
        }
