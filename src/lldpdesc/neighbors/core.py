"""
LLDP neighbor fetching and interface description reconciliation.

Reads LLDP neighbor state from a device over gNMI, derives one
description per local interface, and writes the descriptions back.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import json
import logging
from typing import Any, Iterable, Sequence

from lldpdesc.errors import DecodeError, WriteError
from lldpdesc.neighbors.models import (
    MULTIPLE_CONNECTIONS,
    NEIGHBOR_STATE_PATH,
    DescriptionFormat,
    DescriptionUpdate,
    InterfaceGroup,
    NeighborRecord,
    ObservedNeighbor,
    WriteMode,
    find_key,
)

logger = logging.getLogger(__name__)


def _join_paths(prefix: Any, path: Any) -> str:
    parts = [str(p).strip("/") for p in (prefix, path) if p]
    return "/".join(parts)


def interface_from_path(path: str) -> str:
    """Return the local interface name from a neighbor state path.

    Raises:
        DecodeError: If no ``interface[name=...]`` element is present
    """
    name = find_key(path, "interface", "name")
    if name is None:
        raise DecodeError(f"no interface name in path {path!r}", path)
    return name


def decode_get_response(response: dict[str, Any]) -> list[ObservedNeighbor]:
    """Decode a neighbor state GetResponse into observations.

    The notification prefix, when present, is joined in front of each
    update path before looking up the interface element.

    Raises:
        DecodeError: On the first update that does not decode
    """
    observations = []

    for notification in response.get("notification") or []:
        prefix = notification.get("prefix")
        for update in notification.get("update") or []:
            path = _join_paths(prefix, update.get("path"))
            local_interface = interface_from_path(path)
            neighbor = NeighborRecord.from_payload(update.get("val"))
            logger.debug(
                f"{local_interface}: neighbor {neighbor.system_name} port {neighbor.port_id}"
            )
            observations.append(ObservedNeighbor(local_interface, neighbor))

    return observations


def fetch_neighbors(session) -> list[ObservedNeighbor]:
    """Read LLDP neighbor state from the device.

    One bad entry fails the whole fetch; no partial list is returned.

    Args:
        session: Connected GnmiSession

    Returns:
        One ObservedNeighbor per neighbor state entry

    Raises:
        ReadError: If the Get fails
        DecodeError: If any entry does not decode
    """
    response = session.read(NEIGHBOR_STATE_PATH)
    observations = decode_get_response(response)
    logger.info(f"Fetched {len(observations)} LLDP neighbor(s)")
    return observations


def group_by_interface(observations: Iterable[ObservedNeighbor]) -> list[InterfaceGroup]:
    """Group observations by local interface in first-seen order."""
    groups: dict[str, tuple[ObservedNeighbor, ...]] = {}
    for observation in observations:
        key = observation.local_interface
        groups[key] = groups.get(key, ()) + (observation,)
    return [InterfaceGroup(name, members) for name, members in groups.items()]


def describe(
    group: InterfaceGroup,
    description_format: DescriptionFormat = DescriptionFormat.PEER_PORT,
) -> str:
    """Description text for one interface group."""
    if group.is_multiple:
        return MULTIPLE_CONNECTIONS

    neighbor = group.observations[0].neighbor
    if description_format == DescriptionFormat.LOCAL_INTERFACE:
        discriminator = group.local_interface
    else:
        discriminator = neighbor.port_id
    return f"to:{neighbor.system_name} {discriminator}"


def reconcile(
    observations: Iterable[ObservedNeighbor],
    description_format: DescriptionFormat = DescriptionFormat.PEER_PORT,
) -> list[DescriptionUpdate]:
    """Derive one description update per local interface.

    Args:
        observations: Neighbors as returned by fetch_neighbors
        description_format: What follows the neighbor system name

    Returns:
        Updates ordered by first appearance of each interface
    """
    return [
        DescriptionUpdate(group.local_interface, describe(group, description_format))
        for group in group_by_interface(observations)
    ]


def format_confirmation(response: Any) -> str:
    """Render a SetResponse as text."""
    return json.dumps(response, indent=2, default=str)


class DescriptionWriter:
    """Writes description updates to the device.

    In sequential mode each update is its own Set and the first failure
    stops the run; updates written before it stay applied. In batched
    mode all updates go in one Set, which the device applies as a single
    transaction.
    """

    def __init__(self, session, mode: WriteMode = WriteMode.SEQUENTIAL):
        self.session = session
        self.mode = mode

    def apply_one(self, update: DescriptionUpdate) -> str:
        """Write one description.

        Returns:
            Set confirmation text

        Raises:
            WriteError: If the Set fails
        """
        try:
            response = self.session.write([update.as_update()])
        except WriteError as e:
            logger.error(f"Failed to set description on {update.local_interface}: {e}")
            raise
        logger.info(f"Set description on {update.local_interface}: {update.description}")
        return format_confirmation(response)

    def apply(self, updates: Sequence[DescriptionUpdate]) -> list[str]:
        """Write all updates according to the write mode.

        Returns:
            One confirmation per Set issued
        """
        if not updates:
            logger.info("No description updates to apply")
            return []

        if self.mode == WriteMode.BATCHED:
            try:
                response = self.session.write([u.as_update() for u in updates])
            except WriteError as e:
                logger.error(f"Batched description update failed: {e}")
                raise
            logger.info(f"Set {len(updates)} description(s) in one transaction")
            return [format_confirmation(response)]

        return [self.apply_one(update) for update in updates]
