"""
Data models for LLDP neighbor state and interface description updates.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import json
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any

from pygnmi.create_gnmi_path import gnmi_path_generator

from lldpdesc.errors import DecodeError

# gNMI paths
NEIGHBOR_STATE_PATH = "/lldp/interfaces/interface/neighbors/neighbor/state"
DESCRIPTION_PATH_TEMPLATE = "/interfaces/interface[name={name}]/config/description"

MULTIPLE_CONNECTIONS = "to:multiple connections"


class DescriptionFormat(str, Enum):
    """What follows the neighbor system name in a description."""
    PEER_PORT = "peer-port"  # to:<system-name> <neighbor port-id>
    LOCAL_INTERFACE = "local-interface"  # to:<system-name> <local interface>


class WriteMode(str, Enum):
    """How description updates are sent to the device."""
    SEQUENTIAL = "sequential"  # One Set per interface, halt on first error
    BATCHED = "batched"  # One Set carrying every update


@dataclass(frozen=True)
class NeighborRecord:
    """LLDP neighbor state as reported by the device.

    Every value is kept as the opaque string the device sent.
    """
    chassis_id: str
    chassis_id_type: str
    id: str
    last_update_time: str
    management_address: str
    management_address_type: str
    port_id: str
    port_id_type: str
    registration_time: str
    system_description: str
    system_name: str
    port_description: str | None = None

    # Field name -> JSON_IETF key
    KEYS = {
        "chassis_id": "openconfig-lldp:chassis-id",
        "chassis_id_type": "openconfig-lldp:chassis-id-type",
        "id": "openconfig-lldp:id",
        "last_update_time": "arista-lldp-augments:last-update-time",
        "management_address": "openconfig-lldp:management-address",
        "management_address_type": "openconfig-lldp:management-address-type",
        "port_description": "openconfig-lldp:port-description",
        "port_id": "openconfig-lldp:port-id",
        "port_id_type": "openconfig-lldp:port-id-type",
        "registration_time": "arista-lldp-augments:registration-time",
        "system_description": "openconfig-lldp:system-description",
        "system_name": "openconfig-lldp:system-name",
    }
    OPTIONAL = frozenset({"port_description"})

    @classmethod
    def from_payload(cls, payload: Any) -> "NeighborRecord":
        """Decode a JSON_IETF neighbor state payload.

        The payload may be an already decoded object or the raw JSON
        text/bytes. Keys are matched module-qualified first, then by their
        bare leaf name.

        Raises:
            DecodeError: If the payload does not fit the schema
        """
        data = payload
        if isinstance(data, (bytes, bytearray)):
            try:
                data = data.decode("utf-8")
            except UnicodeDecodeError as e:
                raise DecodeError(
                    f"failed to decode neighbor payload {payload!r}: {e}", payload
                ) from e
        if isinstance(data, str):
            try:
                data = json.loads(data)
            except json.JSONDecodeError as e:
                raise DecodeError(
                    f"failed to decode neighbor payload {payload!r}: {e}", payload
                ) from e

        if not isinstance(data, dict):
            raise DecodeError(
                f"failed to decode neighbor payload {payload!r}: "
                f"expected a JSON object, got {type(data).__name__}",
                payload,
            )

        values: dict[str, str | None] = {}
        for name, key in cls.KEYS.items():
            bare = key.split(":", 1)[1]
            if key in data:
                value = data[key]
            elif bare in data:
                value = data[bare]
            elif name in cls.OPTIONAL:
                values[name] = None
                continue
            else:
                raise DecodeError(
                    f"failed to decode neighbor payload {payload!r}: missing {key}",
                    payload,
                )

            if not isinstance(value, str):
                raise DecodeError(
                    f"failed to decode neighbor payload {payload!r}: "
                    f"{key} is {type(value).__name__}, expected string",
                    payload,
                )
            values[name] = value

        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class ObservedNeighbor:
    """A neighbor record and the local interface it was seen on."""
    local_interface: str
    neighbor: NeighborRecord


@dataclass(frozen=True)
class InterfaceGroup:
    """All neighbors observed on one local interface."""
    local_interface: str
    observations: tuple[ObservedNeighbor, ...] = ()

    @property
    def is_multiple(self) -> bool:
        return len(self.observations) > 1


@dataclass(frozen=True)
class DescriptionUpdate:
    """A pending write of one interface description."""
    local_interface: str
    description: str

    @property
    def path(self) -> str:
        """Configuration leaf for this interface's description."""
        return description_path(self.local_interface)

    def as_update(self) -> tuple[str, str]:
        """(path, value) pair for a gNMI Set.

        pygnmi sends string values as-is, so the description is JSON
        encoded here to form a valid JSON_IETF value.
        """
        return (self.path, json.dumps(self.description))


def description_path(interface: str) -> str:
    """Build the description leaf path, interface name substituted verbatim."""
    return DESCRIPTION_PATH_TEMPLATE.format(name=interface)


def find_key(path: str, elem_name: str, key: str) -> str | None:
    """Return a key value from the first path element with the given name.

    Module prefixes on element names (``openconfig-lldp:interface``) are
    ignored when matching. A prefix on the first element is moved into the
    path origin by pygnmi and never reaches the element name.
    """
    for elem in gnmi_path_generator(path).elem:
        if elem.name.split(":")[-1] == elem_name and key in elem.key:
            return elem.key[key]
    return None
