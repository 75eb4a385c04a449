"""
LLDP neighbor state and interface description reconciliation.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

from lldpdesc.neighbors.models import (
    DescriptionFormat,
    DescriptionUpdate,
    NeighborRecord,
    ObservedNeighbor,
    WriteMode,
)
from lldpdesc.neighbors.core import (
    DescriptionWriter,
    fetch_neighbors,
    group_by_interface,
    reconcile,
)

__all__ = [
    "DescriptionFormat",
    "DescriptionUpdate",
    "DescriptionWriter",
    "NeighborRecord",
    "ObservedNeighbor",
    "WriteMode",
    "fetch_neighbors",
    "group_by_interface",
    "reconcile",
]
