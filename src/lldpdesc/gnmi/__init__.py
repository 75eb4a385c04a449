"""
gNMI target configuration and session handling.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

from lldpdesc.gnmi.config import TargetConfig, parse_address
from lldpdesc.gnmi.client import GnmiSession

__all__ = [
    "GnmiSession",
    "TargetConfig",
    "parse_address",
]
