"""
lldpdesc - LLDP driven interface descriptions over gNMI.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

__version__ = "0.1.0"
