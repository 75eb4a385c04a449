"""
Exceptions raised by lldpdesc.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""


class LldpDescError(Exception):
    """Base class for all lldpdesc errors."""


class ConfigError(LldpDescError):
    """Invalid target address or configuration value."""


class ConnectError(LldpDescError):
    """gNMI channel setup or authentication failed."""


class FetchError(LldpDescError):
    """LLDP neighbor fetch failed."""


class ReadError(FetchError):
    """Transport failure during a gNMI Get."""


class DecodeError(FetchError):
    """A neighbor payload or path does not match the expected schema."""

    def __init__(self, message: str, payload=None):
        super().__init__(message)
        self.payload = payload


class WriteError(LldpDescError):
    """Transport failure during a gNMI Set."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path
