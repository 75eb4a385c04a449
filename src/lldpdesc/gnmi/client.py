"""
gNMI session wrapper around pygnmi.

Provides the narrow connect/read/write/close surface the neighbor
fetcher and description writer need, and maps transport failures onto
lldpdesc exceptions.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import logging
from typing import Any, Callable, Sequence

import grpc
from pygnmi.client import gNMIclient, gNMIException

from lldpdesc.errors import ConnectError, ReadError, WriteError
from lldpdesc.gnmi.config import TargetConfig

logger = logging.getLogger(__name__)

TRANSPORT_ERRORS = (gNMIException, grpc.RpcError, grpc.FutureTimeoutError)

DEFAULT_ENCODING = "json_ietf"


class GnmiSession:
    """One gNMI connection to a target device.

    Use as a context manager so the channel is always closed:

        with GnmiSession(config) as session:
            response = session.read(NEIGHBOR_STATE_PATH)
    """

    def __init__(
        self,
        config: TargetConfig,
        client_factory: Callable[..., Any] = gNMIclient,
    ):
        """Initialize the session.

        Args:
            config: Target connection settings
            client_factory: Class or callable building the gNMI client
        """
        self.config = config
        self.client_factory = client_factory
        self._client: Any = None

    @property
    def connected(self) -> bool:
        return self._client is not None

    def connect(self) -> None:
        """Open the gRPC channel and verify the target answers.

        Raises:
            ConnectError: If the channel cannot be established
        """
        host, port = self.config.target
        kwargs: dict[str, Any] = {
            "target": self.config.target,
            "username": self.config.username,
            "password": self.config.password,
            "insecure": self.config.insecure,
            "skip_verify": self.config.skip_verify,
            "gnmi_timeout": self.config.timeout,
        }
        if self.config.root_cert:
            kwargs["path_root"] = self.config.root_cert

        logger.debug(f"Connecting to {host}:{port} (insecure={self.config.insecure})")

        try:
            client = self.client_factory(**kwargs)
        except TRANSPORT_ERRORS as e:
            raise ConnectError(f"failed to connect to {host}:{port}: {e}") from e

        try:
            client.connect()
        except TRANSPORT_ERRORS as e:
            client.close()
            raise ConnectError(f"failed to connect to {host}:{port}: {e}") from e

        self._client = client
        logger.info(f"Connected to {host}:{port}")

    def close(self) -> None:
        """Close the gRPC channel."""
        if self._client is not None:
            try:
                self._client.close()
            finally:
                self._client = None

    def __enter__(self) -> "GnmiSession":
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def _require_client(self) -> Any:
        if self._client is None:
            raise RuntimeError("Not connected")
        return self._client

    def read(self, path: str, encoding: str = DEFAULT_ENCODING) -> dict[str, Any]:
        """Issue a gNMI Get for one path.

        Returns:
            The decoded GetResponse (``{"notification": [...]}``)

        Raises:
            ReadError: If the Get fails
        """
        client = self._require_client()
        logger.debug(f"Get {path} ({encoding})")

        try:
            response = client.get(path=[path], encoding=encoding)
        except TRANSPORT_ERRORS as e:
            raise ReadError(f"failed to get response from target: {e}") from e

        if response is None:
            raise ReadError(f"target returned no response for {path}")
        return response

    def write(
        self,
        updates: Sequence[tuple[str, Any]],
        encoding: str = DEFAULT_ENCODING,
    ) -> dict[str, Any]:
        """Issue one gNMI Set carrying the given updates.

        Args:
            updates: (path, value) pairs
            encoding: Value encoding

        Returns:
            The decoded SetResponse

        Raises:
            WriteError: If the Set fails
        """
        client = self._require_client()
        updates = list(updates)
        logger.debug(f"Set {len(updates)} update(s) ({encoding})")

        path = updates[0][0] if len(updates) == 1 else None
        try:
            response = client.set(update=updates, encoding=encoding)
        except TRANSPORT_ERRORS as e:
            target = path or f"{len(updates)} paths"
            raise WriteError(f"failed to set {target}: {e}", path=path) from e

        if response is None:
            raise WriteError("target returned no response to Set", path=path)
        return response
