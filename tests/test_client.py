"""Tests for the gNMI session wrapper."""

import grpc
import pytest
from pygnmi.client import gNMIException

from conftest import FakeGnmiClient
from lldpdesc.errors import ConnectError, ReadError, WriteError
from lldpdesc.gnmi.client import GnmiSession
from lldpdesc.gnmi.config import TargetConfig


def test_connect_passes_target_settings(config, fake_client) -> None:
    with GnmiSession(config, client_factory=fake_client) as session:
        assert session.connected

    assert fake_client.kwargs == {
        "target": ("192.0.2.10", 6030),
        "username": "admin",
        "password": "admin",
        "insecure": True,
        "skip_verify": True,
        "gnmi_timeout": 10,
    }
    assert fake_client.closed
    assert not session.connected


def test_connect_passes_root_cert(fake_client) -> None:
    config = TargetConfig(host="sw1", insecure=False, skip_verify=False, root_cert="/etc/ca.pem")

    with GnmiSession(config, client_factory=fake_client):
        pass

    assert fake_client.kwargs["path_root"] == "/etc/ca.pem"
    assert fake_client.kwargs["insecure"] is False


def test_connect_failure_raises_connect_error(config) -> None:
    client = FakeGnmiClient(connect_error=grpc.FutureTimeoutError())

    with pytest.raises(ConnectError, match="192.0.2.10:6030"):
        with GnmiSession(config, client_factory=client):
            pass

    assert client.closed


def test_read_requires_connection(config, fake_client) -> None:
    with pytest.raises(RuntimeError, match="Not connected"):
        GnmiSession(config, client_factory=fake_client).read("/lldp")


def test_read_rejects_empty_response(config) -> None:
    client = FakeGnmiClient()
    client.response = None

    with GnmiSession(config, client_factory=client) as session:
        with pytest.raises(ReadError):
            session.read("/lldp")


def test_write_wraps_single_path_error(config) -> None:
    client = FakeGnmiClient(fail_paths={"/a"})

    with GnmiSession(config, client_factory=client) as session:
        with pytest.raises(WriteError) as excinfo:
            session.write([("/a", "x")])

    assert excinfo.value.path == "/a"
    assert isinstance(excinfo.value.__cause__, gNMIException)


def test_write_returns_set_response(session, fake_client) -> None:
    response = session.write([("/a", "x"), ("/b", "y")])

    assert [r["path"] for r in response["response"]] == ["a", "b"]
    assert fake_client.set_calls == [([("/a", "x"), ("/b", "y")], "json_ietf")]
