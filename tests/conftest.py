"""Shared fixtures: a fake pygnmi client and neighbor state builders."""

import pytest
from pygnmi.client import construct_update_message, gNMIException

from lldpdesc.gnmi.client import GnmiSession
from lldpdesc.gnmi.config import TargetConfig


def neighbor_payload(system_name: str = "SwitchA", port_id: str = "Eth3", **overrides) -> dict:
    payload = {
        "openconfig-lldp:chassis-id": "00:1c:73:aa:bb:cc",
        "openconfig-lldp:chassis-id-type": "MAC_ADDRESS",
        "openconfig-lldp:id": f"{system_name}-{port_id}",
        "arista-lldp-augments:last-update-time": "1700000000000000000",
        "openconfig-lldp:management-address": "192.0.2.20",
        "openconfig-lldp:management-address-type": "ipv4",
        "openconfig-lldp:port-id": port_id,
        "openconfig-lldp:port-id-type": "INTERFACE_NAME",
        "arista-lldp-augments:registration-time": "1699999999000000000",
        "openconfig-lldp:system-description": "Arista Networks EOS",
        "openconfig-lldp:system-name": system_name,
    }
    payload.update(overrides)
    return payload


def neighbor_state_path(interface: str, neighbor_id: str = "1") -> str:
    return f"lldp/interfaces/interface[name={interface}]/neighbors/neighbor[id={neighbor_id}]/state"


def get_response(*entries) -> dict:
    """GetResponse with one update per (interface, payload) entry."""
    return {
        "notification": [
            {
                "timestamp": 1700000000000000000,
                "update": [
                    {"path": neighbor_state_path(interface, str(i)), "val": payload}
                    for i, (interface, payload) in enumerate(entries)
                ],
            }
        ]
    }


class FakeGnmiClient:
    """Stands in for pygnmi.client.gNMIclient.

    Calling the instance mimics constructing the client, so it can be
    passed as GnmiSession's client_factory.
    """

    def __init__(self, response=None, connect_error=None, get_error=None, fail_paths=()):
        self.response = response if response is not None else {"notification": []}
        self.connect_error = connect_error
        self.get_error = get_error
        self.fail_paths = set(fail_paths)
        self.kwargs = None
        self.connected = False
        self.closed = False
        self.get_calls = []
        self.set_calls = []
        self.messages = []

    def __call__(self, **kwargs):
        self.kwargs = kwargs
        return self

    def connect(self):
        if self.connect_error:
            raise self.connect_error
        self.connected = True

    def get(self, path, encoding):
        self.get_calls.append((path, encoding))
        if self.get_error:
            raise self.get_error
        return self.response

    def set(self, update, encoding):
        self.set_calls.append((list(update), encoding))
        # Encode the way pygnmi does before sending
        self.messages.append(construct_update_message(list(update), encoding))
        for path, _ in update:
            if path in self.fail_paths:
                raise gNMIException(f"GRPC ERROR on {path}")
        return {
            "timestamp": 1700000000000000000,
            "response": [{"path": path.lstrip("/"), "op": "UPDATE"} for path, _ in update],
        }

    def close(self):
        self.closed = True


@pytest.fixture
def config() -> TargetConfig:
    return TargetConfig(host="192.0.2.10", username="admin", password="admin")


@pytest.fixture
def fake_client() -> FakeGnmiClient:
    return FakeGnmiClient()


@pytest.fixture
def session(config, fake_client):
    with GnmiSession(config, client_factory=fake_client) as session:
        yield session
