"""
Shared fixtures: in-process fake node clients and sinks
"""

import pytest

from eth_metrics_exporter.capabilities import Capability
from eth_metrics_exporter.exceptions import QueryError
from eth_metrics_exporter.metrics import InMemorySink
from eth_metrics_exporter.models import HeadSync, SyncProgress, Target, TargetKind
from eth_metrics_exporter.state import Genesis

MAINNET_SPEC = {
    "CONFIG_NAME": "mainnet",
    "PRESET_BASE": "mainnet",
    "SECONDS_PER_SLOT": "12",
    "SLOTS_PER_EPOCH": "32",
    "DEPOSIT_NETWORK_ID": "1",
    "DEPOSIT_CHAIN_ID": "1",
    "MAX_EFFECTIVE_BALANCE": "32000000000",
    "GENESIS_FORK_VERSION": "0x00000000",
}

MAINNET_GENESIS = Genesis(
    genesis_time=1606824023,
    genesis_validators_root="0x4b363db94e286120d76eb905340fdd4e54bfe9f06bf33ff6cf5ad27f511bfe95",
    genesis_fork_version="0x00000000",
)


class FakeNodeClient:
    """Records every call; raises from ``errors`` when a method name is listed"""

    def __init__(self, name, capabilities, errors=None):
        self.name = name
        self.capabilities = frozenset(capabilities)
        self.errors = dict(errors or {})
        self.calls = []

    def _call(self, method):
        self.calls.append(method)
        error = self.errors.get(method)
        if error is not None:
            raise error

    def count(self, method):
        return self.calls.count(method)


class FakeExecutionClient(FakeNodeClient):
    def __init__(self, capabilities=(Capability.NODE_VERSION, Capability.SYNC_STATUS, Capability.NETWORK_ID),
                 version="Geth/v1.13.5-stable/linux-amd64/go1.21.4", progress=None, network=1, errors=None):
        super().__init__("fake-execution", capabilities, errors)
        self.version = version
        self.progress = progress
        self.network = network

    def node_version(self):
        self._call("node_version")
        return self.version

    def sync_progress(self):
        self._call("sync_progress")
        return self.progress

    def network_id(self):
        self._call("network_id")
        return self.network


class FakeBeaconClient(FakeNodeClient):
    def __init__(self, capabilities=(Capability.NODE_VERSION, Capability.SYNC_STATUS, Capability.SPEC,
                                     Capability.GENESIS, Capability.BEACON_BLOCK_HEADERS),
                 version="Lighthouse/v4.5.0-441fc16", spec=None, genesis=MAINNET_GENESIS,
                 slots=None, head_sync=None, errors=None):
        super().__init__("fake-beacon", capabilities, errors)
        self.version = version
        self.spec_data = dict(MAINNET_SPEC if spec is None else spec)
        self.genesis_data = genesis
        self.slots = {"head": 7000100, "genesis": 0, "finalized": 7000032} if slots is None else slots
        self.head_sync = head_sync or HeadSync(head_slot=7000100, sync_distance=0, is_syncing=False)

    def node_version(self):
        self._call("node_version")
        return self.version

    def spec(self):
        self._call("spec")
        return self.spec_data

    def genesis(self):
        self._call("genesis")
        return self.genesis_data

    def beacon_block_header(self, identifier):
        self._call(f"beacon_block_header:{identifier}")
        slot = self.slots.get(identifier)
        if slot is None:
            raise QueryError(self.name, f"block header {identifier}", "HTTP 404")
        return slot

    def sync_progress(self):
        self._call("sync_progress")
        return self.head_sync


@pytest.fixture
def sink():
    return InMemorySink()


@pytest.fixture
def execution_target():
    return Target(TargetKind.EXECUTION, "geth-1", "http://localhost:8545")


@pytest.fixture
def beacon_target():
    return Target(TargetKind.CONSENSUS, "lighthouse-1", "http://localhost:5052")


@pytest.fixture
def syncing_progress():
    return SyncProgress(current_block=50, highest_block=100, starting_block=0)


@pytest.fixture
def fake_execution_client():
    return FakeExecutionClient


@pytest.fixture
def fake_beacon_client():
    return FakeBeaconClient
