#!/usr/bin/env python3
"""
Beacon Collectors
State bootstrapping, general and sync jobs for a beacon node
"""

import functools
from typing import Any, Dict, List, Optional

from ..capabilities import Capability
from ..exceptions import InitializationError
from ..metrics import MetricsSink
from ..models import Target
from ..state import BeaconState
from ..sync_status import ConsensusSyncStatus
from .base import ERROR, OK, Collector, NodeCollector

STATE_INTERVAL_SECONDS = 1
GENERAL_INTERVAL_SECONDS = 15

BLOCK_IDENTIFIERS = ("head", "genesis", "finalized")

# Numeric spec parameters exported as one gauge each
SPEC_GAUGES = (
    "safe_slots_to_update_justified",
    "deposit_chain_id",
    "max_validators_per_committee",
    "seconds_per_eth1_block",
    "base_reward_factor",
    "epochs_per_sync_committee_period",
    "effective_balance_increment",
    "max_attestations",
    "min_sync_committee_participants",
    "genesis_delay",
    "seconds_per_slot",
    "max_effective_balance",
    "terminal_total_difficulty",
    "max_deposits",
    "min_genesis_active_validator_count",
    "target_committee_size",
    "sync_committee_size",
    "eth1_follow_distance",
    "terminal_block_hash_activation_epoch",
    "min_deposit_amount",
    "slots_per_epoch",
)


class BeaconStateJob(NodeCollector):
    """
    Initializes the beacon state and, once ready, tracks wall-clock slots.

    Spec gauges are published once, on the tick that initialization succeeds.
    """

    def __init__(self, target: Target, client: Any, sink: MetricsSink, state: BeaconState,
                 interval: float = STATE_INTERVAL_SECONDS):
        super().__init__(f"beacon-state[{target.name}]", interval, target, client, sink)
        self.state = state

    def tick(self) -> Dict[str, str]:
        outcomes = self._run_queries(self._bootstrap_queries())

        if not self.state.is_ready:
            try:
                initialized = self.state.initialize()
            except InitializationError as e:
                self.logger.error(f"ERROR {self.name}: {e}")
                outcomes["initialize"] = ERROR
                return outcomes

            if not initialized:
                return outcomes

            outcomes["initialize"] = OK
            outcomes.update(self._run_queries([("spec", self.publish_spec)]))

        outcomes.update(self._run_queries([("wallclock", self.observe_wallclock)]))
        return outcomes

    def publish_spec(self) -> None:
        spec = self.state.spec
        for name in SPEC_GAUGES:
            value = spec.get(name.upper())
            if isinstance(value, int):
                self._set(name, value)

        if spec.config_name:
            self._set("config_name", 1, name=spec.config_name)
        if spec.preset_base:
            self._set("preset_base", 1, preset=spec.preset_base)
        if spec.deposit_network_id is not None:
            self._set("network_id", spec.deposit_network_id)

        self._set("genesis_time", self.state.genesis.genesis_time)

    def observe_wallclock(self) -> None:
        slot = self.state.slot_at()
        self._set("wallclock_slot", slot)
        self._set("wallclock_epoch", self.state.epoch_for_slot(slot))


class BeaconGeneralJob(NodeCollector):
    """Node version and block header slots"""

    def __init__(self, target: Target, client: Any, sink: MetricsSink, state: BeaconState,
                 interval: float = GENERAL_INTERVAL_SECONDS):
        super().__init__(f"beacon-general[{target.name}]", interval, target, client, sink)
        self.state = state

    def tick(self) -> Dict[str, str]:
        queries = [("node version", self.observe_node_version)]
        for identifier in BLOCK_IDENTIFIERS:
            queries.append((f"beacon slot {identifier}", functools.partial(self.observe_slot, identifier)))
        return self._run_queries(self._bootstrap_queries() + queries)

    def observe_slot(self, identifier: str) -> int:
        slot = self._resolve(Capability.BEACON_BLOCK_HEADERS, f"beacon slot {identifier}")(identifier)
        self._set("slot_number", slot, identifier=identifier)

        if self.state.is_ready:
            self.state.observe_slot(identifier, slot)
            self._set("epoch_number", self.state.epoch_for_slot(slot), identifier=identifier)

        return slot


class BeaconSyncJob(NodeCollector):
    """Beacon node sync status"""

    def __init__(self, target: Target, client: Any, sink: MetricsSink, interval: float = 5):
        super().__init__(f"beacon-sync[{target.name}]", interval, target, client, sink)
        self.sync_status: Optional[ConsensusSyncStatus] = None

    def tick(self) -> Dict[str, str]:
        return self._run_queries(self._bootstrap_queries() + [
            ("sync status", self.observe_sync_status),
        ])

    def observe_sync_status(self) -> ConsensusSyncStatus:
        head = self._resolve(Capability.SYNC_STATUS, "sync status")()
        status = ConsensusSyncStatus.from_head_sync(head)

        self.sync_status = status
        self._publish(status.observations(self.target.labels))
        return status


class BeaconNode:
    """A beacon target with its state and the jobs polling it"""

    def __init__(self, target: Target, client: Any, sink: MetricsSink, polling_frequency: float = 5,
                 state_interval: float = STATE_INTERVAL_SECONDS,
                 general_interval: float = GENERAL_INTERVAL_SECONDS):
        self.target = target
        self.client = client
        self.state = BeaconState(client, target.name)
        self.state_job = BeaconStateJob(target, client, sink, self.state, interval=state_interval)
        self.general_job = BeaconGeneralJob(target, client, sink, self.state, interval=general_interval)
        self.sync_job = BeaconSyncJob(target, client, sink, interval=polling_frequency)

    @property
    def jobs(self) -> List[Collector]:
        # State first so a single pass initializes before the dependent jobs run
        return [self.state_job, self.general_job, self.sync_job]
