#!/usr/bin/env python3
"""
Beacon State
Chain spec and genesis of a beacon node, fetched once before steady-state polling
"""

import logging
import threading
import time
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Dict, Optional

from .capabilities import Capability, probe
from .exceptions import InitializationError, QueryError, StateNotReadyError
from .utils import parse_spec_value

logger = logging.getLogger(__name__)


class Spec(Mapping):
    """Read-only view of the consensus chain parameters"""

    def __init__(self, data: Dict[str, Any]):
        self._data = MappingProxyType({key: parse_spec_value(value) for key, value in data.items()})

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self):
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def _int(self, key: str) -> Optional[int]:
        value = self._data.get(key)
        return value if isinstance(value, int) else None

    @property
    def seconds_per_slot(self) -> Optional[int]:
        return self._int("SECONDS_PER_SLOT")

    @property
    def slots_per_epoch(self) -> Optional[int]:
        return self._int("SLOTS_PER_EPOCH")

    @property
    def deposit_network_id(self) -> Optional[int]:
        return self._int("DEPOSIT_NETWORK_ID")

    @property
    def config_name(self) -> Optional[str]:
        return self._data.get("CONFIG_NAME")

    @property
    def preset_base(self) -> Optional[str]:
        return self._data.get("PRESET_BASE")


@dataclass(frozen=True)
class Genesis:
    """Origin parameters of the beacon chain"""
    genesis_time: int
    genesis_validators_root: str
    genesis_fork_version: str

    @classmethod
    def from_response(cls, data: Dict[str, Any]) -> "Genesis":
        return cls(
            genesis_time=int(data["genesis_time"]),
            genesis_validators_root=data["genesis_validators_root"],
            genesis_fork_version=data["genesis_fork_version"],
        )


class StateLifecycle(str, Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"


class BeaconState:
    """
    Spec and genesis of one beacon node.

    Both are published together once ``initialize()`` succeeds; a failed
    attempt keeps nothing, so the next attempt starts from scratch. READY is
    terminal for the lifetime of the exporter.
    """

    def __init__(self, client: Any, target_name: str, clock: Callable[[], float] = time.time):
        self.client = client
        self.target_name = target_name
        self.clock = clock
        self._lock = threading.Lock()
        self._status = StateLifecycle.UNINITIALIZED
        self._spec: Optional[Spec] = None
        self._genesis: Optional[Genesis] = None
        self._slots: Dict[str, int] = {}

    @property
    def status(self) -> StateLifecycle:
        return self._status

    @property
    def is_ready(self) -> bool:
        return self._status is StateLifecycle.READY

    @property
    def spec(self) -> Spec:
        if not self.is_ready:
            raise StateNotReadyError(f"Spec of {self.target_name} requested before initialization")
        return self._spec

    @property
    def genesis(self) -> Genesis:
        if not self.is_ready:
            raise StateNotReadyError(f"Genesis of {self.target_name} requested before initialization")
        return self._genesis

    def initialize(self) -> bool:
        """
        Fetch spec then genesis and mark the state ready.

        Returns:
            True if this call made the state ready, False if it was already
            ready or another initialization is in progress.

        Raises:
            InitializationError: spec or genesis could not be fetched
        """
        if not self._lock.acquire(blocking=False):
            logger.debug(f"Initialization of {self.target_name} already in progress")
            return False

        try:
            if self.is_ready:
                return False

            self._status = StateLifecycle.INITIALIZING
            logger.info(f"Initializing beacon state for {self.target_name}")

            spec = Spec(self._fetch(Capability.SPEC))
            genesis = self._fetch(Capability.GENESIS)

            self._spec = spec
            self._genesis = genesis
            self._status = StateLifecycle.READY
            logger.info(f"Beacon state for {self.target_name} ready (genesis time {genesis.genesis_time})")
            return True
        finally:
            if self._status is StateLifecycle.INITIALIZING:
                self._status = StateLifecycle.UNINITIALIZED
            self._lock.release()

    def _fetch(self, capability: Capability) -> Any:
        handle = probe(self.client, capability)
        if not handle:
            raise InitializationError(self.target_name, str(handle))

        try:
            return handle()
        except QueryError as e:
            raise InitializationError(self.target_name, str(e)) from e

    def slot_at(self, timestamp: Optional[float] = None) -> int:
        """Slot the chain should be at by wall clock"""
        if timestamp is None:
            timestamp = self.clock()

        seconds_per_slot = self.spec.seconds_per_slot
        if not seconds_per_slot:
            raise StateNotReadyError(f"Spec of {self.target_name} has no SECONDS_PER_SLOT")

        elapsed = timestamp - self.genesis.genesis_time
        if elapsed < 0:
            return 0
        return int(elapsed // seconds_per_slot)

    def epoch_for_slot(self, slot: int) -> int:
        slots_per_epoch = self.spec.slots_per_epoch
        if not slots_per_epoch:
            raise StateNotReadyError(f"Spec of {self.target_name} has no SLOTS_PER_EPOCH")
        return slot // slots_per_epoch

    def observe_slot(self, identifier: str, slot: int) -> None:
        """Track the latest slot seen for a block identifier (head, finalized, ...)"""
        if not self.is_ready:
            raise StateNotReadyError(f"Slot tracking for {self.target_name} requires an initialized state")
        self._slots[identifier] = slot

    def observed_slots(self) -> Dict[str, int]:
        return dict(self._slots)
