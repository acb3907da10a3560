#!/usr/bin/env python3
"""
Metrics Sinks
Write-only destinations for labeled gauge observations
"""

import logging
import threading
from abc import ABC, abstractmethod
from typing import Dict, Optional, Tuple

from prometheus_client import CollectorRegistry, Gauge, generate_latest

from .models import MetricObservation

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = "eth"

GAUGE_HELP = {
    "node_version": "The version of the running node.",
    "network_id": "The network id of the node.",
    "slot_number": "The slot number of the beacon chain.",
    "sync_is_syncing": "1 if the node is in syncing state.",
    "sync_percentage": "How synced the node is with the network (0-100%).",
    "sync_current_block": "The current block number of the node.",
    "sync_highest_block": "The highest block number known to the node.",
    "sync_starting_block": "The block number the node started syncing from.",
    "sync_head_slot": "The current slot of the beacon node.",
    "sync_estimated_highest_slot": "The estimated highest slot of the network.",
    "sync_distance": "The sync distance of the beacon node.",
    "genesis_time": "The genesis time of the beacon chain (unix seconds).",
    "wallclock_slot": "The slot the beacon chain should be at according to the wall clock.",
    "wallclock_epoch": "The epoch the beacon chain should be at according to the wall clock.",
    "disk_usage_bytes": "How large a directory is (in bytes).",
}


class MetricsSink(ABC):
    """Destination for gauge observations. Writes are last-write-wins."""

    @abstractmethod
    def set_gauge(self, name: str, labels: Dict[str, str], value: float) -> None:
        pass

    def write(self, observation: MetricObservation) -> None:
        self.set_gauge(observation.name, observation.labels, observation.value)


class PrometheusSink(MetricsSink):
    """
    Sink backed by a dedicated prometheus_client registry.

    Gauges are created on first write; every later write to the same name
    must use the same label keys.
    """

    def __init__(self, namespace: str = DEFAULT_NAMESPACE, registry: Optional[CollectorRegistry] = None):
        self.namespace = namespace
        self.registry = registry or CollectorRegistry()
        self._gauges: Dict[str, Tuple[Gauge, Tuple[str, ...]]] = {}
        self._lock = threading.Lock()

    def _gauge(self, name: str, label_names: Tuple[str, ...]) -> Gauge:
        with self._lock:
            entry = self._gauges.get(name)
            if entry is None:
                gauge = Gauge(
                    name,
                    GAUGE_HELP.get(name, f"The {name.replace('_', ' ')} value."),
                    labelnames=label_names,
                    namespace=self.namespace,
                    registry=self.registry,
                )
                self._gauges[name] = (gauge, label_names)
                logger.debug(f"Registered gauge {self.namespace}_{name} {list(label_names)}")
                return gauge

        gauge, registered = entry
        if registered != label_names:
            raise ValueError(f"Gauge {name} registered with labels {list(registered)}, got {list(label_names)}")
        return gauge

    def set_gauge(self, name: str, labels: Dict[str, str], value: float) -> None:
        label_names = tuple(sorted(labels))
        gauge = self._gauge(name, label_names)
        if label_names:
            gauge.labels(**labels).set(value)
        else:
            gauge.set(value)

    def get(self, name: str, labels: Dict[str, str]) -> Optional[float]:
        """Read back a value from the registry"""
        return self.registry.get_sample_value(f"{self.namespace}_{name}", labels)

    def exposition(self) -> bytes:
        """Registry contents in Prometheus text format"""
        return generate_latest(self.registry)


class InMemorySink(MetricsSink):
    """Sink that keeps the last value per (name, labels)"""

    def __init__(self):
        self._values: Dict[tuple, MetricObservation] = {}
        self._lock = threading.Lock()

    def set_gauge(self, name: str, labels: Dict[str, str], value: float) -> None:
        observation = MetricObservation(name=name, value=float(value), labels=dict(labels))
        with self._lock:
            self._values[observation.key] = observation

    def get(self, name: str, labels: Dict[str, str]) -> Optional[float]:
        with self._lock:
            observation = self._values.get((name, tuple(sorted(labels.items()))))
        return observation.value if observation else None

    def observations(self):
        with self._lock:
            return sorted(self._values.values(), key=lambda o: o.key)

    def names(self):
        with self._lock:
            return {observation.name for observation in self._values.values()}
