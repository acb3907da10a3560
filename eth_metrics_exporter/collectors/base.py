#!/usr/bin/env python3
"""
Collector Base
Tick loop and capability-gated query helpers shared by every collector
"""

import logging
import threading
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Iterable, List, Tuple

from ..capabilities import Capability, probe
from ..exceptions import CapabilityError, ExporterError
from ..metrics import MetricsSink
from ..models import MetricObservation, Target

logger = logging.getLogger(__name__)

OK = "ok"
UNSUPPORTED = "unsupported"
ERROR = "error"

Query = Tuple[str, Callable[[], Any]]


class Collector(ABC):
    """A unit of polling work run on a fixed interval"""

    def __init__(self, name: str, interval: float):
        self.name = name
        self.interval = interval
        self.logger = logger

    @abstractmethod
    def tick(self) -> Dict[str, str]:
        """One polling pass. Returns the outcome of each query by name."""

    def run_tick(self) -> Dict[str, str]:
        try:
            return self.tick()
        except Exception as e:
            self.logger.error(f"ERROR {self.name}: tick failed - {e}", exc_info=True)
            return {"tick": ERROR}

    def start(self, stop_event: threading.Event) -> None:
        """Tick immediately, then every ``interval`` seconds until ``stop_event`` is set"""
        self.logger.info(f"Starting {self.name} (every {self.interval}s)")
        while not stop_event.is_set():
            self.run_tick()
            if stop_event.wait(self.interval):
                break
        self.logger.info(f"Stopped {self.name}")

    def _run_queries(self, queries: Iterable[Query]) -> Dict[str, str]:
        """Run each query independently; a failing query never stops the others"""
        outcomes = {}
        for label, query in queries:
            try:
                query()
                outcomes[label] = OK
            except CapabilityError as e:
                self.logger.info(f"SKIP {self.name}: {label} unsupported - {e}")
                outcomes[label] = UNSUPPORTED
            except ExporterError as e:
                self.logger.error(f"ERROR {self.name}: failed to get {label} - {e}")
                outcomes[label] = ERROR
            except Exception as e:
                self.logger.error(f"ERROR {self.name}: unexpected failure in {label} - {e}", exc_info=True)
                outcomes[label] = ERROR
        return outcomes


class NodeCollector(Collector):
    """Collector polling a single node target"""

    def __init__(self, name: str, interval: float, target: Target, client: Any, sink: MetricsSink):
        super().__init__(name, interval)
        self.target = target
        self.client = client
        self.sink = sink

    def _resolve(self, capability: Capability, operation: str) -> Callable[..., Any]:
        handle = probe(self.client, capability)
        if not handle:
            raise CapabilityError(self.target.name, operation, str(handle))
        return handle

    def _set(self, name: str, value: float, /, **labels: str) -> None:
        self.sink.set_gauge(name, {**self.target.labels, **labels}, value)

    def _publish(self, observations: List[MetricObservation]) -> None:
        for observation in observations:
            self.sink.write(observation)

    def _bootstrap_queries(self) -> List[Query]:
        if getattr(self.client, "bootstrapped", True):
            return []
        return [("bootstrap", self.bootstrap)]

    def bootstrap(self) -> None:
        self.client.bootstrap()
        self.target.bootstrapped = True

    def observe_node_version(self) -> str:
        version = self._resolve(Capability.NODE_VERSION, "node version")()
        self._set("node_version", 1, version=version)
        return version
