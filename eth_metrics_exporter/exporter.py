#!/usr/bin/env python3
"""
Ethereum Metrics Exporter
Wires configured node targets to their collectors, the scheduler and the metrics endpoint
"""

import logging
import sys
import threading
from typing import Dict, List, Optional

from prometheus_client import start_http_server

from .clients import BeaconClient, ExecutionClient
from .collectors import BeaconNode, Collector, DiskUsageCollector, ExecutionCollector
from .config import Config
from .metrics import DEFAULT_NAMESPACE, MetricsSink, PrometheusSink
from .models import Target, TargetKind
from .scheduler import Scheduler


def setup_logging(level=logging.INFO):
    """Set up logging configuration to stderr only"""
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        stream=sys.stderr
    )


logger = logging.getLogger(__name__)

DEFAULT_METRICS_PORT = 9090


class Exporter:
    """Builds and runs the collectors for one configuration"""

    def __init__(self, config: Config, sink: Optional[MetricsSink] = None,
                 namespace: str = DEFAULT_NAMESPACE, timeout: int = 10):
        self.config = config
        self.sink = sink or PrometheusSink(namespace=namespace)
        self.timeout = timeout
        self.execution: Optional[ExecutionCollector] = None
        self.beacon: Optional[BeaconNode] = None
        self.scheduler: Optional[Scheduler] = None
        self.collectors = self._build_collectors()

    def _build_collectors(self) -> List[Collector]:
        collectors: List[Collector] = []
        polling = self.config.polling_frequency_seconds

        node = self.config.execution
        if node.enabled:
            target = Target(TargetKind.EXECUTION, node.name, node.url)
            client = ExecutionClient(node.name, node.url, timeout=self.timeout)
            self.execution = ExecutionCollector(target, client, self.sink, interval=polling)
            collectors.append(self.execution)

        node = self.config.consensus
        if node.enabled:
            target = Target(TargetKind.CONSENSUS, node.name, node.url)
            client = BeaconClient(node.name, node.url, timeout=self.timeout)
            self.beacon = BeaconNode(target, client, self.sink, polling_frequency=polling)
            collectors.extend(self.beacon.jobs)

        disk_usage = self.config.disk_usage
        if disk_usage.enabled and disk_usage.directories:
            collectors.append(DiskUsageCollector(disk_usage.directories, self.sink))

        logger.info(f"Configured collectors: {', '.join(c.name for c in collectors) or 'none'}")
        return collectors

    def run_once(self) -> Dict[str, Dict[str, str]]:
        """Tick every collector once, in order, and return their outcomes"""
        return {collector.name: collector.run_tick() for collector in self.collectors}

    def serve(self, port: int = DEFAULT_METRICS_PORT, stop_event: Optional[threading.Event] = None) -> Scheduler:
        """Expose the registry over HTTP and start every collector loop"""
        if isinstance(self.sink, PrometheusSink):
            start_http_server(port, registry=self.sink.registry)
            logger.info(f"Serving metrics on :{port}/metrics")
        else:
            logger.warning(f"{type(self.sink).__name__} has no HTTP exposition, metrics endpoint not started")

        self.scheduler = Scheduler(self.collectors, stop_event)
        self.scheduler.start()
        return self.scheduler

    def stop(self, timeout: Optional[float] = None) -> bool:
        stopped = self.scheduler.stop(timeout) if self.scheduler else True
        for collector in (self.execution, self.beacon):
            if collector is not None:
                collector.client.close()
        return stopped
