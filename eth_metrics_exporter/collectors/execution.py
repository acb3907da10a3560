#!/usr/bin/env python3
"""
Execution Collector
Polls an execution node for version, sync status and network id
"""

from typing import Any, Dict, Optional

from ..capabilities import Capability
from ..metrics import MetricsSink
from ..models import Target
from ..sync_status import ExecutionSyncStatus
from .base import NodeCollector


class ExecutionCollector(NodeCollector):
    """Collects execution node metrics on the polling frequency"""

    def __init__(self, target: Target, client: Any, sink: MetricsSink, interval: float = 5):
        super().__init__(f"execution[{target.name}]", interval, target, client, sink)
        self.sync_status: Optional[ExecutionSyncStatus] = None

    def tick(self) -> Dict[str, str]:
        return self._run_queries(self._bootstrap_queries() + [
            ("node version", self.observe_node_version),
            ("sync status", self.observe_sync_status),
            ("network id", self.observe_network_id),
        ])

    def observe_sync_status(self) -> ExecutionSyncStatus:
        progress = self._resolve(Capability.SYNC_STATUS, "sync status")()
        status = ExecutionSyncStatus.from_progress(progress)

        self.sync_status = status
        self._publish(status.observations(self.target.labels))
        return status

    def observe_network_id(self) -> int:
        network_id = self._resolve(Capability.NETWORK_ID, "network id")()
        self._set("network_id", network_id)
        return network_id
