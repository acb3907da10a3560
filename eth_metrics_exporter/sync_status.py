#!/usr/bin/env python3
"""
Sync Status Model
Normalizes execution and beacon node sync data into a uniform snapshot
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

from .models import HeadSync, MetricObservation, SyncProgress


def calculate_sync_percentage(current: int, starting: int, highest: int) -> float:
    """
    Percentage of the way from ``starting`` to ``highest``.

    Defined as 100 when there is nothing to sync (highest == starting) and
    clamped into [0, 100].
    """
    if highest == starting:
        return 100.0

    percent = (current - starting) / (highest - starting) * 100
    return max(0.0, min(100.0, percent))


@dataclass(frozen=True)
class ExecutionSyncStatus:
    """Sync snapshot of an execution node"""
    is_syncing: bool
    current_block: int = 0
    highest_block: int = 0
    starting_block: int = 0

    @classmethod
    def from_progress(cls, progress: Optional[SyncProgress]) -> "ExecutionSyncStatus":
        # eth_syncing answers `false` (no progress object, no error) once the
        # node has caught up; counters are meaningless in that case.
        if progress is None:
            return cls(is_syncing=False)

        return cls(
            is_syncing=True,
            current_block=progress.current_block,
            highest_block=progress.highest_block,
            starting_block=progress.starting_block,
        )

    def percent(self) -> float:
        if not self.is_syncing:
            return 100.0
        return calculate_sync_percentage(self.current_block, self.starting_block, self.highest_block)

    def observations(self, labels: Dict[str, str]) -> List[MetricObservation]:
        return [
            MetricObservation("sync_is_syncing", float(self.is_syncing), labels),
            MetricObservation("sync_current_block", float(self.current_block), labels),
            MetricObservation("sync_highest_block", float(self.highest_block), labels),
            MetricObservation("sync_starting_block", float(self.starting_block), labels),
            MetricObservation("sync_percentage", self.percent(), labels),
        ]


@dataclass(frozen=True)
class ConsensusSyncStatus:
    """Sync snapshot of a beacon node"""
    is_syncing: bool
    head_slot: int
    sync_distance: int

    @property
    def estimated_highest_slot(self) -> int:
        return self.head_slot + self.sync_distance

    @classmethod
    def from_head_sync(cls, head: HeadSync) -> "ConsensusSyncStatus":
        return cls(is_syncing=head.is_syncing, head_slot=head.head_slot, sync_distance=head.sync_distance)

    def percent(self) -> float:
        return calculate_sync_percentage(self.head_slot, 0, self.estimated_highest_slot)

    def observations(self, labels: Dict[str, str]) -> List[MetricObservation]:
        return [
            MetricObservation("sync_is_syncing", float(self.is_syncing), labels),
            MetricObservation("sync_head_slot", float(self.head_slot), labels),
            MetricObservation("sync_estimated_highest_slot", float(self.estimated_highest_slot), labels),
            MetricObservation("sync_distance", float(self.sync_distance), labels),
            MetricObservation("sync_percentage", self.percent(), labels),
        ]
