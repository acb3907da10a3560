#!/usr/bin/env python3
"""
Exporter Data Models
Data structures shared by the node clients, collectors and metrics sinks
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict


class TargetKind(str, Enum):
    """Role of a monitored node"""
    EXECUTION = "execution"
    CONSENSUS = "consensus"


@dataclass
class Target:
    """Identity of a monitored node"""
    kind: TargetKind
    name: str
    url: str
    bootstrapped: bool = False

    @property
    def labels(self) -> Dict[str, str]:
        """Constant labels carried by every gauge of this target"""
        return {"ethereum_role": self.kind.value, "node_name": self.name}


@dataclass(frozen=True)
class SyncProgress:
    """Raw sync progress as reported by an execution node while syncing"""
    current_block: int
    highest_block: int
    starting_block: int = 0


@dataclass(frozen=True)
class HeadSync:
    """Raw sync state as reported by a beacon node"""
    head_slot: int
    sync_distance: int
    is_syncing: bool


@dataclass(frozen=True)
class MetricObservation:
    """A single gauge write"""
    name: str
    value: float
    labels: Dict[str, str] = field(default_factory=dict)

    @property
    def key(self):
        return (self.name, tuple(sorted(self.labels.items())))
