"""
eth-metrics-exporter: Prometheus exporter for Ethereum execution and beacon nodes
"""

from .capabilities import Capability, CapabilityUnsupported, probe, supported_capabilities
from .clients import BeaconClient, ExecutionClient
from .collectors import BeaconNode, DiskUsageCollector, ExecutionCollector
from .config import Config, default_config, load_config
from .exporter import Exporter, setup_logging
from .metrics import InMemorySink, MetricsSink, PrometheusSink
from .models import MetricObservation, SyncProgress, Target, TargetKind
from .scheduler import Scheduler
from .state import BeaconState, Genesis, Spec, StateLifecycle
from .sync_status import ConsensusSyncStatus, ExecutionSyncStatus, calculate_sync_percentage
from .exceptions import *
from .version import VERSION


__version__ = VERSION
__author__ = "eth-metrics-exporter contributors"

__all__ = [
    "Capability",
    "CapabilityUnsupported",
    "probe",
    "supported_capabilities",
    "BeaconClient",
    "ExecutionClient",
    "BeaconNode",
    "DiskUsageCollector",
    "ExecutionCollector",
    "Config",
    "default_config",
    "load_config",
    "Exporter",
    "setup_logging",
    "InMemorySink",
    "MetricsSink",
    "PrometheusSink",
    "MetricObservation",
    "SyncProgress",
    "Target",
    "TargetKind",
    "Scheduler",
    "BeaconState",
    "Genesis",
    "Spec",
    "StateLifecycle",
    "ConsensusSyncStatus",
    "ExecutionSyncStatus",
    "calculate_sync_percentage",
    "ExporterError",
    "QueryError",
    "CapabilityError",
    "InitializationError",
    "StateNotReadyError",
    "ValidationError"
]
