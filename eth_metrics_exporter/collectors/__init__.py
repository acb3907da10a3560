"""
Collectors
Polling jobs that turn node queries into gauge observations
"""

from .base import Collector, NodeCollector, OK, UNSUPPORTED, ERROR
from .execution import ExecutionCollector
from .beacon import BeaconNode, BeaconStateJob, BeaconGeneralJob, BeaconSyncJob
from .disk import DiskUsageCollector

__all__ = [
    'Collector',
    'NodeCollector',
    'ExecutionCollector',
    'BeaconNode',
    'BeaconStateJob',
    'BeaconGeneralJob',
    'BeaconSyncJob',
    'DiskUsageCollector',
    'OK',
    'UNSUPPORTED',
    'ERROR'
]
