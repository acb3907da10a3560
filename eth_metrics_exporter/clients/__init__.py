"""
Node Clients
Query clients for the node APIs the exporter monitors
"""

from .base import NodeClient
from .execution import ExecutionClient
from .consensus import BeaconClient

__all__ = [
    'NodeClient',
    'ExecutionClient',
    'BeaconClient'
]
