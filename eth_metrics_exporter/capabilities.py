#!/usr/bin/env python3
"""
Capability Probing
Decides which optional query operations a node client supports
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, FrozenSet, Union

logger = logging.getLogger(__name__)


class Capability(str, Enum):
    """Optional query operations a node client may expose"""
    NODE_VERSION = "node_version"
    SYNC_STATUS = "sync_status"
    NETWORK_ID = "network_id"
    SPEC = "spec"
    GENESIS = "genesis"
    BEACON_BLOCK_HEADERS = "beacon_block_headers"


# Client method bound to each capability
CAPABILITY_METHODS = {
    Capability.NODE_VERSION: "node_version",
    Capability.SYNC_STATUS: "sync_progress",
    Capability.NETWORK_ID: "network_id",
    Capability.SPEC: "spec",
    Capability.GENESIS: "genesis",
    Capability.BEACON_BLOCK_HEADERS: "beacon_block_header",
}


@dataclass(frozen=True)
class CapabilityUnsupported:
    """Probe result for an operation the client does not expose"""
    capability: Capability
    client: str

    def __bool__(self) -> bool:
        return False

    def __str__(self) -> str:
        return f"{self.client} does not support {self.capability.value}"


def supported_capabilities(client: Any) -> FrozenSet[Capability]:
    """Return the capability set a client declared, empty if it declared none"""
    declared = getattr(client, "capabilities", None)
    try:
        return frozenset(declared or ())
    except TypeError:
        return frozenset()


def probe(client: Any, capability: Capability) -> Union[Callable[..., Any], CapabilityUnsupported]:
    """
    Resolve a capability on a client handle.

    Args:
        client: Node client declaring a ``capabilities`` set
        capability: Requested operation

    Returns:
        The bound client method for the operation, or a falsy
        CapabilityUnsupported value. Never raises.
    """
    client_name = getattr(client, "name", None) or type(client).__name__

    if capability not in supported_capabilities(client):
        return CapabilityUnsupported(capability, client_name)

    method = getattr(client, CAPABILITY_METHODS[capability], None)
    if not callable(method):
        logger.debug(f"{client_name} declares {capability.value} but has no {CAPABILITY_METHODS[capability]}()")
        return CapabilityUnsupported(capability, client_name)

    return method
