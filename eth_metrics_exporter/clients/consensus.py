#!/usr/bin/env python3
"""
Beacon Client
Beacon node REST API queries
"""

from typing import Any, Dict, Optional, Tuple

from ..capabilities import Capability
from ..exceptions import QueryError
from ..models import HeadSync
from ..state import Genesis
from ..utils import join_url
from .base import NodeClient

# Routes that answer these statuses do not exist on the node
UNSUPPORTED_STATUSES = (404, 405, 501)

# For queries where 404 is a legitimate answer (unknown block, genesis not yet known)
MISSING_ROUTE_STATUSES = (405, 501)


class BeaconClient(NodeClient):
    """Handles REST queries against a beacon node"""

    DEFAULT_CAPABILITIES = frozenset({
        Capability.NODE_VERSION,
        Capability.SYNC_STATUS,
        Capability.SPEC,
        Capability.GENESIS,
        Capability.BEACON_BLOCK_HEADERS,
    })

    def _get_data(self, path: str, capability: Optional[Capability],
                  unsupported_statuses: Tuple[int, ...] = UNSUPPORTED_STATUSES) -> Any:
        response = self._send("GET", join_url(self.url, path), path)

        if response.status_code in unsupported_statuses:
            raise self._unsupported(capability, path, f"HTTP {response.status_code}")

        body = self._json(response, self.name, path)
        if not isinstance(body, dict) or "data" not in body:
            raise QueryError(self.name, path, f"response has no data: {str(body)[:200]}")

        return body["data"]

    def node_version(self) -> str:
        data = self._get_data("/eth/v1/node/version", Capability.NODE_VERSION)
        try:
            return str(data["version"])
        except (KeyError, TypeError) as e:
            raise QueryError(self.name, "node version", f"missing version: {e}") from e

    def sync_progress(self) -> HeadSync:
        data = self._get_data("/eth/v1/node/syncing", Capability.SYNC_STATUS)
        try:
            return HeadSync(
                head_slot=int(data["head_slot"]),
                sync_distance=int(data["sync_distance"]),
                is_syncing=bool(data["is_syncing"]),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise QueryError(self.name, "node syncing", f"invalid sync state: {e}") from e

    def spec(self) -> Dict[str, Any]:
        data = self._get_data("/eth/v1/config/spec", Capability.SPEC,
                              unsupported_statuses=MISSING_ROUTE_STATUSES)
        if not isinstance(data, dict):
            raise QueryError(self.name, "config spec", f"unexpected spec: {str(data)[:200]}")
        return data

    def genesis(self) -> Genesis:
        data = self._get_data("/eth/v1/beacon/genesis", Capability.GENESIS,
                              unsupported_statuses=MISSING_ROUTE_STATUSES)
        try:
            return Genesis.from_response(data)
        except (KeyError, TypeError, ValueError) as e:
            raise QueryError(self.name, "genesis", f"invalid genesis: {e}") from e

    def beacon_block_header(self, identifier: str) -> int:
        """Slot of the block header for ``identifier`` (head, genesis, finalized, ...)"""
        # 404 here means the block is unknown, not that the route is missing
        data = self._get_data(f"/eth/v1/beacon/headers/{identifier}", Capability.BEACON_BLOCK_HEADERS,
                              unsupported_statuses=MISSING_ROUTE_STATUSES)
        try:
            return int(data["header"]["message"]["slot"])
        except (KeyError, TypeError, ValueError) as e:
            raise QueryError(self.name, f"block header {identifier}", f"invalid header: {e}") from e
