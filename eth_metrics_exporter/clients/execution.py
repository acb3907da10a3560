#!/usr/bin/env python3
"""
Execution Client
JSON-RPC queries against an execution node
"""

import itertools
from typing import Any, List, Optional

from ..capabilities import Capability
from ..exceptions import QueryError
from ..models import SyncProgress
from ..utils import hex_to_int
from .base import NodeClient

METHOD_NOT_FOUND = -32601


class ExecutionClient(NodeClient):
    """Handles JSON-RPC queries against an execution node"""

    DEFAULT_CAPABILITIES = frozenset({
        Capability.NODE_VERSION,
        Capability.SYNC_STATUS,
        Capability.NETWORK_ID,
    })

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._ids = itertools.count(1)

    def _rpc_call(self, method: str, params: Optional[List] = None,
                  capability: Optional[Capability] = None) -> Any:
        payload = {
            "jsonrpc": "2.0",
            "method": method,
            "params": params or [],
            "id": next(self._ids)
        }
        response = self._send("POST", self.url, method, json=payload)
        body = self._json(response, self.name, method)

        if not isinstance(body, dict):
            raise QueryError(self.name, method, f"unexpected response: {str(body)[:200]}")

        if "error" in body:
            error = body["error"]
            if isinstance(error, dict) and error.get("code") == METHOD_NOT_FOUND:
                raise self._unsupported(capability, method, error.get("message", "method not found"))
            raise QueryError(self.name, method, f"RPC error: {error}")

        return body.get("result")

    def node_version(self) -> str:
        return str(self._rpc_call("web3_clientVersion", capability=Capability.NODE_VERSION))

    def sync_progress(self) -> Optional[SyncProgress]:
        """
        Current sync progress.

        Returns:
            SyncProgress while syncing, None when eth_syncing answers false
            (the node is caught up)
        """
        result = self._rpc_call("eth_syncing", capability=Capability.SYNC_STATUS)
        if result is False or result is None:
            return None

        if not isinstance(result, dict):
            raise QueryError(self.name, "eth_syncing", f"unexpected result: {result!r}")

        try:
            return SyncProgress(
                current_block=hex_to_int(result.get("currentBlock")),
                highest_block=hex_to_int(result.get("highestBlock")),
                starting_block=hex_to_int(result.get("startingBlock")),
            )
        except (TypeError, ValueError) as e:
            raise QueryError(self.name, "eth_syncing", f"invalid sync progress: {e}") from e

    def network_id(self) -> int:
        result = self._rpc_call("net_version", capability=Capability.NETWORK_ID)
        try:
            return hex_to_int(result)
        except (TypeError, ValueError) as e:
            raise QueryError(self.name, "net_version", f"invalid network id {result!r}") from e
