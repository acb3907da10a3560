#!/usr/bin/env python3
"""
Node Client Base
HTTP session handling and capability bookkeeping shared by the node clients
"""

import logging
import threading
from typing import FrozenSet, Iterable, Optional

import requests
from requests.adapters import HTTPAdapter

from ..capabilities import Capability
from ..exceptions import CapabilityError, QueryError
from ..version import VERSION

logger = logging.getLogger(__name__)

USER_AGENT = f"eth-metrics-exporter/{VERSION}"


class NodeClient:
    """Base class for node clients declaring a capability set"""

    DEFAULT_CAPABILITIES: FrozenSet[Capability] = frozenset()

    def __init__(self, name: str, url: str, timeout: int = 10,
                 capabilities: Optional[Iterable[Capability]] = None,
                 session: Optional[requests.Session] = None):
        self.name = name
        self.url = url
        self.timeout = timeout
        if capabilities is None:
            self.capabilities = self.DEFAULT_CAPABILITIES
        else:
            self.capabilities = frozenset(capabilities)
        self.session = session
        self.logger = logger
        self._bootstrap_lock = threading.Lock()

    @property
    def bootstrapped(self) -> bool:
        return self.session is not None

    def bootstrap(self) -> None:
        """Open the HTTP session used for every query"""
        with self._bootstrap_lock:
            if self.session is not None:
                return

            session = requests.Session()
            session.headers.update({
                'User-Agent': USER_AGENT,
                'Accept': 'application/json',
                'Connection': 'keep-alive'
            })
            adapter = HTTPAdapter(pool_connections=2, pool_maxsize=4, max_retries=0)
            session.mount("http://", adapter)
            session.mount("https://", adapter)
            self.session = session
            self.logger.info(f"Bootstrapped {self.name} client for {self.url}")

    def close(self) -> None:
        if self.session is not None:
            self.session.close()
            self.session = None

    def _unsupported(self, capability: Optional[Capability], operation: str, message: str) -> CapabilityError:
        """Drop a capability the node turned out not to implement"""
        if capability is not None and capability in self.capabilities:
            self.capabilities = self.capabilities - {capability}
            self.logger.warning(f"{self.name} does not implement {operation}, disabling {capability.value}")
        return CapabilityError(self.name, operation, message)

    def _send(self, method: str, url: str, operation: str, **kwargs) -> requests.Response:
        if self.session is None:
            raise QueryError(self.name, operation, "client is not bootstrapped")

        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.exceptions.Timeout as e:
            raise QueryError(self.name, operation, f"timed out after {self.timeout}s") from e
        except requests.exceptions.RequestException as e:
            raise QueryError(self.name, operation, str(e)) from e

        if response.status_code == 429:
            raise QueryError(self.name, operation, "rate limited (429)")

        return response

    @staticmethod
    def _json(response: requests.Response, target: str, operation: str):
        try:
            response.raise_for_status()
            return response.json()
        except requests.exceptions.HTTPError as e:
            raise QueryError(target, operation, f"HTTP {response.status_code}") from e
        except ValueError as e:
            raise QueryError(target, operation, f"invalid JSON response: {e}") from e
