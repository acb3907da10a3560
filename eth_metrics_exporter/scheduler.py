#!/usr/bin/env python3
"""
Collector Scheduler
Runs every collector loop on its own thread behind a single stop event
"""

import logging
import threading
from typing import List, Optional

from .collectors.base import Collector

logger = logging.getLogger(__name__)


class Scheduler:
    """
    One daemon thread per collector.

    Setting the stop event ends every loop once its in-flight tick has
    finished; no new tick starts afterwards.
    """

    def __init__(self, collectors: List[Collector], stop_event: Optional[threading.Event] = None):
        self.collectors = list(collectors)
        self.stop_event = stop_event or threading.Event()
        self.threads: List[threading.Thread] = []

    @property
    def running(self) -> bool:
        return any(thread.is_alive() for thread in self.threads)

    def start(self) -> None:
        if self.threads:
            raise RuntimeError("Scheduler already started")

        logger.info(f"Starting {len(self.collectors)} collector loops")
        for collector in self.collectors:
            thread = threading.Thread(
                target=collector.start,
                args=(self.stop_event,),
                name=collector.name,
                daemon=True,
            )
            thread.start()
            self.threads.append(thread)

    def stop(self, timeout: Optional[float] = None) -> bool:
        """
        Signal every loop to stop and wait for them.

        Args:
            timeout: Maximum seconds to wait for each thread

        Returns:
            True if every loop exited
        """
        self.stop_event.set()
        for thread in self.threads:
            thread.join(timeout)

        still_running = [thread.name for thread in self.threads if thread.is_alive()]
        if still_running:
            logger.warning(f"Loops still finishing a tick: {', '.join(still_running)}")
            return False

        logger.info("All collector loops stopped")
        return True

    def wait(self, poll_interval: float = 1.0) -> None:
        """Block until every loop has exited"""
        while self.running and not self.stop_event.is_set():
            self.stop_event.wait(poll_interval)
        for thread in self.threads:
            thread.join()

    def __enter__(self) -> "Scheduler":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()
