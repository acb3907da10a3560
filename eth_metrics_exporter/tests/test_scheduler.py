"""
Tests for the collector loops and their cancellation
"""

import threading
import time

import pytest

from eth_metrics_exporter.collectors.base import OK, Collector
from eth_metrics_exporter.scheduler import Scheduler


class CountingCollector(Collector):
    """Counts ticks; optionally blocks inside a tick until released"""

    def __init__(self, interval, release=None, fail_first=False):
        super().__init__("counting", interval)
        self.release = release
        self.fail_first = fail_first
        self.ticks = 0
        self.finished = 0
        self.entered = threading.Event()

    def tick(self):
        self.ticks += 1
        self.entered.set()
        if self.fail_first and self.ticks == 1:
            raise RuntimeError("first tick fails")
        if self.release is not None:
            self.release.wait(5)
        self.finished += 1
        return {"count": OK}


def wait_until(predicate, timeout=5.0):
    deadline = time.time() + timeout
    while time.time() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return False


class TestCollectorLoop:
    def test_first_tick_is_immediate(self):
        collector = CountingCollector(interval=60)
        scheduler = Scheduler([collector])

        scheduler.start()
        assert collector.entered.wait(2)
        assert scheduler.stop(timeout=2)

        assert collector.ticks == 1

    def test_ticks_repeat_on_interval(self):
        collector = CountingCollector(interval=0.01)

        with Scheduler([collector]):
            assert wait_until(lambda: collector.ticks >= 3)

    def test_cancelled_before_start(self):
        collector = CountingCollector(interval=0.01)
        stop_event = threading.Event()
        stop_event.set()

        collector.start(stop_event)

        assert collector.ticks == 0

    def test_failed_tick_waits_for_next_interval(self):
        collector = CountingCollector(interval=0.01, fail_first=True)

        with Scheduler([collector]):
            assert wait_until(lambda: collector.finished >= 1)

        assert collector.ticks >= 2


class TestCancellation:
    def test_no_new_tick_after_stop(self):
        collector = CountingCollector(interval=0.01)
        scheduler = Scheduler([collector])
        scheduler.start()
        assert wait_until(lambda: collector.ticks >= 2)

        assert scheduler.stop(timeout=2)
        ticks = collector.ticks
        time.sleep(0.1)

        assert collector.ticks == ticks
        assert not scheduler.running

    def test_in_flight_tick_finishes(self):
        release = threading.Event()
        collector = CountingCollector(interval=0.01, release=release)
        scheduler = Scheduler([collector])
        scheduler.start()
        assert collector.entered.wait(2)

        # Still inside the first tick
        assert scheduler.stop(timeout=0.05) is False

        release.set()
        scheduler.wait()

        assert collector.ticks == 1
        assert collector.finished == 1

    def test_single_event_stops_every_loop(self):
        collectors = [CountingCollector(interval=0.01), CountingCollector(interval=60), CountingCollector(interval=1)]
        scheduler = Scheduler(collectors)
        scheduler.start()
        assert wait_until(lambda: all(c.ticks >= 1 for c in collectors))

        scheduler.stop_event.set()
        scheduler.wait()

        assert not any(thread.is_alive() for thread in scheduler.threads)

    def test_start_twice(self):
        scheduler = Scheduler([CountingCollector(interval=60)])
        scheduler.start()
        try:
            with pytest.raises(RuntimeError):
                scheduler.start()
        finally:
            scheduler.stop(timeout=2)
