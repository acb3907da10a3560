#!/usr/bin/env python3
"""
Disk Usage Collector
Reports the size of configured data directories
"""

import os
import stat
from pathlib import Path
from typing import Dict, List

from ..metrics import MetricsSink
from .base import ERROR, OK, Collector

DISK_USAGE_INTERVAL_SECONDS = 60


def directory_size(path: str) -> int:
    """Total size in bytes of the regular files below ``path``"""
    root = Path(path)
    if not root.is_dir():
        raise FileNotFoundError(f"{path} is not a directory")

    total = 0
    for dirpath, _, filenames in os.walk(root):
        for filename in filenames:
            try:
                info = os.lstat(os.path.join(dirpath, filename))
            except OSError:
                # Files vanish while a node prunes its database
                continue
            if stat.S_ISREG(info.st_mode):
                total += info.st_size
    return total


class DiskUsageCollector(Collector):
    """Collects disk_usage_bytes per directory"""

    def __init__(self, directories: List[str], sink: MetricsSink,
                 interval: float = DISK_USAGE_INTERVAL_SECONDS):
        super().__init__("disk-usage", interval)
        self.directories = list(directories)
        self.sink = sink

    def tick(self) -> Dict[str, str]:
        outcomes = {}
        for directory in self.directories:
            try:
                size = directory_size(directory)
            except OSError as e:
                self.logger.error(f"ERROR {self.name}: cannot size {directory} - {e}")
                outcomes[directory] = ERROR
                continue

            self.sink.set_gauge("disk_usage_bytes", {"directory": directory}, size)
            outcomes[directory] = OK
        return outcomes
