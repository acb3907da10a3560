#!/usr/bin/env python3
"""
Exporter Configuration
Node targets, polling frequency and disk usage settings loaded from YAML
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from urllib3.exceptions import LocationParseError
from urllib3.util import parse_url

from .exceptions import ValidationError

logger = logging.getLogger(__name__)


@dataclass
class NodeConfig:
    """A single execution or consensus node"""
    enabled: bool
    name: str
    url: str


@dataclass
class DiskUsageConfig:
    """Directories to report disk usage for"""
    enabled: bool = False
    directories: List[str] = field(default_factory=list)


@dataclass
class Config:
    execution: NodeConfig
    consensus: NodeConfig
    polling_frequency_seconds: int = 5
    disk_usage: DiskUsageConfig = field(default_factory=DiskUsageConfig)

    def validate(self) -> "Config":
        if self.polling_frequency_seconds <= 0:
            raise ValidationError(f"pollingFrequencySeconds must be positive, got {self.polling_frequency_seconds}")

        for role, node in (("execution", self.execution), ("consensus", self.consensus)):
            if not node.enabled:
                continue
            if not node.name:
                raise ValidationError(f"{role} node needs a name")
            _validate_url(role, node.url)

        if self.disk_usage.enabled and not self.disk_usage.directories:
            logger.warning("Disk usage enabled without any directories")

        return self


def _validate_url(role: str, url: str) -> None:
    try:
        parsed = parse_url(url)
    except LocationParseError as e:
        raise ValidationError(f"Invalid {role} url {url!r}: {e}") from e

    if parsed.scheme not in ("http", "https") or not parsed.host:
        raise ValidationError(f"Invalid {role} url {url!r}: expected http(s)://host[:port]")


def default_config() -> Config:
    return Config(
        execution=NodeConfig(enabled=True, name="execution", url="http://localhost:8545"),
        consensus=NodeConfig(enabled=True, name="consensus", url="http://localhost:5052"),
        polling_frequency_seconds=5,
        disk_usage=DiskUsageConfig(enabled=False, directories=[]),
    )


def _node_from_dict(raw: Dict[str, Any], default: NodeConfig, role: str) -> NodeConfig:
    if not isinstance(raw, dict):
        raise ValidationError(f"{role} must be a mapping")
    return NodeConfig(
        enabled=bool(raw.get("enabled", default.enabled)),
        name=str(raw.get("name", default.name)),
        url=str(raw.get("url", default.url)),
    )


def config_from_dict(raw: Optional[Dict[str, Any]]) -> Config:
    """Build a validated Config from the YAML structure, filling in defaults"""
    defaults = default_config()
    raw = raw or {}
    if not isinstance(raw, dict):
        raise ValidationError("Configuration root must be a mapping")

    disk_raw = raw.get("diskUsage") or {}
    if not isinstance(disk_raw, dict):
        raise ValidationError("diskUsage must be a mapping")

    try:
        polling = int(raw.get("pollingFrequencySeconds", defaults.polling_frequency_seconds))
    except (TypeError, ValueError) as e:
        raise ValidationError(f"pollingFrequencySeconds must be an integer: {e}") from e

    config = Config(
        execution=_node_from_dict(raw.get("execution") or {}, defaults.execution, "execution"),
        consensus=_node_from_dict(raw.get("consensus") or {}, defaults.consensus, "consensus"),
        polling_frequency_seconds=polling,
        disk_usage=DiskUsageConfig(
            enabled=bool(disk_raw.get("enabled", False)),
            directories=[str(d) for d in disk_raw.get("directories") or []],
        ),
    )
    return config.validate()


def load_config(path: str) -> Config:
    """Load and validate a YAML configuration file"""
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    try:
        with open(config_path, 'r') as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValidationError(f"Invalid YAML in {path}: {e}") from e

    logger.debug(f"Loaded configuration from {path}")
    return config_from_dict(raw)
