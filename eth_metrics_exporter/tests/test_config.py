"""
Tests for configuration loading and validation
"""

import pytest

from eth_metrics_exporter.config import config_from_dict, default_config, load_config
from eth_metrics_exporter.exceptions import ValidationError

CONFIG_YAML = """
execution:
  enabled: true
  name: geth-1
  url: http://geth:8545
consensus:
  enabled: true
  name: lighthouse-1
  url: https://lighthouse:5052
pollingFrequencySeconds: 10
diskUsage:
  enabled: true
  directories:
    - /data/geth
    - /data/lighthouse
"""


def test_defaults():
    config = default_config().validate()

    assert config.execution.url == "http://localhost:8545"
    assert config.consensus.url == "http://localhost:5052"
    assert config.polling_frequency_seconds == 5
    assert not config.disk_usage.enabled


def test_load_yaml(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(CONFIG_YAML)

    config = load_config(str(path))

    assert config.execution.name == "geth-1"
    assert config.consensus.url == "https://lighthouse:5052"
    assert config.polling_frequency_seconds == 10
    assert config.disk_usage.directories == ["/data/geth", "/data/lighthouse"]


def test_partial_document_uses_defaults():
    config = config_from_dict({"execution": {"url": "http://10.0.0.2:8545"}})

    assert config.execution.enabled
    assert config.execution.name == "execution"
    assert config.execution.url == "http://10.0.0.2:8545"
    assert config.consensus.url == "http://localhost:5052"


def test_empty_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("")

    assert load_config(str(path)) == default_config()


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "missing.yaml"))


def test_invalid_yaml(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("execution: [unclosed")

    with pytest.raises(ValidationError, match="Invalid YAML"):
        load_config(str(path))


@pytest.mark.parametrize("raw", [
    {"pollingFrequencySeconds": 0},
    {"pollingFrequencySeconds": "often"},
    {"execution": {"url": "ftp://geth:8545"}},
    {"consensus": {"url": "localhost"}},
    {"consensus": {"name": ""}},
    {"execution": "geth"},
    ["not", "a", "mapping"],
])
def test_invalid_values(raw):
    with pytest.raises(ValidationError):
        config_from_dict(raw)


def test_disabled_node_is_not_validated():
    config = config_from_dict({"execution": {"enabled": False, "url": "nonsense"}})

    assert not config.execution.enabled
