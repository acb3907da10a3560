"""
Tests for the command line interface
"""

import json

from click.testing import CliRunner

from eth_metrics_exporter.cli import cli


def write_config(tmp_path, body):
    path = tmp_path / "config.yaml"
    path.write_text(body)
    return str(path)


def parse_output(result):
    lines = [line for line in result.output.splitlines() if line.startswith("{")]
    return json.loads(lines[-1])


def test_invalid_config_exits_with_error(tmp_path):
    config = write_config(tmp_path, "pollingFrequencySeconds: 0\n")

    result = CliRunner().invoke(cli, ["--mode", "once", "--config", config, "--quiet"])

    assert result.exit_code == 1
    response = parse_output(result)
    assert response["meta"]["status"] == "error"
    assert response["meta"]["operation"] == "configure"
    assert "pollingFrequencySeconds" in response["meta"]["error"]


def test_invalid_url_override(tmp_path):
    result = CliRunner().invoke(cli, ["--mode", "once", "--execution-url", "ftp://geth", "--quiet"])

    assert result.exit_code == 1
    assert parse_output(result)["meta"]["status"] == "error"


def test_once_reports_disk_usage(tmp_path):
    data_dir = tmp_path / "chaindata"
    data_dir.mkdir()
    (data_dir / "000001.ldb").write_bytes(b"x" * 2048)
    config = write_config(tmp_path, f"""
execution:
  enabled: false
consensus:
  enabled: false
diskUsage:
  enabled: true
  directories:
    - {data_dir}
""")

    result = CliRunner().invoke(cli, ["--mode", "once", "--config", config, "--quiet"])

    assert result.exit_code == 0
    response = parse_output(result)
    assert response["meta"]["status"] == "success"
    assert response["meta"]["collectors"] == {"disk-usage": {str(data_dir): "ok"}}
    assert response["data"] == [{
        "type": "gauge",
        "payload": {"name": "disk_usage_bytes", "labels": {"directory": str(data_dir)}, "value": 2048},
    }]


def test_once_with_nothing_answering(tmp_path):
    missing = tmp_path / "missing"
    config = write_config(tmp_path, f"""
execution:
  enabled: false
consensus:
  enabled: false
diskUsage:
  enabled: true
  directories:
    - {missing}
""")

    result = CliRunner().invoke(cli, ["--mode", "once", "--config", config, "--quiet"])

    assert result.exit_code == 1
    assert parse_output(result)["meta"]["status"] == "error"
