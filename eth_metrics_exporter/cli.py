#!/usr/bin/env python3
"""
eth-metrics-exporter CLI Interface
"""

import click
import logging
import sys
import time

from .config import default_config, load_config
from .exceptions import ValidationError
from .exporter import DEFAULT_METRICS_PORT, Exporter, setup_logging
from .metrics import DEFAULT_NAMESPACE, InMemorySink
from .response_format import error_response, format_json, pass_status, standard_response


@click.command()
@click.option('--mode', type=click.Choice(['serve', 'once']), default='serve',
              help='serve (expose metrics and poll forever) or once (collect a single pass and print it as JSON)')
@click.option('--config', 'config_path', type=click.Path(exists=True), help='YAML configuration file')
@click.option('--execution-url', help='Execution node JSON-RPC url (overrides config)')
@click.option('--consensus-url', help='Beacon node REST url (overrides config)')
@click.option('--polling-frequency', type=int, help='Polling frequency in seconds (overrides config)')
@click.option('--metrics-port', type=int, default=DEFAULT_METRICS_PORT, help='Port to serve Prometheus metrics on')
@click.option('--namespace', default=DEFAULT_NAMESPACE, help='Prefix for every metric name')
@click.option('--timeout', type=int, default=10, help='Request timeout in seconds')
@click.option('--pretty', is_flag=True, help='Pretty-print JSON output (default: compact)')
@click.option('--debug', is_flag=True, help='Enable debug logging')
@click.option('--quiet', is_flag=True, help='Suppress output except results')
def cli(mode, config_path, execution_url, consensus_url, polling_frequency, metrics_port, namespace,
        timeout, pretty, debug, quiet):
    """Ethereum execution and beacon node metrics exporter"""

    # Set up logging
    if debug:
        setup_logging(logging.DEBUG)
    elif quiet:
        setup_logging(logging.ERROR)
    else:
        setup_logging(logging.INFO)

    try:
        config = load_config(config_path) if config_path else default_config()

        if execution_url:
            config.execution.url = execution_url
        if consensus_url:
            config.consensus.url = consensus_url
        if polling_frequency is not None:
            config.polling_frequency_seconds = polling_frequency

        config.validate()
    except (ValidationError, FileNotFoundError) as e:
        click.echo(format_json(error_response(str(e), operation="configure"), pretty))
        if not quiet:
            click.echo(f"Invalid configuration: {e}", err=True)
        sys.exit(1)

    if mode == 'once':
        sink = InMemorySink()
        exporter = Exporter(config, sink=sink, timeout=timeout)

        start_time = time.time()
        outcomes = exporter.run_once()
        exporter.stop()
        elapsed_ms = int((time.time() - start_time) * 1000)

        status = pass_status(outcomes)
        response = standard_response(sink.observations(), outcomes, status=status,
                                     execution_time_ms=elapsed_ms, namespace=namespace)
        click.echo(format_json(response, pretty))

        if status == "error":
            if not quiet:
                click.echo("No node answered any query", err=True)
            sys.exit(1)
        return

    exporter = Exporter(config, namespace=namespace, timeout=timeout)
    scheduler = exporter.serve(metrics_port)

    if not quiet:
        click.echo(f"Serving metrics on :{metrics_port}/metrics (Ctrl+C to stop)", err=True)

    try:
        scheduler.wait()
    except KeyboardInterrupt:
        if not quiet:
            click.echo("Shutting down, waiting for in-flight ticks...", err=True)
    finally:
        exporter.stop(timeout=timeout)


if __name__ == '__main__':
    cli()
