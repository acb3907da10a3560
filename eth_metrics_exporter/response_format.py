#!/usr/bin/env python3
"""
Standard Response Format for eth-metrics-exporter
JSON envelope printed by the one-shot collection mode
"""

import json
from datetime import datetime
from typing import Any, Dict, Iterable, List

from .collectors import OK
from .models import MetricObservation
from .version import VERSION


def _envelope(data: List[Dict[str, Any]], status: str, operation: str, **meta_fields) -> Dict[str, Any]:
    meta = {
        "status": status,
        "timestamp": datetime.now().isoformat(),
        "operation": operation,
        "total_items": len(data),
        "version": VERSION
    }
    meta.update(meta_fields)
    return {"data": data, "meta": meta}


def standard_response(
    observations: Iterable[MetricObservation],
    outcomes: Dict[str, Dict[str, str]],
    status: str = "success",
    execution_time_ms: int = 0,
    **meta_fields
) -> Dict[str, Any]:
    """
    Create the standard response for a collection pass

    Args:
        observations: Gauge values collected during the pass
        outcomes: Per-collector query outcomes
        status: success/partial/error
        execution_time_ms: Time taken for the pass
        **meta_fields: Additional metadata fields

    Returns:
        Dictionary with data/meta structure
    """
    data = [
        {
            "type": "gauge",
            "payload": {
                "name": observation.name,
                "labels": observation.labels,
                "value": observation.value
            }
        }
        for observation in observations
    ]
    return _envelope(data, status, "collect", execution_time_ms=execution_time_ms,
                     collectors=outcomes, **meta_fields)


def error_response(error_message: str, operation: str = "collect") -> Dict[str, Any]:
    """Envelope for a pass that could not run at all (bad configuration)"""
    return _envelope([], "error", operation, error=error_message, collectors={})


def pass_status(outcomes: Dict[str, Dict[str, str]]) -> str:
    """success if every query succeeded, error if none did, partial otherwise"""
    results = [result for collector in outcomes.values() for result in collector.values()]
    if results and all(result == OK for result in results):
        return "success"
    if OK in results:
        return "partial"
    return "error"


def format_json(response: Dict[str, Any], pretty: bool = False) -> str:
    """Serialize an envelope; compact unless ``pretty``"""
    if pretty:
        return json.dumps(response, indent=2, default=str)
    return json.dumps(response, separators=(',', ':'), default=str)
