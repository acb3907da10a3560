"""
Custom exceptions for eth-metrics-exporter
"""


class ExporterError(Exception):
    """Base exception for eth-metrics-exporter"""
    pass


class QueryError(ExporterError):
    """A query against a node failed"""

    def __init__(self, target: str, operation: str, message: str):
        self.target = target
        self.operation = operation
        super().__init__(f"Query error for {target} during {operation}: {message}")


class CapabilityError(QueryError):
    """The node does not support the requested operation"""
    pass


class InitializationError(ExporterError):
    """Beacon state could not be initialized"""

    def __init__(self, target: str, message: str):
        self.target = target
        super().__init__(f"Failed to initialize state for {target}: {message}")


class StateNotReadyError(ExporterError):
    """Spec or genesis was read before the beacon state was initialized"""
    pass


class ValidationError(ExporterError):
    """Configuration validation error"""
    pass
