"""
Telemetry Infrastructure

Error reporting sinks.
"""

from .error_reporter import ErrorReporter

__all__ = [
    "ErrorReporter",
]
