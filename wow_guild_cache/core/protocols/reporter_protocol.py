"""
Error Reporter Protocol Definition

Defines the interface for error telemetry sinks.
"""

from typing import Protocol, Optional, Dict, Any, runtime_checkable


@runtime_checkable
class ErrorReporterProtocol(Protocol):
    """Protocol for fire-and-forget error reporting."""

    def report(
        self,
        error: BaseException,
        context: Optional[Dict[str, Any]] = None
    ) -> None:
        """
        Record an error occurrence.

        Args:
            error: The exception to record
            context: Optional request context
        """
        ...
