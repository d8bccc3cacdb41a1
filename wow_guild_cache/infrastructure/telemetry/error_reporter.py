"""
Error reporting and analytics
"""

import logging
import time
from typing import Optional, Dict, Any, List

from ...core.exceptions import WoWGuildError
from ...core.protocols import ErrorReporterProtocol

logger = logging.getLogger(__name__)


class ErrorReporter(ErrorReporterProtocol):
    """In-process error telemetry: counts and a bounded recent-error log."""

    def __init__(self, max_recent_errors: int = 100):
        self.error_counts: Dict[str, int] = {}
        self.recent_errors: List[Dict[str, Any]] = []
        self.max_recent_errors = max_recent_errors

    @property
    def total_reported(self) -> int:
        return sum(self.error_counts.values())

    def report(
        self,
        error: BaseException,
        context: Optional[Dict[str, Any]] = None
    ) -> None:
        """Report an error for analytics. Never raises."""
        error_type = error.__class__.__name__
        message = error.message if isinstance(error, WoWGuildError) else str(error)

        self.error_counts[error_type] = self.error_counts.get(error_type, 0) + 1

        error_record = {
            "timestamp": time.time(),
            "error_type": error_type,
            "message": message[:500],
            "details": error.details if isinstance(error, WoWGuildError) else {},
            "context": context or {}
        }

        self.recent_errors.append(error_record)

        # Keep only recent errors
        if len(self.recent_errors) > self.max_recent_errors:
            self.recent_errors = self.recent_errors[-self.max_recent_errors:]

        logger.error(
            f"Error reported: {error_type} - {message[:200]}",
            exc_info=(type(error), error, error.__traceback__)
        )

    def get_error_stats(self) -> Dict[str, Any]:
        """Get error statistics"""
        return {
            "total_errors": self.total_reported,
            "error_counts": self.error_counts.copy(),
            "recent_errors": self.recent_errors[-10:],  # Last 10 errors
            "most_common_errors": sorted(
                self.error_counts.items(),
                key=lambda x: x[1],
                reverse=True
            )[:5]
        }
