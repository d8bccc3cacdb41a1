"""
Upstream Error Classifier

Maps any failure from the guild fetch onto a small set of failure kinds.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Tuple

from ...core.exceptions import APIError, RegionNotSupportedError

# Checked alongside the status so an upstream error format change
# surfaces as UNEXPECTED instead of a silent not-found
NOT_FOUND_MARKER = "Not found"
DEFAULT_STATUS_CODE = 500


class FailureKind(Enum):
    """Failure kinds the refresh pipeline reacts to."""
    UNSUPPORTED_REGION = "unsupported_region"
    NOT_FOUND = "not_found"
    UNEXPECTED = "unexpected"


@dataclass(frozen=True)
class ClassifiedError:
    """Classification result."""
    kind: FailureKind
    error: BaseException
    status_code: int = DEFAULT_STATUS_CODE
    message: Optional[str] = None

    @property
    def should_report(self) -> bool:
        return self.kind is not FailureKind.NOT_FOUND


def _is_unsupported_region(error: BaseException) -> bool:
    return isinstance(error, RegionNotSupportedError)


def _is_guild_not_found(error: BaseException) -> bool:
    if not isinstance(error, APIError):
        return False
    return (
        error.status_code == 404
        and bool(error.body)
        and NOT_FOUND_MARKER in error.body
    )


# Evaluated in order, first match wins
CLASSIFICATION_RULES: Tuple[Tuple[Callable[[BaseException], bool], FailureKind], ...] = (
    (_is_unsupported_region, FailureKind.UNSUPPORTED_REGION),
    (_is_guild_not_found, FailureKind.NOT_FOUND),
)


def classify_error(error: BaseException) -> ClassifiedError:
    """
    Classify an upstream or pipeline failure.

    Args:
        error: Exception raised while fetching or normalizing a guild

    Returns:
        Classification with status code and display message
    """
    for matches, kind in CLASSIFICATION_RULES:
        if matches(error):
            return ClassifiedError(
                kind=kind,
                error=error,
                status_code=getattr(error, "status_code", None) or DEFAULT_STATUS_CODE,
            )

    body = getattr(error, "body", None)
    return ClassifiedError(
        kind=FailureKind.UNEXPECTED,
        error=error,
        status_code=getattr(error, "status_code", None) or DEFAULT_STATUS_CODE,
        message=body or str(error),
    )
