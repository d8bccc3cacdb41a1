"""
Core Model Definitions

Base models and mixins for the application.
"""

from .base import Base, TimestampedModel

__all__ = [
    "Base",
    "TimestampedModel",
]
