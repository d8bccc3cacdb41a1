"""
Base Model Classes

Provides base classes and mixins for all database models.
"""

from sqlalchemy import Column, DateTime
from sqlalchemy.orm import declarative_base


Base = declarative_base()


class TimestampedModel(Base):
    """Mixin for models with timestamp fields."""

    __abstract__ = True

    # Stamped by the database on every write, see GuildRepository.upsert
    updated_at = Column(
        DateTime,
        nullable=False,
        index=True
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<{self.__class__.__name__}(updated_at={self.updated_at})>"
