"""
Database Infrastructure

Database connection and the guild cache repository.
"""

from .connection import DatabaseConnection
from .repositories import GuildRepository

__all__ = [
    "DatabaseConnection",
    "GuildRepository",
]
