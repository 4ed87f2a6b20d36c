"""
Models package for HTTP Workbench.

Exports all SQLAlchemy models for database operations.
"""

from .history import History

__all__ = [
    "History",
]
