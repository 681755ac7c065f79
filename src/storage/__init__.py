"""
Storage collaborator for extracted stat lines.
"""

from .base import StatSink
from .sqlite_store import SqliteStatStore

__all__ = ["SqliteStatStore", "StatSink"]
