"""Storage layer for shortlink."""

from .base import LinkStore
from .models import Link
from .memory import MemoryStore, FileStore
from .postgres import PostgresStore
from .factory import create_store

__all__ = ["LinkStore", "Link", "MemoryStore", "FileStore", "PostgresStore", "create_store"]
