"""
Factory for creating link stores from configuration.

Usage:
    store = create_store(config, logger)
    registry = LinkRegistry(store=store, ...)
"""

import logging
from typing import Optional

from .base import LinkStore
from .memory import MemoryStore, FileStore
from .postgres import PostgresStore


BACKENDS = ("memory", "file", "postgres")


def create_store(config, logger: Optional[logging.Logger] = None) -> LinkStore:
    """Build the store selected by ``config.storage_backend``.

    Args:
        config: Configuration instance (see config.Config)
        logger: Optional logger passed to the store

    Returns:
        A ready-to-use LinkStore

    Raises:
        ValueError: If the backend is unknown or lacks required settings
    """
    backend = config.storage_backend

    if backend == "memory":
        return MemoryStore(logger=logger)

    if backend == "file":
        return FileStore(path=config.data_file, logger=logger)

    if backend == "postgres":
        if not config.database_url:
            raise ValueError("DATABASE_URL is required for the postgres backend")
        return PostgresStore(
            db_config=config.database_url,
            pool_max_size=config.database_pool_max_size,
            create_tables=config.database_create_tables,
            logger=logger,
        )

    raise ValueError(f"Unknown storage backend: {backend!r} (expected one of {', '.join(BACKENDS)})")
