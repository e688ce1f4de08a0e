"""In-process link stores: a plain in-memory map and a JSON-journaled map."""

import json
import logging
import os
from datetime import datetime
from typing import Dict, List, Optional

from ..errors import DuplicateCodeError, NotFoundError
from .base import LinkStore
from .locks import ReadWriteLock
from .models import Link


class MemoryStore(LinkStore):
    """Link store kept in a dict guarded by a single reader/writer lock.

    Reads (get, list) share the lock; writes (create, delete, increment_hit)
    hold it exclusively. A write builds the new map, hands it to ``_persist``
    and only then swaps it in, with no await in between, so a cancelled call
    never leaves a half-applied mutation behind.
    """

    name = "memory"

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self._links: Dict[str, Link] = {}
        self._lock = ReadWriteLock()

    def _persist(self, links: Dict[str, Link]) -> None:
        """Make ``links`` durable before it becomes visible. No-op in memory."""

    def _commit(self, links: Dict[str, Link]) -> None:
        self._persist(links)
        self._links = links

    async def create(self, link: Link) -> None:
        async with self._lock.write():
            if link.code in self._links:
                raise DuplicateCodeError(
                    f"Code already exists: {link.code}", details={"code": link.code}
                )
            updated = dict(self._links)
            updated[link.code] = link
            self._commit(updated)
        self.logger.debug(f"Stored link {link.code}")

    async def get(self, code: str) -> Optional[Link]:
        async with self._lock.read():
            return self._links.get(code)

    async def increment_hit(self, code: str, accessed_at: datetime) -> Link:
        async with self._lock.write():
            current = self._links.get(code)
            if current is None:
                raise NotFoundError(f"Link not found: {code}", details={"code": code})
            link = current.with_hit(accessed_at)
            updated = dict(self._links)
            updated[code] = link
            self._commit(updated)
        return link

    async def delete(self, code: str) -> None:
        async with self._lock.write():
            if code not in self._links:
                raise NotFoundError(f"Link not found: {code}", details={"code": code})
            updated = dict(self._links)
            del updated[code]
            self._commit(updated)
        self.logger.debug(f"Removed link {code}")

    async def list(self) -> List[Link]:
        async with self._lock.read():
            return list(self._links.values())


class FileStore(MemoryStore):
    """MemoryStore whose every write is journaled to a JSON document.

    Layout on disk: ``{"links": {code: link_dict}}``. Each write serializes the
    full map to ``<path>.tmp``, fsyncs it and renames it over ``path`` before
    the write call returns. Journal writes are synchronous so the rename and
    the in-memory swap happen without yielding to the event loop.
    """

    name = "file"

    def __init__(self, path: str, logger: Optional[logging.Logger] = None):
        """Initialize the store, loading or creating the journal.

        Args:
            path: Journal file path (parent directories are created)
            logger: Optional logger instance

        Raises:
            OSError: If the journal cannot be read or created
            ValueError: If the journal is not valid JSON
        """
        super().__init__(logger=logger)
        self.path = path
        self._tmp_path = f"{path}.tmp"
        self._load()

    def _load(self) -> None:
        if not os.path.exists(self.path):
            directory = os.path.dirname(self.path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            self.logger.info(f"Creating link journal at {self.path}")
            self._persist({})
            return

        with open(self.path, "r", encoding="utf-8") as f:
            content = f.read()

        if not content.strip():
            self._persist({})
            return

        document = json.loads(content)
        raw_links = document.get("links") or {}
        self._links = {code: Link.from_dict(data) for code, data in raw_links.items()}
        self.logger.info(f"Loaded {len(self._links)} links from {self.path}")

    def _persist(self, links: Dict[str, Link]) -> None:
        document = {"links": {code: link.to_dict() for code, link in links.items()}}
        try:
            with open(self._tmp_path, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(self._tmp_path, self.path)
        except OSError:
            if os.path.exists(self._tmp_path):
                os.unlink(self._tmp_path)
            raise
