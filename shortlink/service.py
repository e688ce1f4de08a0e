"""Link registry: the business logic for creating and resolving short links."""

import asyncio
from datetime import datetime
from typing import Awaitable, Callable, List, Optional, Tuple, TypeVar

from .codegen import CodeGenerator
from .common.url_builder import build_short_url
from .common.validators import is_valid_url, is_valid_short_code
from .errors import (
    DuplicateCodeError,
    InvalidCodeError,
    InvalidURLError,
    RetriesExhaustedError,
)
from .storage.base import LinkStore
from .storage.models import Link, utcnow

T = TypeVar("T")

DEFAULT_MAX_ATTEMPTS = 5
DEFAULT_TIMEOUT_SECONDS = 3.0


class LinkRegistry:
    """Create, resolve, hit and delete short links on top of a LinkStore.

    The registry keeps no mutable state of its own. Uniqueness of codes and
    atomicity of hit counting are delegated to the store, so the same registry
    is safe to share between any number of concurrent tasks. It does no
    logging and no recovery besides the random-code collision retry; every
    other error reaches the caller unchanged.
    """

    def __init__(
        self,
        store: LinkStore,
        base_url: str,
        generator: Optional[CodeGenerator] = None,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        timeout: Optional[float] = DEFAULT_TIMEOUT_SECONDS,
        clock: Callable[[], datetime] = utcnow,
    ):
        """Initialize the registry.

        Args:
            store: Storage backend, constructed once by the caller
            base_url: Base URL short links are built on
            generator: Optional code generator (default length 7)
            max_attempts: Create attempts for random codes before giving up
            timeout: Default per-operation timeout in seconds (None disables)
            clock: Source of timezone-aware "now" timestamps
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.store = store
        self.base_url = base_url
        self.generator = generator or CodeGenerator()
        self.max_attempts = max_attempts
        self.timeout = timeout
        self.clock = clock

    async def _bounded(self, operation: Awaitable[T], timeout: Optional[float]) -> T:
        limit = self.timeout if timeout is None else timeout
        if limit is None:
            return await operation
        return await asyncio.wait_for(operation, limit)

    async def shorten(
        self,
        long_url: str,
        custom_code: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> Link:
        """Create a new short link.

        Args:
            long_url: The original long URL
            custom_code: Optional caller-chosen code (empty means none)
            timeout: Optional override of the default timeout

        Returns:
            The persisted link

        Raises:
            InvalidURLError: If long_url is not an absolute http(s) URL
            InvalidCodeError: If custom_code has an invalid format
            DuplicateCodeError: If custom_code is already taken
            RetriesExhaustedError: If every generated code collided
        """
        valid, reason = is_valid_url(long_url)
        if not valid:
            raise InvalidURLError(f"Invalid URL: {reason}", details={"url": long_url})

        if custom_code:
            valid, reason = is_valid_short_code(custom_code)
            if not valid:
                raise InvalidCodeError(f"Invalid code: {reason}", details={"code": custom_code})
            return await self._bounded(self._create(custom_code, long_url), timeout)

        return await self._bounded(self._create_random(long_url), timeout)

    async def _create(self, code: str, long_url: str) -> Link:
        now = self.clock()
        link = Link(code=code, long_url=long_url, created_at=now, updated_at=now)
        await self.store.create(link)
        return link

    async def _create_random(self, long_url: str) -> Link:
        for _ in range(self.max_attempts):
            code = self.generator.generate()
            try:
                return await self._create(code, long_url)
            except DuplicateCodeError:
                continue

        raise RetriesExhaustedError(
            f"Exceeded {self.max_attempts} attempts to create short link",
            details={"attempts": self.max_attempts},
        )

    async def resolve(self, code: str, timeout: Optional[float] = None) -> Tuple[Optional[Link], bool]:
        """Look up a link without touching its counters.

        Returns:
            Tuple of (link, found); link is None when not found
        """
        link = await self._bounded(self.store.get(code), timeout)
        return link, link is not None

    async def hit(self, code: str, timeout: Optional[float] = None) -> Link:
        """Count one access of a link and return the updated record.

        Raises:
            NotFoundError: If the code does not exist
        """
        return await self._bounded(self.store.increment_hit(code, self.clock()), timeout)

    async def delete(self, code: str, timeout: Optional[float] = None) -> None:
        """Permanently remove a link.

        Raises:
            NotFoundError: If the code does not exist
        """
        await self._bounded(self.store.delete(code), timeout)

    async def list_links(self, timeout: Optional[float] = None) -> List[Link]:
        """Return every link; order is unspecified."""
        return await self._bounded(self.store.list(), timeout)

    def short_url(self, code: str) -> str:
        """Build the absolute short URL for a code."""
        return build_short_url(code, self.base_url)

    async def health_check(self) -> bool:
        return await self.store.health_check()

    async def close(self) -> None:
        await self.store.close()
