"""Abstract base class for link storage backends.

Backends are passive durable maps keyed by code. The registry relies on two
guarantees every implementation must provide:

* ``create`` is a single atomic insert-if-absent. A taken code raises
  DuplicateCodeError; there is never a separate existence check.
* ``increment_hit`` is an atomic read-modify-write (or an atomic increment
  expression) relative to concurrent calls on the same code.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from .models import Link


class LinkStore(ABC):
    """Abstract base class for link storage operations."""

    #: Short backend name reported by health endpoints
    name: str = "abstract"

    @abstractmethod
    async def create(self, link: Link) -> None:
        """Insert a new link.

        Args:
            link: Fully stamped link record

        Raises:
            DuplicateCodeError: If a link with the same code exists
        """

    @abstractmethod
    async def get(self, code: str) -> Optional[Link]:
        """Look up a link by code.

        Args:
            code: The code to lookup

        Returns:
            The link if found, None otherwise
        """

    @abstractmethod
    async def increment_hit(self, code: str, accessed_at: datetime) -> Link:
        """Atomically add one hit and set the access timestamps.

        Args:
            code: The code to update
            accessed_at: Value for last_access_at and updated_at

        Returns:
            The updated link

        Raises:
            NotFoundError: If the code does not exist
        """

    @abstractmethod
    async def delete(self, code: str) -> None:
        """Remove a link permanently.

        Args:
            code: The code to delete

        Raises:
            NotFoundError: If the code does not exist
        """

    @abstractmethod
    async def list(self) -> List[Link]:
        """Return every stored link, in no particular order."""

    async def health_check(self) -> bool:
        """Check if the backend is usable."""
        return True

    async def close(self) -> None:
        """Release backend resources."""
