"""
Error classes for the link registry.

Every failure the registry defines derives from ShortLinkError. Storage and
infrastructure errors (OSError, asyncpg errors, timeouts) are not wrapped and
reach the caller unchanged.
"""

from typing import Optional, Dict, Any


class ShortLinkError(Exception):
    """
    Base error class.

    Attributes:
        message: Error message (class default, overridable per instance)
        details: Optional additional error details
    """
    message: str = "Short link error"

    def __init__(self, message: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        """
        Initialize error.

        Args:
            message: Error message (overrides default)
            details: Optional additional error details
        """
        self.message = message or self.message
        self.details = details or {}
        super().__init__(self.message)


class InvalidURLError(ShortLinkError):
    """Long URL is not an absolute http(s) URL with a host."""
    message = "Invalid URL"


class InvalidCodeError(ShortLinkError):
    """Custom code does not match the code format."""
    message = "Invalid code"


class DuplicateCodeError(ShortLinkError):
    """A link with this code already exists."""
    message = "Code already exists"


class RetriesExhaustedError(ShortLinkError):
    """Every generated code collided with an existing one."""
    message = "Exceeded retries to create short link"


class NotFoundError(ShortLinkError):
    """No link exists for the code."""
    message = "Link not found"
