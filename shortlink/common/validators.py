"""Validation utilities for short links."""

from urllib.parse import urlparse
from typing import Tuple

from ..codegen import CODE_PATTERN, MIN_CODE_LENGTH, MAX_CODE_LENGTH, RESERVED_CODES


def is_valid_url(url: str) -> Tuple[bool, str]:
    """Validate a long URL.

    Args:
        url: The URL to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not isinstance(url, str):
        return False, "URL is required"

    # urlparse silently drops tab/CR/LF and keeps spaces in the netloc
    if any(ord(c) <= 0x20 or ord(c) == 0x7f for c in url):
        return False, "URL must not contain spaces or control characters"

    try:
        result = urlparse(url)
        # Accessing hostname/port surfaces malformed netlocs
        hostname = result.hostname
        result.port
    except ValueError as e:
        return False, f"Invalid URL format: {e}"

    # Check if scheme is http or https
    if result.scheme not in ("http", "https"):
        return False, "URL must use http or https protocol"

    # Check if host exists
    if not hostname or any(c.isspace() for c in hostname):
        return False, "URL must have a valid host"

    return True, ""


def is_valid_short_code(short_code: str) -> Tuple[bool, str]:
    """Validate a custom short code.

    Args:
        short_code: The short code to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not short_code or not isinstance(short_code, str):
        return False, "Short code is required"

    if len(short_code) < MIN_CODE_LENGTH:
        return False, f"Short code must be at least {MIN_CODE_LENGTH} characters"

    if len(short_code) > MAX_CODE_LENGTH:
        return False, f"Short code must be at most {MAX_CODE_LENGTH} characters"

    # Only allow alphanumeric characters, hyphens, and underscores
    if not CODE_PATTERN.fullmatch(short_code):
        return False, "Short code can only contain letters, numbers, hyphens, and underscores"

    if short_code in RESERVED_CODES:
        return False, f"Short code '{short_code}' is reserved"

    return True, ""
