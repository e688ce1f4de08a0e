"""URL building utilities for short links."""


def build_short_url(short_code: str, base_url: str) -> str:
    """Build complete short URL.

    Args:
        short_code: The short code
        base_url: Base URL (e.g., https://example.com or https://example.com/s)

    Returns:
        Complete short URL
    """
    return f"{base_url.rstrip('/')}/{short_code}"
