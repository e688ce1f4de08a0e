"""Common utilities for shortlink."""

from .validators import is_valid_url, is_valid_short_code
from .url_builder import build_short_url
from .logging_config import setup_logging, get_logger

__all__ = [
    "is_valid_url",
    "is_valid_short_code",
    "build_short_url",
    "setup_logging",
    "get_logger",
]
