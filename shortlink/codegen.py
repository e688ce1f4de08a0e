"""Short code generation utilities."""

import re
import secrets
import string
from typing import Optional


MIN_CODE_LENGTH = 3
MAX_CODE_LENGTH = 32
DEFAULT_CODE_LENGTH = 7

CODE_PATTERN = re.compile(r'^[0-9A-Za-z_-]{3,32}$')

# Paths routed by the app itself, never valid link codes
RESERVED_CODES = frozenset({"api", "admin", "healthz", "readyz", "web"})


class CodeGenerator:
    """Generate random short codes for links."""

    # Base62 characters (digits, lowercase, uppercase)
    BASE62_CHARS = string.digits + string.ascii_lowercase + string.ascii_uppercase

    def __init__(self, default_length: int = DEFAULT_CODE_LENGTH):
        """Initialize code generator.

        Args:
            default_length: Default length for generated codes (3-32)

        Raises:
            ValueError: If default_length is out of range
        """
        self.default_length = self._check_length(default_length)

    def generate(self, length: Optional[int] = None) -> str:
        """Generate a random short code.

        Characters are drawn uniformly, with replacement, from the base62
        alphabet using the operating system CSPRNG. Reserved codes are redrawn.

        Args:
            length: Length of the code (uses default if not specified)

        Returns:
            Random short code
        """
        length = self.default_length if length is None else self._check_length(length)
        while True:
            code = ''.join(secrets.choice(self.BASE62_CHARS) for _ in range(length))
            if code not in RESERVED_CODES:
                return code

    @staticmethod
    def _check_length(length: int) -> int:
        if not MIN_CODE_LENGTH <= length <= MAX_CODE_LENGTH:
            raise ValueError(
                f"Code length must be between {MIN_CODE_LENGTH} and {MAX_CODE_LENGTH}, got {length}"
            )
        return length

    @staticmethod
    def is_valid_format(code: str) -> bool:
        """Check if code has valid format.

        Valid codes are 3-32 characters of letters, digits, '-' and '_'.

        Args:
            code: Code to validate

        Returns:
            True if valid format
        """
        return isinstance(code, str) and CODE_PATTERN.fullmatch(code) is not None
