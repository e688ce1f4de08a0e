"""Core business logic for shortlink."""

from .codegen import CodeGenerator
from .service import LinkRegistry
from .storage.models import Link

__all__ = ["CodeGenerator", "LinkRegistry", "Link"]
