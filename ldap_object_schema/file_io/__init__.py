"""File I/O related utilities.

This package groups the small modules that read schema documents from their
storage locations.
"""

from .schema_files import SchemaFileReader

__all__ = [
    "SchemaFileReader",
]
