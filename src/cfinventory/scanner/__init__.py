"""File tree cataloging."""

from .catalog import FileCatalog, classify_extension, count_lines

__all__ = ["FileCatalog", "classify_extension", "count_lines"]
