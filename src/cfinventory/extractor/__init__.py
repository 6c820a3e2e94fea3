"""Tag, attribute and SQL extraction."""

from .attributes import extract_attribute, iter_attributes, format_attributes
from .sql import SqlAnalyzer, SqlProfile, TABLE_NOT_APPLICABLE, TABLE_UNKNOWN
from .tags import TagExtractor, component_name_for

__all__ = [
    "extract_attribute",
    "iter_attributes",
    "format_attributes",
    "SqlAnalyzer",
    "SqlProfile",
    "TABLE_NOT_APPLICABLE",
    "TABLE_UNKNOWN",
    "TagExtractor",
    "component_name_for",
]
