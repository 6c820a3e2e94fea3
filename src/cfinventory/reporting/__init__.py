"""Report renderers for analysis results."""

from .protocol import Reporter
from .grouping import QueryGroup, group_queries
from .excel_report import ExcelReporter
from .html_report import HtmlReporter
from .json_report import JsonReporter
from .markdown_report import MarkdownReporter

REPORTERS: dict[str, type] = {
    HtmlReporter.format_name: HtmlReporter,
    MarkdownReporter.format_name: MarkdownReporter,
    JsonReporter.format_name: JsonReporter,
    ExcelReporter.format_name: ExcelReporter,
}


def get_reporter(format_name: str) -> Reporter:
    """Instantiate the reporter registered for *format_name*."""
    try:
        return REPORTERS[format_name]()
    except KeyError:
        raise ValueError(f"Unknown report format: {format_name}") from None


__all__ = [
    "Reporter",
    "QueryGroup",
    "group_queries",
    "ExcelReporter",
    "HtmlReporter",
    "JsonReporter",
    "MarkdownReporter",
    "REPORTERS",
    "get_reporter",
]
