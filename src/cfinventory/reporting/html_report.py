"""HTML inventory reporter."""

from html import escape
from typing import Iterable, Sequence

from ._base import BaseReporter, MISSING, NOT_USED, abbreviate
from .grouping import group_queries
from .templates import (
    EXTENSION_ROW,
    HTML_EMPTY_ROW,
    HTML_FOOTER,
    HTML_HEADER,
    HTML_SECTION,
    HTML_SUMMARY,
)
from ..models import AnalysisResult

DATE_FORMAT = "%d/%m/%Y %H:%M:%S"


def _text(value, default: str = MISSING) -> str:
    if value is None or value == "":
        return escape(default)
    return escape(str(value))


def _lines(values: Iterable[str], default: str = MISSING) -> str:
    """Escape each value and join with line breaks."""
    escaped = [escape(v) for v in values]
    return "<br>".join(escaped) if escaped else escape(default)


class HtmlReporter(BaseReporter):
    """Renders a standalone HTML inventory."""

    format_name = "html"
    extension = "html"

    def render(self, result: AnalysisResult) -> str:
        metadata = self.metadata(result)
        parts = [
            HTML_HEADER.format(
                root=escape(result.root),
                scan_date=escape(metadata.scan_date.strftime(DATE_FORMAT)),
                tool_version=escape(metadata.tool_version),
            ),
            self._summary(result),
            self._files(result),
            self._queries(result),
            self._functions(result),
            self._components(result),
            self._invokes(result),
            self._includes(result),
            self._modules(result),
            HTML_FOOTER,
        ]
        return "".join(parts)

    def _summary(self, result: AnalysisResult) -> str:
        total = len(result.files)
        extension_rows = "\n".join(
            EXTENSION_ROW.format(
                extension=escape((ext or "(none)").upper()),
                count=count,
                percentage=f"{count * 100.0 / total:.1f}%",
            )
            for ext, count in result.files_by_extension().items()
        )
        return HTML_SUMMARY.format(extension_rows=extension_rows, **result.summary())

    @staticmethod
    def _section(title: str, headers: Sequence[str], rows: Iterable[Sequence[str]]) -> str:
        rendered = ["<tr>" + "".join(f"<td>{cell}</td>" for cell in row) + "</tr>" for row in rows]
        return HTML_SECTION.format(
            title=escape(title),
            header_cells="".join(f"<th>{escape(h)}</th>" for h in headers),
            rows="\n".join(rendered) or HTML_EMPTY_ROW.format(span=len(headers)),
        )

    def _files(self, result: AnalysisResult) -> str:
        return self._section(
            "File Inventory",
            ["Path", "Extension", "Type", "Size (bytes)", "Lines", "Last Modified"],
            (
                [
                    _text(f.relative_path),
                    _text(f.extension.upper()),
                    _text(f.file_type),
                    f"{f.size:,}",
                    str(f.line_count),
                    _text(f.last_modified.strftime(DATE_FORMAT)),
                ]
                for f in result.files
            ),
        )

    def _queries(self, result: AnalysisResult) -> str:
        grouped = self._section(
            "Query Inventory",
            ["Query", "Executions", "Datasource", "Table", "Locations", "SQL"],
            (
                [
                    _text(g.name),
                    str(g.execution_count),
                    _text(g.datasource),
                    _text(g.table),
                    _lines(g.locations),
                    "<hr>".join(f"<code>{escape(abbreviate(sql))}</code>" for sql in g.sql_extracts),
                ]
                for g in group_queries(result.queries)
            ),
        )
        details = self._section(
            "Query Details",
            ["Query", "Location", "Table", "Complexity", "Function", "Component", "Parameters"],
            (
                [
                    _text(q.name),
                    _text(q.location),
                    _text(q.table),
                    _text(q.complexity),
                    _text(q.function),
                    _text(q.component),
                    _lines(q.parameters),
                ]
                for q in result.queries
            ),
        )
        return grouped + details

    def _functions(self, result: AnalysisResult) -> str:
        return self._section(
            "Function Inventory",
            ["Function", "Location", "Access", "Return Type", "Parameters", "Used In"],
            (
                [
                    _text(f.name),
                    _text(f.location),
                    _text(f.access, "public"),
                    _text(f.return_type, "any"),
                    _lines(f.parameters),
                    _lines(f.used_in, NOT_USED),
                ]
                for f in result.functions
            ),
        )

    def _components(self, result: AnalysisResult) -> str:
        return self._section(
            "Component Inventory",
            ["Component", "Location", "Extends", "Implements", "Functions", "Used In"],
            (
                [
                    _text(c.name),
                    _text(c.location),
                    _text(c.extends),
                    _text(c.implements),
                    _lines(c.functions),
                    _lines(c.used_in, NOT_USED),
                ]
                for c in result.components
            ),
        )

    def _invokes(self, result: AnalysisResult) -> str:
        return self._section(
            "Invoke Inventory",
            ["Component", "Method", "Location", "Arguments"],
            (
                [_text(i.component), _text(i.method), _text(i.location), _lines(i.arguments)]
                for i in result.invokes
            ),
        )

    def _includes(self, result: AnalysisResult) -> str:
        return self._section(
            "Include Inventory",
            ["Template", "Location"],
            ([_text(i.template), _text(i.location)] for i in result.includes),
        )

    def _modules(self, result: AnalysisResult) -> str:
        return self._section(
            "Module Inventory",
            ["Template", "Name", "Location", "Attributes"],
            (
                [_text(m.template), _text(m.name), _text(m.location), _lines(m.attributes)]
                for m in result.modules
            ),
        )
