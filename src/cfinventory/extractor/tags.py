"""Structural tag extraction.

Each element kind has one regular expression applied exhaustively to the whole
file. Patterns never try to recover from malformed markup: an unterminated
``<cfquery>`` simply produces no record.
"""

from __future__ import annotations

import bisect
import re
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import List, Optional

from ..models import (
    ComponentRecord,
    ExtractedElements,
    FunctionRecord,
    IncludeRecord,
    InvokeRecord,
    ModuleRecord,
    QueryRecord,
)
from .attributes import extract_attribute, format_attributes
from .sql import SqlAnalyzer

_FLAGS = re.IGNORECASE

QUERY_PATTERN = re.compile(r"<cfquery\b([^>]*)>(.*?)</cfquery\s*>", _FLAGS | re.DOTALL)
FUNCTION_PATTERN = re.compile(r"<cffunction\b([^>]*)>", _FLAGS)
FUNCTION_CLOSE_PATTERN = re.compile(r"</cffunction\s*>", _FLAGS)
ARGUMENT_PATTERN = re.compile(r"<cfargument\b([^>]*)>", _FLAGS)
COMPONENT_PATTERN = re.compile(r"<cfcomponent\b([^>]*)>", _FLAGS)
INVOKE_PATTERN = re.compile(r"<cfinvoke\b([^>]*)>", _FLAGS)
INCLUDE_PATTERN = re.compile(r"<cfinclude\b([^>]*)>", _FLAGS)
MODULE_PATTERN = re.compile(r"<cfmodule\b([^>]*)>", _FLAGS)
QUERYPARAM_PATTERN = re.compile(r"<cfqueryparam\b([^>]*)>", _FLAGS)


def component_name_for(file_path: str) -> str:
    """Component name: the file's base name without its extension."""
    name = PurePosixPath(file_path.replace("\\", "/")).name
    dot = name.rfind(".")
    return name[:dot] if dot > 0 else name


class LineIndex:
    """Maps character offsets to 1-based line numbers."""

    def __init__(self, content: str) -> None:
        self._newlines = [i for i, ch in enumerate(content) if ch == "\n"]

    def line_of(self, offset: int) -> int:
        # Newlines strictly before the offset, plus one
        return bisect.bisect_left(self._newlines, offset) + 1


@dataclass(frozen=True)
class _FunctionSpan:
    name: Optional[str]
    body_start: int
    body_end: int


class TagExtractor:
    """Extracts the six element kinds from one file's content."""

    def __init__(self, sql_analyzer: SqlAnalyzer | None = None) -> None:
        self.sql_analyzer = sql_analyzer or SqlAnalyzer()

    def extract(self, content: str, file_path: str) -> ExtractedElements:
        """Extract all element records from *content*.

        Args:
            content: Full file text
            file_path: Path relative to the analysis root, stored on every record

        Returns:
            ExtractedElements with one tuple per element kind
        """
        lines = LineIndex(content)
        spans = self._function_spans(content)
        components = self.extract_components(content, file_path, lines, spans)

        return ExtractedElements(
            queries=tuple(self.extract_queries(content, file_path, lines, spans, components)),
            functions=tuple(self.extract_functions(content, file_path, lines, spans)),
            components=tuple(components),
            invokes=tuple(self.extract_invokes(content, file_path, lines)),
            includes=tuple(self.extract_includes(content, file_path, lines)),
            modules=tuple(self.extract_modules(content, file_path, lines)),
        )

    def extract_queries(
        self,
        content: str,
        file_path: str,
        lines: LineIndex,
        spans: List[_FunctionSpan],
        components: List[ComponentRecord],
    ) -> List[QueryRecord]:
        records = []
        for match in QUERY_PATTERN.finditer(content):
            attributes = match.group(1)
            sql = match.group(2).strip()
            profile = self.sql_analyzer.analyze(sql)
            line = lines.line_of(match.start())

            enclosing = self._enclosing_function(spans, match.start())
            component = next((c.name for c in components if c.line <= line), None)

            records.append(
                QueryRecord(
                    file=file_path,
                    line=line,
                    name=extract_attribute(attributes, "name"),
                    datasource=extract_attribute(attributes, "datasource"),
                    sql=sql,
                    table=profile.table,
                    complexity=profile.complexity,
                    function=enclosing.name if enclosing else None,
                    component=component,
                    parameters=self._query_params(sql),
                )
            )
        return records

    def extract_functions(
        self,
        content: str,
        file_path: str,
        lines: LineIndex,
        spans: List[_FunctionSpan],
    ) -> List[FunctionRecord]:
        records = []
        for match, span in zip(FUNCTION_PATTERN.finditer(content), spans):
            attributes = match.group(1)
            records.append(
                FunctionRecord(
                    file=file_path,
                    line=lines.line_of(match.start()),
                    name=span.name,
                    access=extract_attribute(attributes, "access"),
                    return_type=extract_attribute(attributes, "returntype"),
                    parameters=self._arguments(content, span),
                )
            )
        return records

    def extract_components(
        self,
        content: str,
        file_path: str,
        lines: LineIndex,
        spans: List[_FunctionSpan],
    ) -> List[ComponentRecord]:
        name = component_name_for(file_path)
        function_names = tuple(span.name for span in spans if span.name)
        records = []
        for match in COMPONENT_PATTERN.finditer(content):
            attributes = match.group(1)
            records.append(
                ComponentRecord(
                    file=file_path,
                    line=lines.line_of(match.start()),
                    name=name,
                    extends=extract_attribute(attributes, "extends"),
                    implements=extract_attribute(attributes, "implements"),
                    functions=function_names,
                )
            )
        return records

    def extract_invokes(self, content: str, file_path: str, lines: LineIndex) -> List[InvokeRecord]:
        return [
            InvokeRecord(
                file=file_path,
                line=lines.line_of(match.start()),
                component=extract_attribute(match.group(1), "component"),
                method=extract_attribute(match.group(1), "method"),
                arguments=format_attributes(match.group(1), exclude=("component", "method")),
            )
            for match in INVOKE_PATTERN.finditer(content)
        ]

    def extract_includes(self, content: str, file_path: str, lines: LineIndex) -> List[IncludeRecord]:
        return [
            IncludeRecord(
                file=file_path,
                line=lines.line_of(match.start()),
                template=extract_attribute(match.group(1), "template"),
            )
            for match in INCLUDE_PATTERN.finditer(content)
        ]

    def extract_modules(self, content: str, file_path: str, lines: LineIndex) -> List[ModuleRecord]:
        return [
            ModuleRecord(
                file=file_path,
                line=lines.line_of(match.start()),
                template=extract_attribute(match.group(1), "template"),
                name=extract_attribute(match.group(1), "name"),
                attributes=format_attributes(match.group(1), exclude=("template",)),
            )
            for match in MODULE_PATTERN.finditer(content)
        ]

    def _function_spans(self, content: str) -> List[_FunctionSpan]:
        """Locate each function's body: up to its close tag, the next open tag, or EOF."""
        opens = list(FUNCTION_PATTERN.finditer(content))
        spans = []
        for i, match in enumerate(opens):
            limit = opens[i + 1].start() if i + 1 < len(opens) else len(content)
            close = FUNCTION_CLOSE_PATTERN.search(content, match.end(), limit)
            spans.append(
                _FunctionSpan(
                    name=extract_attribute(match.group(1), "name"),
                    body_start=match.end(),
                    body_end=close.start() if close else limit,
                )
            )
        return spans

    @staticmethod
    def _enclosing_function(spans: List[_FunctionSpan], offset: int) -> Optional[_FunctionSpan]:
        for span in reversed(spans):
            if span.body_start <= offset < span.body_end:
                return span
        return None

    @staticmethod
    def _query_params(sql: str) -> tuple[str, ...]:
        values = (extract_attribute(m.group(1), "value") for m in QUERYPARAM_PATTERN.finditer(sql))
        return tuple(v for v in values if v is not None)

    @staticmethod
    def _arguments(content: str, span: _FunctionSpan) -> tuple[str, ...]:
        parameters = []
        for match in ARGUMENT_PATTERN.finditer(content, span.body_start, span.body_end):
            name = extract_attribute(match.group(1), "name")
            if name is None:
                continue
            arg_type = extract_attribute(match.group(1), "type")
            parameters.append(f"{name}:{arg_type}" if arg_type else name)
        return tuple(parameters)
