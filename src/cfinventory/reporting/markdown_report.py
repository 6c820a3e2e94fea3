"""Markdown reporter with YAML frontmatter."""

import yaml

from ._base import BaseReporter, MISSING, NOT_USED, abbreviate
from .grouping import group_queries
from ..models import AnalysisResult


def _cell(value) -> str:
    if value is None or value == "":
        return MISSING
    return str(value).replace("|", "\\|").replace("\n", " ")


def _table(headers: list[str], rows: list[list]) -> str:
    lines = [
        "| " + " | ".join(headers) + " |",
        "| " + " | ".join("---" for _ in headers) + " |",
    ]
    for row in rows:
        lines.append("| " + " | ".join(_cell(v) for v in row) + " |")
    return "\n".join(lines)


class MarkdownReporter(BaseReporter):
    """Renders the inventory as Markdown tables."""

    format_name = "markdown"
    extension = "md"

    def render(self, result: AnalysisResult) -> str:
        metadata = self.metadata(result)
        frontmatter = yaml.dump(
            {
                "source_root": metadata.source_root,
                "scan_date": metadata.scan_date.isoformat(),
                "tool_version": metadata.tool_version,
                "summary": result.summary(),
            },
            default_flow_style=False,
            sort_keys=False,
        )

        sections = [
            "# Template Inventory",
            "## Files",
            _table(
                ["Path", "Type", "Size", "Lines"],
                [[f.relative_path, f.file_type, f.size, f.line_count] for f in result.files],
            ),
            "## Queries",
            _table(
                ["Name", "Executions", "Datasource", "Table", "Locations"],
                [
                    [g.name, g.execution_count, g.datasource, g.table, ", ".join(g.locations)]
                    for g in group_queries(result.queries)
                ],
            ),
            "## Query Details",
            _table(
                ["Name", "Location", "Table", "Complexity", "Function", "SQL"],
                [
                    [q.name, q.location, q.table, q.complexity, q.function, abbreviate(q.sql)]
                    for q in result.queries
                ],
            ),
            "## Functions",
            _table(
                ["Name", "Location", "Access", "Returns", "Parameters", "Used In"],
                [
                    [
                        f.name,
                        f.location,
                        f.access,
                        f.return_type,
                        ", ".join(f.parameters),
                        ", ".join(f.used_in) or NOT_USED,
                    ]
                    for f in result.functions
                ],
            ),
            "## Components",
            _table(
                ["Name", "Location", "Extends", "Implements", "Used In"],
                [
                    [c.name, c.location, c.extends, c.implements, ", ".join(c.used_in) or NOT_USED]
                    for c in result.components
                ],
            ),
            "## Invokes",
            _table(
                ["Component", "Method", "Location", "Arguments"],
                [[i.component, i.method, i.location, ", ".join(i.arguments)] for i in result.invokes],
            ),
            "## Includes",
            _table(
                ["Template", "Location"],
                [[i.template, i.location] for i in result.includes],
            ),
            "## Modules",
            _table(
                ["Template", "Name", "Location", "Attributes"],
                [[m.template, m.name, m.location, ", ".join(m.attributes)] for m in result.modules],
            ),
        ]

        body = "\n\n".join(sections)
        return f"---\n{frontmatter}---\n\n{body}\n"
