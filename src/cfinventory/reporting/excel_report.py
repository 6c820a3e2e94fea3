"""Excel workbook reporter: one sheet per element kind."""

from pathlib import Path
from typing import Iterable, Sequence

from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from ._base import BaseReporter, MISSING, NOT_USED
from ..models import AnalysisResult

# Excel refuses cells longer than this
MAX_CELL_LENGTH = 32767
MAX_COLUMN_WIDTH = 80

_THIN = Side(style="thin")
_BORDER = Border(left=_THIN, right=_THIN, top=_THIN, bottom=_THIN)
_HEADER_FONT = Font(bold=True, color="FFFFFF")
_HEADER_FILL = PatternFill(fill_type="solid", fgColor="1F3A5F")
_DATA_ALIGNMENT = Alignment(wrap_text=True, vertical="top")


def _cell(value, default: str = MISSING):
    if value is None or value == "":
        return default
    if isinstance(value, int):
        return value
    text = ILLEGAL_CHARACTERS_RE.sub("", str(value))
    return text[:MAX_CELL_LENGTH]


def _joined(values: Sequence[str], default: str = MISSING) -> str:
    return "\n".join(values) if values else default


class ExcelReporter(BaseReporter):
    """Writes the inventory as an .xlsx workbook."""

    format_name = "xlsx"
    extension = "xlsx"

    def save(self, result: AnalysisResult, path: Path) -> None:
        self.build_workbook(result).save(path)

    def build_workbook(self, result: AnalysisResult) -> Workbook:
        """Create the workbook without touching the filesystem."""
        workbook = Workbook()
        workbook.remove(workbook.active)

        self._sheet(
            workbook,
            "cfFilesReport",
            ["File Name", "File Path", "File Type", "File Size (bytes)", "Line Count"],
            ([f.name, f.relative_path, f.file_type, f.size, f.line_count] for f in result.files),
        )
        self._sheet(
            workbook,
            "cfQueriesReport",
            ["Query Name", "DB Table", "File:Line", "Data Source", "SQL Query", "Complexity",
             "Function", "Component"],
            (
                [q.name, q.table, q.location, q.datasource, q.sql, q.complexity, q.function,
                 q.component]
                for q in result.queries
            ),
        )
        self._sheet(
            workbook,
            "cfFunctionsReport",
            ["Function Name", "Return Type", "Access", "File:Line", "Parameters", "Used In"],
            (
                [f.name, f.return_type, f.access, f.location, _joined(f.parameters),
                 _joined(f.used_in, NOT_USED)]
                for f in result.functions
            ),
        )
        self._sheet(
            workbook,
            "cfInvokesReport",
            ["Component", "Method", "File:Line", "Parameters"],
            (
                [i.component, i.method, i.location, _joined(i.arguments)]
                for i in result.invokes
            ),
        )
        self._sheet(
            workbook,
            "cfComponentsReport",
            ["Component Name", "Extends", "Implements", "File:Line", "Used In"],
            (
                [c.name, c.extends, c.implements, c.location, _joined(c.used_in, NOT_USED)]
                for c in result.components
            ),
        )
        self._sheet(
            workbook,
            "cfIncludesReport",
            ["Template", "File:Line"],
            ([i.template, i.location] for i in result.includes),
        )
        self._sheet(
            workbook,
            "cfModulesReport",
            ["Template", "Name", "File:Line", "Attributes"],
            (
                [m.template, m.name, m.location, _joined(m.attributes)]
                for m in result.modules
            ),
        )
        return workbook

    @staticmethod
    def _sheet(workbook: Workbook, title: str, headers: Sequence[str], rows: Iterable[Sequence]) -> None:
        sheet = workbook.create_sheet(title)
        sheet.append(list(headers))
        for cell in sheet[1]:
            cell.font = _HEADER_FONT
            cell.fill = _HEADER_FILL
            cell.border = _BORDER

        widths = [len(h) for h in headers]
        for row in rows:
            values = [_cell(v) for v in row]
            sheet.append(values)
            for i, value in enumerate(values):
                longest = max((len(line) for line in str(value).splitlines()), default=0)
                widths[i] = max(widths[i], longest)

        for row in sheet.iter_rows(min_row=2):
            for cell in row:
                cell.border = _BORDER
                cell.alignment = _DATA_ALIGNMENT

        for i, width in enumerate(widths, start=1):
            sheet.column_dimensions[get_column_letter(i)].width = min(width + 2, MAX_COLUMN_WIDTH)
        sheet.freeze_panes = "A2"
