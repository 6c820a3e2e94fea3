"""Shared output handling for reporters."""

from __future__ import annotations

import logging
from pathlib import Path

from .. import __version__
from ..models import AnalysisResult, ReportMetadata

logger = logging.getLogger(__name__)

REPORT_STEM = "inventory"
MISSING = "N/A"
NOT_USED = "Not used"
SQL_PREVIEW_LENGTH = 100


def abbreviate(text: str | None, width: int = SQL_PREVIEW_LENGTH) -> str:
    """Shorten *text* to *width* characters, ending with '...' when cut."""
    if not text:
        return ""
    text = " ".join(text.split())
    if len(text) <= width:
        return text
    return text[: width - 3] + "..."


class BaseReporter:
    """Writes rendered reports to ``output_dir/<root-name>/inventory.<ext>``."""

    format_name = "base"
    extension = "txt"

    def render(self, result: AnalysisResult) -> str:
        raise NotImplementedError

    def save(self, result: AnalysisResult, path: Path) -> None:
        """Write the rendered text to *path*; binary formats override this."""
        path.write_text(self.render(result), encoding="utf-8")

    def metadata(self, result: AnalysisResult) -> ReportMetadata:
        return ReportMetadata(source_root=result.root, tool_version=__version__)

    def output_path(self, result: AnalysisResult, output_dir: Path) -> Path:
        root_name = Path(result.root).name or "root"
        return Path(output_dir) / root_name / f"{REPORT_STEM}.{self.extension}"

    def write(self, result: AnalysisResult, output_dir: Path) -> Path:
        """Render and write the report.

        Args:
            result: Analysis result to render
            output_dir: Base directory for reports

        Returns:
            Path to the written report
        """
        output_path = self.output_path(result, output_dir)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        self.save(result, output_path)

        logger.info("%s report written to %s", self.format_name.upper(), output_path)
        return output_path
