"""Protocol definition for inventory reporters.

Reporters only read the frozen :class:`~cfinventory.models.AnalysisResult`;
they never re-run extraction or modify records.
"""

from __future__ import annotations
from pathlib import Path
from typing import Protocol, runtime_checkable, TYPE_CHECKING

if TYPE_CHECKING:
    from ..models import AnalysisResult


@runtime_checkable
class Reporter(Protocol):
    """Renders an analysis result to a file."""

    format_name: str
    extension: str

    def write(self, result: AnalysisResult, output_dir: Path) -> Path:
        """Write the report under *output_dir*.

        Args:
            result: Analysis result to render.
            output_dir: Base directory; the report lands in
                ``output_dir/<root-name>/inventory.<extension>``.

        Returns:
            Path of the written report.
        """
        ...
