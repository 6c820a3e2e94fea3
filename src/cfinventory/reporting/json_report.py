"""JSON reporter."""

import json

from ._base import BaseReporter
from ..models import AnalysisResult


class JsonReporter(BaseReporter):
    """Serializes the full result, wrapped with report metadata."""

    format_name = "json"
    extension = "json"

    def render(self, result: AnalysisResult) -> str:
        payload = {
            "metadata": self.metadata(result).model_dump(mode="json"),
            "summary": result.summary(),
            "result": result.model_dump(mode="json"),
        }
        return json.dumps(payload, indent=2, ensure_ascii=False) + "\n"
