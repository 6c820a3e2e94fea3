"""cf-inventory - static inventory of ColdFusion-style template trees."""

__version__ = "0.1.0"

from .config import Config
from .errors import (
    InventoryError,
    InvalidRootError,
    ContentUnavailableError,
    AnalysisCancelledError,
)
from .models import (
    AnalysisResult,
    FileRecord,
    QueryRecord,
    FunctionRecord,
    ComponentRecord,
    InvokeRecord,
    IncludeRecord,
    ModuleRecord,
)
from .analyzer import TemplateAnalyzer, analyze_directory

__all__ = [
    "Config",
    "InventoryError",
    "InvalidRootError",
    "ContentUnavailableError",
    "AnalysisCancelledError",
    "AnalysisResult",
    "FileRecord",
    "QueryRecord",
    "FunctionRecord",
    "ComponentRecord",
    "InvokeRecord",
    "IncludeRecord",
    "ModuleRecord",
    "TemplateAnalyzer",
    "analyze_directory",
]
