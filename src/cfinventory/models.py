"""Core data models for the template inventory."""

from collections import Counter
from datetime import datetime
from typing import Optional, Dict, Tuple
from pydantic import BaseModel, ConfigDict, Field


FILE_TYPE_TEMPLATE = "template"
FILE_TYPE_COMPONENT = "component"
FILE_TYPE_MARKUP = "markup"
FILE_TYPE_UNKNOWN = "unknown"

COMPLEXITY_LOW = "Low"
COMPLEXITY_MEDIUM = "Medium"
COMPLEXITY_HIGH = "High"


class _Record(BaseModel):
    """Base for immutable extraction records."""

    model_config = ConfigDict(frozen=True)


class _LocatedRecord(_Record):
    file: str  # path relative to the analysis root
    line: int = Field(ge=1)

    @property
    def location(self) -> str:
        return f"{self.file}:{self.line}"


class FileRecord(_Record):
    """One cataloged file under the analysis root."""

    relative_path: str
    name: str
    extension: str  # lowercase, no leading dot
    file_type: str
    size: int
    line_count: int = 0
    last_modified: datetime


class QueryRecord(_LocatedRecord):
    """A <cfquery> block."""

    name: Optional[str] = None
    datasource: Optional[str] = None
    sql: str = ""
    table: str
    complexity: str
    function: Optional[str] = None
    component: Optional[str] = None
    parameters: Tuple[str, ...] = ()


class FunctionRecord(_LocatedRecord):
    """A <cffunction> declaration."""

    name: Optional[str] = None
    access: Optional[str] = None
    return_type: Optional[str] = None
    parameters: Tuple[str, ...] = ()
    used_in: Tuple[str, ...] = ()

    @property
    def key(self) -> Tuple[str, int, Optional[str]]:
        return (self.file, self.line, self.name)


class ComponentRecord(_LocatedRecord):
    """A <cfcomponent> declaration; the name comes from the file name."""

    name: str
    extends: Optional[str] = None
    implements: Optional[str] = None
    functions: Tuple[str, ...] = ()
    used_in: Tuple[str, ...] = ()

    @property
    def key(self) -> Tuple[str, str]:
        return (self.file, self.name)


class InvokeRecord(_LocatedRecord):
    """A <cfinvoke> call."""

    component: Optional[str] = None
    method: Optional[str] = None
    arguments: Tuple[str, ...] = ()


class IncludeRecord(_LocatedRecord):
    """A <cfinclude> directive."""

    template: Optional[str] = None


class ModuleRecord(_LocatedRecord):
    """A <cfmodule> reference."""

    template: Optional[str] = None
    name: Optional[str] = None
    attributes: Tuple[str, ...] = ()


class ExtractedElements(_Record):
    """Everything the tag extractor found in a single file."""

    queries: Tuple[QueryRecord, ...] = ()
    functions: Tuple[FunctionRecord, ...] = ()
    components: Tuple[ComponentRecord, ...] = ()
    invokes: Tuple[InvokeRecord, ...] = ()
    includes: Tuple[IncludeRecord, ...] = ()
    modules: Tuple[ModuleRecord, ...] = ()


class AnalysisResult(_Record):
    """Complete, read-only output of one analysis run."""

    root: str
    files: Tuple[FileRecord, ...] = ()
    queries: Tuple[QueryRecord, ...] = ()
    functions: Tuple[FunctionRecord, ...] = ()
    components: Tuple[ComponentRecord, ...] = ()
    invokes: Tuple[InvokeRecord, ...] = ()
    includes: Tuple[IncludeRecord, ...] = ()
    modules: Tuple[ModuleRecord, ...] = ()

    def summary(self) -> Dict[str, int]:
        """Element counts keyed by collection name."""
        return {
            "files": len(self.files),
            "queries": len(self.queries),
            "functions": len(self.functions),
            "components": len(self.components),
            "invokes": len(self.invokes),
            "includes": len(self.includes),
            "modules": len(self.modules),
        }

    def files_by_extension(self) -> Dict[str, int]:
        """File counts per extension, most common first."""
        counts = Counter(f.extension for f in self.files)
        return dict(sorted(counts.items(), key=lambda item: (-item[1], item[0])))


class ReportMetadata(BaseModel):
    """Header metadata stamped on generated reports."""

    source_root: str
    scan_date: datetime = Field(default_factory=datetime.now)
    tool_version: str
