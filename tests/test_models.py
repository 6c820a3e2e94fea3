"""Tests for data models."""

import pytest
from datetime import datetime
from pydantic import ValidationError
from cfinventory.models import (
    AnalysisResult,
    ComponentRecord,
    FileRecord,
    FunctionRecord,
    IncludeRecord,
    QueryRecord,
    ReportMetadata,
)


def _file(path: str, extension: str) -> FileRecord:
    return FileRecord(
        relative_path=path,
        name=path,
        extension=extension,
        file_type="template",
        size=1,
        last_modified=datetime(2024, 1, 1),
    )


class TestRecords:
    def test_location(self):
        include = IncludeRecord(file="admin/index.cfm", line=12, template="x.cfm")
        assert include.location == "admin/index.cfm:12"

    def test_line_must_be_positive(self):
        with pytest.raises(ValidationError):
            IncludeRecord(file="a.cfm", line=0)

    def test_records_are_frozen(self):
        query = QueryRecord(file="a.cfm", line=1, table="t", complexity="Low")
        with pytest.raises(ValidationError):
            query.table = "u"

    def test_defaults(self):
        function = FunctionRecord(file="a.cfm", line=3)
        assert function.name is None
        assert function.parameters == ()
        assert function.used_in == ()

    def test_keys(self):
        function = FunctionRecord(file="a.cfm", line=3, name="f")
        component = ComponentRecord(file="C.cfc", line=1, name="C")
        assert function.key == ("a.cfm", 3, "f")
        assert component.key == ("C.cfc", "C")


class TestAnalysisResult:
    def test_summary_counts(self):
        result = AnalysisResult(
            root="/app",
            files=(_file("a.cfm", "cfm"),),
            includes=(IncludeRecord(file="a.cfm", line=1), IncludeRecord(file="a.cfm", line=2)),
        )

        assert result.summary() == {
            "files": 1,
            "queries": 0,
            "functions": 0,
            "components": 0,
            "invokes": 0,
            "includes": 2,
            "modules": 0,
        }

    def test_files_by_extension_most_common_first(self):
        result = AnalysisResult(
            root="/app",
            files=(
                _file("a.cfc", "cfc"),
                _file("b.cfm", "cfm"),
                _file("c.cfm", "cfm"),
                _file("d.txt", "txt"),
            ),
        )

        assert list(result.files_by_extension().items()) == [("cfm", 2), ("cfc", 1), ("txt", 1)]

    def test_json_round_trip(self):
        result = AnalysisResult(
            root="/app",
            functions=(FunctionRecord(file="a.cfm", line=1, name="f", used_in=("b.cfm",)),),
        )

        restored = AnalysisResult.model_validate_json(result.model_dump_json())

        assert restored == result


def test_report_metadata_defaults():
    metadata = ReportMetadata(source_root="/app", tool_version="0.1.0")

    assert isinstance(metadata.scan_date, datetime)
