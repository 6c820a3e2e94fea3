"""Tests for usage resolution."""

import threading
from datetime import datetime
from pathlib import Path
import pytest
from cfinventory.errors import AnalysisCancelledError, ContentUnavailableError
from cfinventory.models import ComponentRecord, FileRecord, FunctionRecord
from cfinventory.resolver import DependencyResolver, UsageIndex
from cfinventory.resolver.dependencies import component_references

ROOT = Path("/app")


class InMemorySource:
    """Content source backed by a dict of root-relative paths."""

    def __init__(self, files: dict[str, str]):
        self.files = {ROOT / path: text for path, text in files.items()}

    def load(self, path: Path) -> str:
        try:
            return self.files[Path(path)]
        except KeyError:
            raise ContentUnavailableError(f"Cannot read file {path}") from None


def _file(path: str) -> FileRecord:
    return FileRecord(
        relative_path=path,
        name=path.rsplit("/", 1)[-1],
        extension=path.rsplit(".", 1)[-1],
        file_type="template",
        size=0,
        last_modified=datetime(2024, 1, 1),
    )


def _resolve(files: dict[str, str], functions=(), components=(), order=None):
    source = InMemorySource(files)
    records = [_file(p) for p in (order or files)]
    return DependencyResolver(source, max_workers=2).resolve(functions, components, records, ROOT)


def test_function_used_when_called():
    f = FunctionRecord(file="lib.cfm", line=1, name="f")
    usage = _resolve(
        {"lib.cfm": '<cffunction name="f">', "a.cfm": "<cfset f(1)>", "b.cfm": "<cfset g(1)>"},
        functions=[f],
    )

    assert usage.function_usage(f) == ("a.cfm",)


def test_function_name_without_call_is_not_usage():
    f = FunctionRecord(file="lib.cfm", line=1, name="f")
    usage = _resolve({"lib.cfm": '<cffunction name="f">', "a.cfm": "f is a letter"}, functions=[f])

    assert usage.function_usage(f) == ()


def test_substring_call_counts_as_usage():
    """Matching is textual, so ``f(`` also matches inside ``ref(``."""
    f = FunctionRecord(file="lib.cfm", line=1, name="f")
    usage = _resolve({"lib.cfm": "", "a.cfm": "<cfset x = ref(2)>"}, functions=[f])

    assert usage.function_usage(f) == ("a.cfm",)


def test_self_reference_is_included():
    f = FunctionRecord(file="lib.cfm", line=1, name="walk")
    usage = _resolve({"lib.cfm": '<cffunction name="walk"><cfreturn walk(n - 1)>'}, functions=[f])

    assert usage.function_usage(f) == ("lib.cfm",)


def test_component_used_by_name_or_create_object():
    c = ComponentRecord(file="Cart.cfc", line=1, name="Cart")
    usage = _resolve(
        {
            "Cart.cfc": "<cfcomponent>",
            "a.cfm": '<cfset c = createObject("component", "Cart")>',
            "b.cfm": '<cfinvoke component="Cart" method="add">',
            "c.cfm": "<cfset total = 0>",
        },
        components=[c],
    )

    assert usage.component_usage(c) == ("a.cfm", "b.cfm")


def test_usage_follows_catalog_order():
    f = FunctionRecord(file="z.cfm", line=1, name="f")
    files = {"z.cfm": "f()", "a.cfm": "f()", "m.cfm": "f()"}
    usage = _resolve(files, functions=[f], order=["z.cfm", "a.cfm", "m.cfm"])

    assert usage.function_usage(f) == ("z.cfm", "a.cfm", "m.cfm")


def test_duplicate_names_share_usage():
    first = FunctionRecord(file="a.cfm", line=1, name="init")
    second = FunctionRecord(file="b.cfm", line=4, name="init")
    usage = _resolve({"a.cfm": "", "b.cfm": "", "c.cfm": "obj.init()"}, functions=[first, second])

    assert usage.function_usage(first) == ("c.cfm",)
    assert usage.function_usage(second) == ("c.cfm",)


def test_unnamed_function_has_no_usage():
    f = FunctionRecord(file="a.cfm", line=1, name=None)
    usage = _resolve({"a.cfm": "None()"}, functions=[f])

    assert usage.function_usage(f) == ()


def test_unreadable_file_is_skipped(caplog):
    f = FunctionRecord(file="a.cfm", line=1, name="f")
    usage = _resolve({"a.cfm": "f()"}, functions=[f], order=["a.cfm", "gone.cfm"])

    assert usage.function_usage(f) == ("a.cfm",)
    assert "gone.cfm" in caplog.text


def test_no_declarations_gives_empty_index():
    assert _resolve({"a.cfm": "anything"}) == UsageIndex()


def test_apply_returns_new_records():
    f = FunctionRecord(file="lib.cfm", line=1, name="f")
    usage = _resolve({"lib.cfm": "", "a.cfm": "f()"}, functions=[f])

    (updated,) = usage.apply_functions([f])

    assert updated.used_in == ("a.cfm",)
    assert f.used_in == ()
    assert updated.name == f.name and updated.line == f.line


def test_component_references():
    assert component_references("Cart") == ("Cart", 'createObject("component", "Cart")')


def test_resolver_rejects_nonpositive_workers_gracefully():
    resolver = DependencyResolver(InMemorySource({}), max_workers=0)
    assert resolver.max_workers == 1


@pytest.mark.parametrize("workers", [1, 3, 8])
def test_result_independent_of_worker_count(workers):
    f = FunctionRecord(file="lib.cfm", line=1, name="f")
    files = {f"p{i}.cfm": ("f()" if i % 2 else "") for i in range(10)}
    records = [_file(p) for p in files]

    usage = DependencyResolver(InMemorySource(files), max_workers=workers).resolve(
        [f], [], records, ROOT
    )

    assert usage.function_usage(f) == tuple(f"p{i}.cfm" for i in range(1, 10, 2))


def test_cancelled_before_start_scans_nothing(monkeypatch):
    f = FunctionRecord(file="lib.cfm", line=1, name="f")
    source = InMemorySource({"lib.cfm": "", "a.cfm": "f()"})
    scanned = []
    monkeypatch.setattr(
        DependencyResolver, "_scan_file", lambda self, path, *names: scanned.append(path)
    )
    event = threading.Event()
    event.set()

    with pytest.raises(AnalysisCancelledError):
        DependencyResolver(source, max_workers=1).resolve(
            [f], [], [_file("lib.cfm"), _file("a.cfm")], ROOT, cancelled=event
        )

    assert scanned == []


def test_unset_event_does_not_interfere():
    f = FunctionRecord(file="lib.cfm", line=1, name="f")
    source = InMemorySource({"lib.cfm": "", "a.cfm": "f()"})

    usage = DependencyResolver(source).resolve(
        [f], [], [_file("lib.cfm"), _file("a.cfm")], ROOT, cancelled=threading.Event()
    )

    assert usage.function_usage(f) == ("a.cfm",)
