"""Second pass of the pipeline: for every declared function and component, find
the files that mention it.

This is a textual co-occurrence check, not reference resolution. A function
``f`` is used in a file when the file contains ``f(``; a component ``c`` when
the file contains ``c`` or ``createObject("component", "c")``. Short names will
produce false positives; scoping is never considered.

File content comes from the same :class:`~cfinventory.loader.ContentCache`
that served the extraction pass, so storage is read once per file per run.
"""
from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from ..errors import AnalysisCancelledError, ContentUnavailableError
from ..loader import ContentSource
from ..models import ComponentRecord, FileRecord, FunctionRecord

logger = logging.getLogger(__name__)

FunctionKey = Tuple[str, int, Optional[str]]
ComponentKey = Tuple[str, str]


@dataclass(frozen=True)
class UsageIndex:
    """Declaration identity -> files referencing it, in catalog order."""

    functions: Dict[FunctionKey, Tuple[str, ...]] = field(default_factory=dict)
    components: Dict[ComponentKey, Tuple[str, ...]] = field(default_factory=dict)

    def function_usage(self, record: FunctionRecord) -> Tuple[str, ...]:
        return self.functions.get(record.key, ())

    def component_usage(self, record: ComponentRecord) -> Tuple[str, ...]:
        return self.components.get(record.key, ())

    def apply_functions(self, records: Iterable[FunctionRecord]) -> Tuple[FunctionRecord, ...]:
        """Return copies of *records* carrying their resolved usage."""
        return tuple(
            r.model_copy(update={"used_in": self.function_usage(r)}) for r in records
        )

    def apply_components(self, records: Iterable[ComponentRecord]) -> Tuple[ComponentRecord, ...]:
        return tuple(
            r.model_copy(update={"used_in": self.component_usage(r)}) for r in records
        )


def component_references(name: str) -> Tuple[str, str]:
    """Literal needles that mark a component as used."""
    return (name, f'createObject("component", "{name}")')


class DependencyResolver:
    """Finds, per declaration, the files that textually reference it.

    Usage:
        resolver = DependencyResolver(cache, max_workers=4)
        usage = resolver.resolve(functions, components, files, root)
        functions = usage.apply_functions(functions)
    """

    def __init__(self, content_source: ContentSource, max_workers: int = 1) -> None:
        self.content_source = content_source
        self.max_workers = max(1, max_workers)

    def resolve(
        self,
        functions: Sequence[FunctionRecord],
        components: Sequence[ComponentRecord],
        files: Sequence[FileRecord],
        root: Path,
        cancelled: threading.Event | None = None,
    ) -> UsageIndex:
        """Compute usage sets for all declarations.

        Args:
            functions: Function declarations from the extraction pass
            components: Component declarations from the extraction pass
            files: Candidate files to search
            root: Analysis root; root / file.relative_path locates each file
            cancelled: Once set, file scans that have not started are skipped

        Returns:
            UsageIndex with one entry per declaration (unnamed ones resolve
            to no usages)

        Raises:
            AnalysisCancelledError: if *cancelled* was set before every file
                was scanned
        """
        function_names = sorted({f.name for f in functions if f.name})
        component_names = sorted({c.name for c in components if c.name})

        if not function_names and not component_names:
            return UsageIndex()

        logger.info(
            "Resolving usages of %d functions and %d components across %d files",
            len(function_names), len(component_names), len(files),
        )

        def scan(file: FileRecord) -> Optional[Tuple[Set[str], Set[str]]]:
            if cancelled is not None and cancelled.is_set():
                return None
            return self._scan_file(root / file.relative_path, function_names, component_names)

        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            per_file = list(pool.map(scan, files))

        if any(entry is None for entry in per_file):
            raise AnalysisCancelledError("Usage resolution cancelled before completion")

        function_usage: Dict[str, List[str]] = {name: [] for name in function_names}
        component_usage: Dict[str, List[str]] = {name: [] for name in component_names}

        # Merge in catalog order so usage tuples are deterministic
        for file, (used_functions, used_components) in zip(files, per_file):
            for name in used_functions:
                function_usage[name].append(file.relative_path)
            for name in used_components:
                component_usage[name].append(file.relative_path)

        return UsageIndex(
            functions={
                f.key: tuple(function_usage[f.name]) if f.name else () for f in functions
            },
            components={
                c.key: tuple(component_usage[c.name]) if c.name else () for c in components
            },
        )

    def _scan_file(
        self,
        path: Path,
        function_names: Sequence[str],
        component_names: Sequence[str],
    ) -> Tuple[Set[str], Set[str]]:
        try:
            content = self.content_source.load(path)
        except ContentUnavailableError as e:
            logger.warning("Skipping usage scan of %s: %s", path, e)
            return set(), set()

        used_functions = {name for name in function_names if f"{name}(" in content}
        used_components = {
            name
            for name in component_names
            if any(needle in content for needle in component_references(name))
        }
        return used_functions, used_components
