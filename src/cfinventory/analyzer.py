"""Two-pass analysis pipeline.

Pass 1 catalogs the tree and extracts tag records from every template file.
Pass 2 resolves, for each declared function and component, the files that
reference it. Both passes run on a bounded thread pool and share one content
cache, so each file is read from storage at most once.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import List, Optional

from .config import Config
from .errors import AnalysisCancelledError, ContentUnavailableError, InvalidRootError
from .extractor import TagExtractor
from .loader import ContentCache, ContentLoader
from .models import AnalysisResult, ExtractedElements, FileRecord
from .resolver import DependencyResolver
from .scanner import FileCatalog

logger = logging.getLogger(__name__)

# Marks a file unit that never started because the run was cancelled
_CANCELLED = object()


class TemplateAnalyzer:
    """High-level facade for analysing a template tree.

    Usage:
        analyzer = TemplateAnalyzer(Config())
        result = analyzer.analyze(Path("/srv/legacy-app"))
        print(result.summary())
    """

    def __init__(self, config: Config | None = None, extractor: TagExtractor | None = None):
        self.config = config or Config()
        self.extractor = extractor or TagExtractor()
        self._cancelled = threading.Event()

    def cancel(self) -> None:
        """Stop launching new file units; in-flight ones finish normally."""
        self._cancelled.set()

    def analyze(self, root: Path) -> AnalysisResult:
        """Run the full pipeline over *root*.

        Args:
            root: Analysis root directory

        Returns:
            Immutable AnalysisResult. Files whose bytes could not be read,
            templates or not, are logged and left out of it.

        Raises:
            InvalidRootError: if root does not exist or is not a directory
            AnalysisCancelledError: if cancel() was called during the run
        """
        root = Path(root)
        if not root.exists() or not root.is_dir():
            raise InvalidRootError(f"Analysis root does not exist or is not a directory: {root}")

        self._cancelled.clear()
        logger.info("Analyzing directory: %s", root.resolve())

        cache = ContentCache(ContentLoader(self.config.encodings))
        scanner = FileCatalog(self.config, cache)
        catalog = scanner.scan(root)
        templates = [f for f in catalog if self.config.is_template(f.extension)]
        logger.info("Found %d template files to analyze", len(templates))

        # First pass: extraction, partitioned per file and merged in catalog order
        def extract(file: FileRecord):
            if self._cancelled.is_set():
                return _CANCELLED
            return self._extract_file(cache, root, file)

        with ThreadPoolExecutor(max_workers=self.config.max_workers) as pool:
            extracted = list(pool.map(extract, templates))

        self._raise_if_cancelled()

        # Files that could not be read at all are left out of the result
        unreadable = set(scanner.unreadable)
        unreadable.update(
            file.relative_path for file, elements in zip(templates, extracted) if elements is None
        )
        parts: List[ExtractedElements] = [e for e in extracted if e is not None]
        readable_templates = [f for f in templates if f.relative_path not in unreadable]

        functions = tuple(r for part in parts for r in part.functions)
        components = tuple(r for part in parts for r in part.components)

        # Second pass: usage resolution over the cached content
        resolver = DependencyResolver(cache, max_workers=self.config.max_workers)
        usage = resolver.resolve(
            functions, components, readable_templates, root, cancelled=self._cancelled
        )
        self._raise_if_cancelled()

        result = AnalysisResult(
            root=str(root.resolve()),
            files=tuple(f for f in catalog if f.relative_path not in unreadable),
            queries=tuple(r for part in parts for r in part.queries),
            functions=usage.apply_functions(functions),
            components=usage.apply_components(components),
            invokes=tuple(r for part in parts for r in part.invokes),
            includes=tuple(r for part in parts for r in part.includes),
            modules=tuple(r for part in parts for r in part.modules),
        )

        counts = result.summary()
        logger.info(
            "Analysis complete: %d files, %d queries, %d functions, %d components, "
            "%d invokes, %d includes, %d modules",
            counts["files"], counts["queries"], counts["functions"], counts["components"],
            counts["invokes"], counts["includes"], counts["modules"],
        )
        return result

    def _extract_file(
        self, cache: ContentCache, root: Path, file: FileRecord
    ) -> Optional[ExtractedElements]:
        try:
            content = cache.load(root / file.relative_path)
        except ContentUnavailableError as e:
            logger.warning("Skipping unreadable file %s: %s", file.relative_path, e)
            return None
        return self.extractor.extract(content, file.relative_path)

    def _raise_if_cancelled(self) -> None:
        if self._cancelled.is_set():
            raise AnalysisCancelledError("Analysis cancelled before completion")


def analyze_directory(root: Path, config: Config | None = None) -> AnalysisResult:
    """Convenience wrapper around :class:`TemplateAnalyzer`."""
    return TemplateAnalyzer(config).analyze(root)
