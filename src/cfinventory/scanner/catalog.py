"""File catalog scanner."""

import logging
import os
from datetime import datetime
from pathlib import Path
from typing import List, Set
from pathspec import PathSpec
from pathspec.patterns.gitwildmatch import GitWildMatchPattern
from ..config import Config
from ..errors import ContentUnavailableError, InvalidRootError
from ..loader import ContentLoader, ContentSource
from ..models import (
    FILE_TYPE_COMPONENT,
    FILE_TYPE_MARKUP,
    FILE_TYPE_TEMPLATE,
    FILE_TYPE_UNKNOWN,
    FileRecord,
)

logger = logging.getLogger(__name__)

_FILE_TYPES = {
    "cfm": FILE_TYPE_TEMPLATE,
    "cfml": FILE_TYPE_TEMPLATE,
    "cfc": FILE_TYPE_COMPONENT,
    "htm": FILE_TYPE_MARKUP,
    "html": FILE_TYPE_MARKUP,
}


def classify_extension(extension: str) -> str:
    """Map a file extension (with or without dot, any case) to a file type."""
    return _FILE_TYPES.get(extension.lower().lstrip("."), FILE_TYPE_UNKNOWN)


def count_lines(content: str) -> int:
    """Number of newline-delimited segments; a trailing newline adds no line.

    Only "\\n" separates lines. Characters such as U+0085, which a Latin-1
    decode produces from the Windows-1252 ellipsis, are ordinary text.
    """
    if not content:
        return 0
    return content.count("\n") + (0 if content.endswith("\n") else 1)


class FileCatalog:
    """Walks an analysis root and records every file that survives the filters."""

    def __init__(self, config: Config, content_source: ContentSource | None = None):
        """Initialize scanner with configuration.

        Args:
            config: Application configuration with exclusion rules
            content_source: Reads analyzable templates for line counting; pass
                the run's shared cache here. Other files are read with a
                plain loader so their text is not kept.
        """
        self.config = config
        self.plain_loader = ContentLoader(config.encodings)
        self.content_source = content_source or self.plain_loader
        self.unreadable: List[str] = []
        self.ignored_dirs: Set[str] = {d.lower() for d in config.ignored_dirs}
        self.binary_extensions: Set[str] = {
            e.lower().lstrip(".") for e in config.binary_extensions
        }
        self.artifact_spec = PathSpec.from_lines(
            GitWildMatchPattern, [p.lower() for p in config.artifact_patterns]
        )

    def scan(self, root: Path) -> List[FileRecord]:
        """Scan the tree under *root*.

        Args:
            root: Analysis root directory

        Returns:
            One FileRecord per regular, non-excluded file, in sorted walk order.
            Files whose content could not be read keep line_count 0 and are
            listed in ``self.unreadable``.

        Raises:
            InvalidRootError: if root does not exist or is not a directory
        """
        root = Path(root)
        if not root.is_dir():
            raise InvalidRootError(f"Analysis root is not a directory: {root}")

        gitignore_spec = self._load_gitignore(root) if self.config.respect_gitignore else None
        records: List[FileRecord] = []
        self.unreadable = []

        for current, dirs, filenames in os.walk(root):
            current_path = Path(current)

            # Prune directories before descending further
            dirs[:] = sorted(
                d for d in dirs
                if not self._is_excluded_dir(current_path / d, root, gitignore_spec)
            )

            for filename in sorted(filenames):
                file_path = current_path / filename
                if not file_path.is_file():
                    continue
                if self._is_excluded_file(file_path, root, gitignore_spec):
                    continue

                record = self._create_record(file_path, root)
                if record is not None:
                    records.append(record)

        logger.info("Cataloged %d files under %s", len(records), root)
        return records

    def is_excluded(self, relative_path: str) -> bool:
        """Check a root-relative POSIX path against the three exclusion filters."""
        parts = relative_path.replace("\\", "/").split("/")
        if any(part.lower() in self.ignored_dirs for part in parts[:-1]):
            return True
        return self._excluded_name(parts[-1])

    def _excluded_name(self, name: str) -> bool:
        lowered = name.lower()
        extension = lowered.rsplit(".", 1)[1] if "." in lowered else ""
        if extension in self.binary_extensions:
            return True
        return self.artifact_spec.match_file(lowered)

    def _is_excluded_dir(self, path: Path, root: Path, gitignore_spec: PathSpec | None) -> bool:
        if path.name.lower() in self.ignored_dirs:
            return True
        if gitignore_spec and gitignore_spec.match_file(path.relative_to(root).as_posix() + "/"):
            return True
        return False

    def _is_excluded_file(self, path: Path, root: Path, gitignore_spec: PathSpec | None) -> bool:
        rel_path = path.relative_to(root).as_posix()
        if self.is_excluded(rel_path):
            return True
        if gitignore_spec and gitignore_spec.match_file(rel_path):
            return True
        return False

    def _create_record(self, path: Path, root: Path) -> FileRecord | None:
        try:
            stat = path.stat()
        except OSError as e:
            logger.warning("Skipping %s, cannot read metadata: %s", path, e)
            return None

        extension = path.suffix.lower().lstrip(".")
        source = self.content_source if self.config.is_template(extension) else self.plain_loader
        try:
            line_count = count_lines(source.load(path))
        except ContentUnavailableError as e:
            logger.warning("Could not count lines in %s: %s", path, e)
            self.unreadable.append(path.relative_to(root).as_posix())
            line_count = 0

        return FileRecord(
            relative_path=path.relative_to(root).as_posix(),
            name=path.name,
            extension=extension,
            file_type=classify_extension(extension),
            size=stat.st_size,
            line_count=line_count,
            last_modified=datetime.fromtimestamp(stat.st_mtime),
        )

    def _load_gitignore(self, root: Path) -> PathSpec | None:
        """Load .gitignore patterns if present."""
        gitignore_path = root / ".gitignore"
        if not gitignore_path.exists():
            return None

        try:
            patterns = gitignore_path.read_text().splitlines()
        except OSError:
            return None

        if not patterns:
            return None

        return PathSpec.from_lines(GitWildMatchPattern, patterns)
