"""Encoding-tolerant file content loading with a shared read-through cache.

Legacy template trees mix UTF-8, Latin-1 and Windows code pages, sometimes in
the same directory. ``ContentLoader`` tries a fixed list of encodings and, when
all of them fail, degrades to a byte-level decode that cannot fail. The only
error that escapes is :class:`ContentUnavailableError`, raised when the bytes
themselves cannot be read.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Protocol, Sequence, runtime_checkable

from ..config import DEFAULT_ENCODINGS
from ..errors import ContentUnavailableError

logger = logging.getLogger(__name__)

_ALLOWED_CONTROL = {0x09, 0x0A, 0x0D}


@runtime_checkable
class ContentSource(Protocol):
    """Anything that turns a file path into text."""

    def load(self, path: Path) -> str:
        ...


def sanitize_bytes(data: bytes) -> str:
    """Decode bytes one by one, keeping printable ASCII, Latin-1 and tab/CR/LF.

    Every other byte becomes a space, so the result has one character per
    input byte.
    """
    chars = []
    for byte in data:
        if 32 <= byte <= 126 or 160 <= byte <= 255 or byte in _ALLOWED_CONTROL:
            chars.append(chr(byte))
        else:
            chars.append(" ")
    return "".join(chars)


class ContentLoader:
    """Loads file text, trying each configured encoding in order."""

    def __init__(self, encodings: Sequence[str] | None = None) -> None:
        self.encodings = list(encodings) if encodings else DEFAULT_ENCODINGS.copy()

    def load(self, path: Path) -> str:
        """Return the text of *path*.

        Raises:
            ContentUnavailableError: if the file bytes cannot be read.
        """
        try:
            data = Path(path).read_bytes()
        except OSError as e:
            raise ContentUnavailableError(f"Cannot read file {path}: {e}") from e

        return self.decode(data, source=str(path))

    def decode(self, data: bytes, source: str = "<bytes>") -> str:
        for encoding in self.encodings:
            try:
                return data.decode(encoding)
            except (UnicodeDecodeError, LookupError) as e:
                logger.debug("Could not decode %s as %s: %s", source, encoding, e)

        logger.warning("No configured encoding could decode %s, using byte fallback", source)
        return sanitize_bytes(data)


class ContentCache:
    """Read-through cache keyed by absolute path.

    Each key is loaded at most once, no matter how many threads ask for it.
    Failed reads are remembered and re-raised without touching storage again.
    """

    def __init__(self, loader: ContentSource | None = None) -> None:
        self._loader = loader or ContentLoader()
        self._entries: dict[Path, str | ContentUnavailableError] = {}
        self._locks: dict[Path, threading.Lock] = {}
        self._guard = threading.Lock()

    def _lock_for(self, key: Path) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.Lock()
            return lock

    def load(self, path: Path) -> str:
        key = Path(path).absolute()
        entry = self._entries.get(key)
        if entry is None:
            with self._lock_for(key):
                entry = self._entries.get(key)
                if entry is None:
                    try:
                        entry = self._loader.load(key)
                    except ContentUnavailableError as e:
                        entry = e
                    self._entries[key] = entry

        if isinstance(entry, ContentUnavailableError):
            raise entry
        return entry

    def __contains__(self, path: object) -> bool:
        return isinstance(path, Path) and path.absolute() in self._entries

    def __len__(self) -> int:
        return len(self._entries)
