"""Point-lookup attribute parsing for already isolated tag fragments."""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Iterable, Iterator

_ATTRIBUTE = re.compile(
    r"""(?<![\w-])([\w:.-]+)\s*=\s*(?:"([^"]*)"|'([^']*)')""",
)


@lru_cache(maxsize=128)
def _lookup_pattern(name: str) -> re.Pattern[str]:
    return re.compile(
        rf"""(?<![\w-]){re.escape(name)}\s*=\s*(?:"([^"]*)"|'([^']*)')""",
        re.IGNORECASE,
    )


def extract_attribute(fragment: str, name: str) -> str | None:
    """Return the value of the first ``name="..."`` or ``name='...'`` in *fragment*.

    The key is matched case-insensitively; a missing attribute gives None.
    """
    match = _lookup_pattern(name).search(fragment)
    if match is None:
        return None
    return match.group(1) if match.group(1) is not None else match.group(2)


def iter_attributes(fragment: str) -> Iterator[tuple[str, str]]:
    """Yield every quoted ``key=value`` pair in source order."""
    for match in _ATTRIBUTE.finditer(fragment):
        value = match.group(2) if match.group(2) is not None else match.group(3)
        yield match.group(1), value


def format_attributes(fragment: str, exclude: Iterable[str] = ()) -> tuple[str, ...]:
    """Render attributes as ``key=value`` strings, skipping *exclude* (case-insensitive)."""
    skipped = {name.lower() for name in exclude}
    return tuple(
        f"{key}={value}" for key, value in iter_attributes(fragment) if key.lower() not in skipped
    )
