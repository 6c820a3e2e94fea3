"""Heuristic SQL classification for query blocks.

This is deliberately not a SQL parser. The primary table is the first match of a
fixed list of patterns, so on compound statements the FROM clause always wins
over a later JOIN or UPDATE.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from ..models import COMPLEXITY_HIGH, COMPLEXITY_LOW, COMPLEXITY_MEDIUM

TABLE_NOT_APPLICABLE = "N/A"
TABLE_UNKNOWN = "Unknown"

LOW_THRESHOLD = 5
MEDIUM_THRESHOLD = 15

_NAME = r"([a-z_\[\"`][\w.\[\]\"`$#]*)"

# Priority order: the first pattern that matches names the table
_TABLE_PATTERNS = [
    re.compile(r"\bfrom\s+" + _NAME),
    re.compile(r"\binsert\s+into\s+" + _NAME),
    re.compile(r"\bupdate\s+" + _NAME),
    re.compile(r"\bdelete\s+from\s+" + _NAME),
]
_JOIN_PATTERN = re.compile(r"\bjoin\s+" + _NAME)

_STATEMENT_KEYWORDS = ("SELECT", "INSERT", "UPDATE", "DELETE")
_CLAUSE_KEYWORDS = ("JOIN", "WHERE", "HAVING", "AND", "OR", "GROUP BY", "ORDER BY")

_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class SqlProfile:
    """Inferred primary table and complexity tier of one SQL statement."""

    table: str
    complexity: str
    score: int


def normalize_sql(sql: str) -> str:
    """Collapse whitespace runs to single spaces and trim."""
    return _WHITESPACE.sub(" ", sql).strip()


def _count_keyword(text: str, keyword: str) -> int:
    # Plain substring occurrences: "ORDERS" and "ORDER BY" both contain OR
    return text.count(keyword)


def _clean_table_name(raw: str) -> str:
    name = raw.rstrip(".").split(".")[-1]
    return name.strip("[]\"`")


class SqlAnalyzer:
    """Infers the primary table and a coarse complexity tier of a query."""

    def analyze(self, sql: str | None) -> SqlProfile:
        score = self.score(sql or "")
        return SqlProfile(
            table=self.infer_table(sql),
            complexity=self.tier(score),
            score=score,
        )

    def infer_table(self, sql: str | None) -> str:
        if sql is None or not sql.strip():
            return TABLE_NOT_APPLICABLE

        clean_sql = normalize_sql(sql).lower()

        for pattern in _TABLE_PATTERNS:
            match = pattern.search(clean_sql)
            if match:
                return _clean_table_name(match.group(1)) or TABLE_UNKNOWN

        match = _JOIN_PATTERN.search(clean_sql)
        if match:
            return _clean_table_name(match.group(1)) or TABLE_UNKNOWN

        return TABLE_UNKNOWN

    def score(self, sql: str) -> int:
        """Keyword-weighted complexity score.

        One point per statement keyword present, one per JOIN and per
        condition/grouping keyword occurrence, plus one per SELECT beyond the
        first (so a statement without SELECT loses a point). Keywords match as
        substrings, so an identifier such as ORDERS adds an OR. Never negative.
        """
        upper_sql = normalize_sql(sql).upper()

        score = sum(1 for kw in _STATEMENT_KEYWORDS if kw in upper_sql)
        score += sum(_count_keyword(upper_sql, kw) for kw in _CLAUSE_KEYWORDS)
        # Each SELECT beyond the first approximates one level of subquery
        score += _count_keyword(upper_sql, "SELECT") - 1
        return max(0, score)

    @staticmethod
    def tier(score: int) -> str:
        if score <= LOW_THRESHOLD:
            return COMPLEXITY_LOW
        if score <= MEDIUM_THRESHOLD:
            return COMPLEXITY_MEDIUM
        return COMPLEXITY_HIGH
