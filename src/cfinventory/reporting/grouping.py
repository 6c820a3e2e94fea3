"""Query grouping by declared name."""

from __future__ import annotations
from typing import Iterable, Optional
from pydantic import BaseModel, Field
from ..models import QueryRecord

UNNAMED_QUERY = "Unnamed"


class QueryGroup(BaseModel):
    """All occurrences of queries sharing one name."""

    name: str
    datasource: Optional[str] = None
    table: str
    locations: list[str] = Field(default_factory=list)
    sql_extracts: list[str] = Field(default_factory=list)

    @property
    def execution_count(self) -> int:
        return len(self.sql_extracts)


def group_queries(queries: Iterable[QueryRecord]) -> list[QueryGroup]:
    """Group queries by name, keeping first-seen order.

    Datasource and table come from the first occurrence of each name.
    """
    groups: dict[str, QueryGroup] = {}
    for query in queries:
        key = query.name or UNNAMED_QUERY
        group = groups.get(key)
        if group is None:
            group = groups[key] = QueryGroup(
                name=key, datasource=query.datasource, table=query.table
            )
        if query.location not in group.locations:
            group.locations.append(query.location)
        group.sql_extracts.append(query.sql)
    return list(groups.values())
