"""
SQL fragment builders shared by the CRUD layer.

Both builders use positional placeholders ($1..$n) numbered in insertion
order, with one bound value per placeholder.
"""

from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional

from app.core.errors import ValidationError


@dataclass
class QueryFragment:
    """A SET clause and the values bound to its placeholders."""
    clause: str
    values: List[Any]


@dataclass
class FilteredQuery:
    """A complete SELECT statement and its bound values."""
    sql: str
    values: List[Any]


def sql_for_partial_update(patch: Mapping[str, Any], column_map: Optional[Mapping[str, str]] = None) -> QueryFragment:
    """
    Build the SET clause for a partial update.

    Args:
        patch: Field name -> new value, e.g. {"firstName": "Aliya", "age": 32}
        column_map: Field name -> column name, e.g. {"firstName": "first_name"}.
            Fields missing from the map are used as the column name.

    Returns:
        QueryFragment with clause '"first_name"=$1, "age"=$2' and values
        ['Aliya', 32]. Callers continue numbering at len(values) + 1.

    Raises:
        ValidationError: If the patch is empty
    """
    keys = list(patch)
    if not keys:
        raise ValidationError("No data")

    column_map = column_map or {}
    cols = [f'"{column_map.get(key, key)}"=${idx}' for idx, key in enumerate(keys, start=1)]

    return QueryFragment(clause=", ".join(cols), values=[patch[key] for key in keys])


@dataclass
class WhereBuilder:
    """
    Accumulates WHERE predicates and their bound values.

    `add` binds a value and fills `{}` in the predicate with the next
    placeholder; `add_raw` appends a predicate that binds nothing.
    """
    predicates: List[str] = field(default_factory=list)
    values: List[Any] = field(default_factory=list)

    def add(self, predicate: str, value: Any) -> "WhereBuilder":
        self.values.append(value)
        self.predicates.append(predicate.format(f"${len(self.values)}"))
        return self

    def add_raw(self, predicate: str) -> "WhereBuilder":
        self.predicates.append(predicate)
        return self

    def build(self, base_select: str, order_by: str) -> FilteredQuery:
        sql = base_select
        if self.predicates:
            sql += " WHERE " + " AND ".join(self.predicates)
        sql += f" ORDER BY {order_by}"
        return FilteredQuery(sql=sql, values=list(self.values))
