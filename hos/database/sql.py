#!/usr/bin/env python3
"""
sql.py
--------------------
Partial-update helper shared by every manager's ``update``.

A partial update only touches the fields the caller supplied. Given those
fields and the fixed mapping of recognized field names to column names,
``sql_for_partial_update`` builds the SET clause with numbered bind
placeholders and the values in matching order:

    >>> patch = sql_for_partial_update(
    ...     {"first_name": "Aliya", "email": "aliya@wxyz.org"},
    ...     {"first_name": "firstname", "last_name": "lastname", "email": "email"},
    ... )
    >>> patch.set_clause
    '"firstname"=:p1, "email"=:p2'
    >>> patch.values
    ['Aliya', 'aliya@wxyz.org']
    >>> patch.params
    {'p1': 'Aliya', 'p2': 'aliya@wxyz.org'}

Column names come only from the mapping; values are always bound.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping

from hos.core.exceptions import BadRequestError

PLACEHOLDER_PREFIX = "p"


@dataclass(frozen=True)
class PartialUpdate:
    """
    SET clause and bind values for one partial update.

    Attributes:
        set_clause: ``"col"=:p1, "col2"=:p2`` in the caller's field order
        values: Values in the same order as the placeholders
        columns: Column names being assigned, in the same order
    """

    set_clause: str
    values: List[Any] = field(default_factory=list)
    columns: List[str] = field(default_factory=list)

    @property
    def params(self) -> Dict[str, Any]:
        """Bind parameters keyed by placeholder name (p1..pN)."""
        return {
            f"{PLACEHOLDER_PREFIX}{index}": value
            for index, value in enumerate(self.values, start=1)
        }


def sql_for_partial_update(
    data: Mapping[str, Any], field_to_column: Mapping[str, str]
) -> PartialUpdate:
    """
    Build the SET clause of an UPDATE from the supplied fields.

    Args:
        data: Field name -> new value, only for the fields being changed
        field_to_column: Every recognized field name -> its column name

    Returns:
        PartialUpdate whose i-th placeholder (``:p<i>``) binds ``values[i-1]``

    Raises:
        BadRequestError: If ``data`` is empty or names an unrecognized field
    """
    if not data:
        raise BadRequestError("No data")

    unknown = [name for name in data if name not in field_to_column]
    if unknown:
        raise BadRequestError(f"Cannot update unrecognized field(s): {', '.join(unknown)}")

    columns = [field_to_column[name] for name in data]
    assignments = [
        f'"{column}"=:{PLACEHOLDER_PREFIX}{index}'
        for index, column in enumerate(columns, start=1)
    ]
    return PartialUpdate(
        set_clause=", ".join(assignments),
        values=list(data.values()),
        columns=columns,
    )
