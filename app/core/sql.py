"""
SQL helpers shared by the repositories.

sql_for_partial_update() turns a sparse update mapping into the assignment list
of an UPDATE statement. query() executes statement text written with
positional $N placeholders through a SQLAlchemy session.
"""

import re
from collections.abc import Mapping
from typing import Any, Dict, List, NamedTuple, Optional, Sequence

from sqlalchemy import Table, bindparam, text
from sqlalchemy.engine import CursorResult
from sqlalchemy.orm import Session
from sqlalchemy.types import TypeEngine

from app.core.exceptions import BadRequestError

_PLACEHOLDER = re.compile(r"\$(\d+)")


class PartialUpdate(NamedTuple):
    """Compiled SET clause: '"first_name"=$1, "age"=$2' and [value1, value2]."""

    set_cols: str
    values: List[Any]
    columns: List[str]

    @property
    def next_placeholder(self) -> str:
        """Placeholder for the first parameter after the SET values."""
        return f"${len(self.values) + 1}"


def sql_for_partial_update(data_to_update: Mapping, js_to_sql: Dict[str, str]) -> PartialUpdate:
    """
    Build the SET clause for a partial update.

    Args:
        data_to_update: Fields to change mapped to their new values, e.g.
            {"firstName": "Aliya", "age": 32}
        js_to_sql: Field names whose column name differs, e.g.
            {"firstName": "first_name"}. Fields not listed are used as-is.

    Returns:
        PartialUpdate('"first_name"=$1, "age"=$2', ["Aliya", 32], ["first_name", "age"])

    Raises:
        BadRequestError: If there is nothing to update
    """
    if not isinstance(data_to_update, Mapping) or not data_to_update:
        raise BadRequestError("No data")

    columns = [js_to_sql.get(field, field) for field in data_to_update]
    cols = [f'"{column}"=${idx}' for idx, column in enumerate(columns, start=1)]

    return PartialUpdate(
        set_cols=", ".join(cols),
        values=list(data_to_update.values()),
        columns=columns,
    )


def column_types(table: Table, columns: Sequence[str]) -> List[Optional[TypeEngine]]:
    """Look up the SQLAlchemy type of each column; None for names not on the table."""
    return [table.c[column].type if column in table.c else None for column in columns]


def query(
    db: Session,
    sql: str,
    values: Sequence[Any] = (),
    types: Optional[Sequence[Optional[TypeEngine]]] = None,
) -> CursorResult:
    """
    Execute SQL written with $1, $2, ... placeholders.

    Each $N is bound to values[N-1]. When types is given, types[N-1] is used
    for the bind so the column's conversions apply (e.g. Decimal to float on
    SQLite).

    Engine errors such as an unknown column are not caught here.
    """
    binds = []
    for idx, value in enumerate(values, start=1):
        type_ = types[idx - 1] if types is not None and idx <= len(types) else None
        binds.append(bindparam(f"p{idx}", value, type_=type_))

    statement = text(_PLACEHOLDER.sub(lambda m: f":p{m.group(1)}", sql)).bindparams(*binds)
    return db.execute(statement)
