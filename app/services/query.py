"""
SQL building for the region queries.

A Query keeps its text fragments and bound values apart, so the same query
can be rendered with `?` marks (MySQL), `$1, $2, ...` (PostgreSQL) or the
`:p1, :p2, ...` names SQLAlchemy's `text()` executes. Values are never
written into the SQL text.
"""
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.sql.elements import TextClause

from app.models.levels import Level


class PlaceholderStyle(str, Enum):
    QMARK = "qmark"
    NUMERIC = "numeric"
    NAMED = "named"


class _Bind:
    __slots__ = ("position",)

    def __init__(self, position: int):
        self.position = position


class Query:
    def __init__(self, sql: str = ""):
        self._parts: List[Union[str, _Bind]] = []
        self.args: List[Any] = []
        if sql:
            self.sql(sql)

    def sql(self, fragment: str) -> "Query":
        self._parts.append(fragment)
        return self

    def param(self, value: Any) -> "Query":
        self.args.append(value)
        self._parts.append(_Bind(len(self.args)))
        return self

    def render(self, style: PlaceholderStyle = PlaceholderStyle.QMARK) -> str:
        out = []
        for part in self._parts:
            if isinstance(part, _Bind):
                if style == PlaceholderStyle.NUMERIC:
                    out.append(f"${part.position}")
                elif style == PlaceholderStyle.NAMED:
                    out.append(f":p{part.position}")
                else:
                    out.append("?")
            else:
                out.append(part)
        return "".join(out)

    def params(self) -> Dict[str, Any]:
        return {f"p{i}": value for i, value in enumerate(self.args, start=1)}

    def statement(self) -> TextClause:
        return text(self.render(PlaceholderStyle.NAMED))

    def __repr__(self):
        return f"Query({self.render()!r}, args={self.args!r})"


def placeholder_style(engine: Engine) -> PlaceholderStyle:
    """Native placeholder style of the engine's backend, used for logging."""
    if engine.dialect.name == "postgresql":
        return PlaceholderStyle.NUMERIC
    return PlaceholderStyle.QMARK


# ==================
# QUERY SHAPES
# ==================

def select_page(level: Level, search: Optional[str], limit: int, offset: int) -> Query:
    q = Query(f"SELECT id, {level.name_column} FROM {level.table}")
    if search:
        q.sql(f" WHERE {level.name_column} LIKE ").param(f"%{search}%")
    q.sql(" ORDER BY id ASC LIMIT ").param(limit).sql(" OFFSET ").param(offset)
    return q


def select_by_id(level: Level, item_id: int) -> Query:
    return Query(f"SELECT id, {level.name_column} FROM {level.table} WHERE id = ").param(item_id)


def count_by_key(table_level: Level, key_level: Level, key_id: int) -> Query:
    return (
        Query(f"SELECT COUNT(*) FROM {table_level.table} WHERE {key_level.key_column} = ")
        .param(key_id)
    )


def select_children(parent: Level, parent_id: int) -> Query:
    child = parent.child
    return (
        Query(f"SELECT id, {child.name_column} FROM {child.table} WHERE {parent.key_column} = ")
        .param(parent_id)
    )


def count_all(level: Level) -> Query:
    return Query(f"SELECT COUNT(*) FROM {level.table}")


def probe_table(level: Level) -> Query:
    return Query(f"SELECT 1 FROM {level.table} LIMIT 1")
