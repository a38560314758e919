"""Predicate trees over thread rows.

Filters are built as immutable trees of :class:`Compare`, :class:`And` and
:class:`Or` nodes and handed to a store. Two interpreters are provided:
:func:`evaluate` checks a single in-memory row and :func:`to_sql` compiles a
tree into a SQLAlchemy boolean clause.

``And(())`` is always true and ``Or(())`` is always false.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from sqlalchemy import and_, false, or_, true
from sqlalchemy.sql.elements import ColumnElement

__all__ = [
    "And",
    "Compare",
    "MATCH_ALL",
    "Op",
    "Or",
    "Predicate",
    "ThreadField",
    "evaluate",
    "to_sql",
]


class ThreadField(str, Enum):
    """Columns of the thread relation that filters may reference."""

    KEY_ID = "key_id"
    FLUME_SEQ = "flume_seq"
    AUTHOR_ID = "author_id"
    REPLY_AUTHOR_ID = "reply_author_id"
    ROOT_KEY_ID = "root_key_id"
    CONTENT_TYPE = "content_type"
    IS_DECRYPTED = "is_decrypted"


class Op(str, Enum):
    """Comparison operators understood by both interpreters."""

    EQ = "eq"
    IN = "in"
    GT = "gt"
    LT = "lt"
    IS_NULL = "is_null"


@dataclass(frozen=True)
class Compare:
    """Leaf node comparing one field against a value."""

    field: ThreadField
    op: Op
    value: Any = None

    def __post_init__(self) -> None:
        if self.op is Op.IN:
            # Normalise so trees compare equal regardless of the input container.
            object.__setattr__(self, "value", tuple(self.value))


@dataclass(frozen=True)
class And:
    children: tuple[Predicate, ...] = ()


@dataclass(frozen=True)
class Or:
    children: tuple[Predicate, ...] = ()


Predicate = Union[Compare, And, Or]

MATCH_ALL: Predicate = And(())


def _compare_value(compare: Compare, actual: Any) -> bool:
    if compare.op is Op.IS_NULL:
        return actual is None
    # SQL semantics: NULL never satisfies a comparison.
    if actual is None:
        return False
    if compare.op is Op.EQ:
        return actual == compare.value
    if compare.op is Op.IN:
        return actual in compare.value
    if compare.op is Op.GT:
        return actual > compare.value
    if compare.op is Op.LT:
        return actual < compare.value
    raise ValueError(f"Unsupported operator: {compare.op!r}")


def evaluate(predicate: Predicate, row: Mapping[str, Any]) -> bool:
    """Return whether ``row`` satisfies ``predicate``.

    Args:
        predicate: Tree to evaluate.
        row: Mapping from :class:`ThreadField` values to column values.
    """
    if isinstance(predicate, Compare):
        return _compare_value(predicate, row.get(predicate.field.value))
    if isinstance(predicate, And):
        return all(evaluate(child, row) for child in predicate.children)
    if isinstance(predicate, Or):
        return any(evaluate(child, row) for child in predicate.children)
    raise TypeError(f"Not a predicate: {predicate!r}")


def to_sql(predicate: Predicate, columns: Mapping[ThreadField, Any]) -> ColumnElement[bool]:
    """Compile ``predicate`` into a SQLAlchemy clause.

    Args:
        predicate: Tree to compile.
        columns: Column expression to use for each :class:`ThreadField`.
    """
    if isinstance(predicate, Compare):
        column = columns[predicate.field]
        if predicate.op is Op.IS_NULL:
            return column.is_(None)
        if predicate.op is Op.EQ:
            return column == predicate.value
        if predicate.op is Op.IN:
            if not predicate.value:
                return false()
            return column.in_(predicate.value)
        if predicate.op is Op.GT:
            return column > predicate.value
        if predicate.op is Op.LT:
            return column < predicate.value
        raise ValueError(f"Unsupported operator: {predicate.op!r}")
    if isinstance(predicate, And):
        if not predicate.children:
            return true()
        return and_(*(to_sql(child, columns) for child in predicate.children))
    if isinstance(predicate, Or):
        if not predicate.children:
            return false()
        return or_(*(to_sql(child, columns) for child in predicate.children))
    raise TypeError(f"Not a predicate: {predicate!r}")
