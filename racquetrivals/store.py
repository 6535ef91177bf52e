"""Slot store adapter: the record access the gate and the scoring engine consume.

Handlers never build SQL themselves. They ask the store for records by id or by
a small filter language::

    draw_id=3&&round=3&&name!=""

Each clause is ``field=value`` or ``field!=value``; values are double/single
quoted strings or bare integers; clauses are joined with ``&&``. Sort
expressions are comma separated field names, prefixed with ``-`` for
descending order.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from typing import Any, Optional, Protocol, TypeVar

from sqlalchemy import ColumnElement, Select, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .exceptions import FilterSyntaxError, RecordNotFoundError, StoreWriteError
from .models import Base, Draw

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)

_CLAUSE_RE = re.compile(
    r"""
    \s*(?P<field>[A-Za-z_][A-Za-z0-9_]*)
    \s*(?P<op>!=|=)
    \s*(?P<value>"(?:[^"\\]|\\.)*"|'(?:[^'\\]|\\.)*'|-?\d+)
    \s*(?P<sep>&&|$)
    """,
    re.VERBOSE,
)


class SlotStore(Protocol):
    """Record access required by the slot-update handlers."""

    def get_by_id(self, model: type[ModelT], record_id: Any) -> ModelT: ...

    def list_by_filter(
        self,
        model: type[ModelT],
        filter_expr: str = "",
        sort: str = "",
        limit: int = -1,
        offset: int = 0,
    ) -> list[ModelT]: ...

    def save(self, record: Base) -> None: ...

    def close_prediction_window(self, draw: Draw, close_at: datetime) -> bool: ...


def _column(model: type[Base], field: str):
    columns = model.__table__.columns
    if field not in columns:
        raise FilterSyntaxError(
            f"Unknown field '{field}' for {model.__name__}"
        )
    return getattr(model, field), columns[field]


def _coerce(raw: str, python_type: Optional[type]) -> Any:
    if raw[0] in "\"'":
        value: Any = re.sub(r"\\(.)", r"\1", raw[1:-1])
    else:
        value = int(raw)
    # round="3" and round=3 must mean the same thing on an integer column
    if python_type is int and isinstance(value, str) and value != "":
        try:
            return int(value)
        except ValueError as exc:
            raise FilterSyntaxError(f"Expected an integer, got {raw}") from exc
    if python_type is str and not isinstance(value, str):
        return str(value)
    return value


def compile_filter(model: type[Base], filter_expr: str) -> list[ColumnElement[bool]]:
    """Translate a ``field="value"&&field2!=""`` expression into where clauses.

    Parameters
    ----------
    model : type[Base]
        Mapped class the fields belong to.
    filter_expr : str
        Conjunction of equality / non-equality clauses. An empty or blank
        expression matches every row.

    Returns
    -------
    list[ColumnElement[bool]]
        Clauses to pass to :meth:`Select.where`.

    Raises
    ------
    FilterSyntaxError
        If the expression is malformed or names an unknown column.
    """

    clauses: list[ColumnElement[bool]] = []
    text = filter_expr.strip()
    if not text:
        return clauses

    pos = 0
    while pos < len(text):
        match = _CLAUSE_RE.match(text, pos)
        if match is None or match.end() == pos:
            raise FilterSyntaxError(
                f"Cannot parse filter {filter_expr!r} at offset {pos}"
            )
        attr, column = _column(model, match.group("field"))
        try:
            python_type = column.type.python_type
        except NotImplementedError:  # pragma: no cover - exotic column types
            python_type = None
        value = _coerce(match.group("value"), python_type)
        if match.group("op") == "=":
            clauses.append(attr == value)
        else:
            clauses.append(attr != value)
        pos = match.end()
        if match.group("sep") == "&&" and pos >= len(text):
            raise FilterSyntaxError(f"Dangling '&&' in filter {filter_expr!r}")

    return clauses


def apply_sort(stmt: Select, model: type[Base], sort: str) -> Select:
    """Apply a ``"-round,position"`` style sort expression to ``stmt``."""

    for part in (p.strip() for p in sort.split(",")):
        if not part:
            continue
        descending = part.startswith("-")
        attr, _ = _column(model, part.lstrip("+-"))
        stmt = stmt.order_by(attr.desc() if descending else attr.asc())
    return stmt


class SQLAlchemyStore:
    """:class:`SlotStore` backed by a SQLAlchemy session.

    Every :meth:`save` commits, so a record written by a handler stays written
    even if a later write in the same invocation fails.
    Reads refresh objects already in the session from the database so that
    handlers never compare against values cached by an earlier read.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    @property
    def session(self) -> Session:
        return self._session

    def get_by_id(self, model: type[ModelT], record_id: Any) -> ModelT:
        record = self._session.get(model, record_id, populate_existing=True)
        if record is None:
            raise RecordNotFoundError(model.__name__, record_id)
        return record

    def list_by_filter(
        self,
        model: type[ModelT],
        filter_expr: str = "",
        sort: str = "",
        limit: int = -1,
        offset: int = 0,
    ) -> list[ModelT]:
        stmt = select(model).where(*compile_filter(model, filter_expr))
        stmt = apply_sort(stmt, model, sort)
        if not sort:
            stmt = stmt.order_by(model.__table__.c.id.asc())
        if limit >= 0:
            stmt = stmt.limit(limit)
        if offset > 0:
            stmt = stmt.offset(offset)
        stmt = stmt.execution_options(populate_existing=True)
        return list(self._session.scalars(stmt).all())

    def save(self, record: Base) -> None:
        try:
            self._session.add(record)
            self._session.commit()
        except SQLAlchemyError as exc:
            self._session.rollback()
            logger.error(f"Failed to save {type(record).__name__}: {exc}")
            raise StoreWriteError(
                f"Failed to save {type(record).__name__}: {exc}"
            ) from exc

    def close_prediction_window(self, draw: Draw, close_at: datetime) -> bool:
        """Set ``draw.prediction_close`` only if no one else has set it yet.

        Returns ``True`` when this call performed the transition and ``False``
        when the draw was already closed by a concurrent update.
        """

        stmt = (
            update(Draw)
            .where(Draw.id == draw.id, Draw.prediction_close.is_(None))
            .values(prediction_close=close_at, updated_at=datetime.now(timezone.utc))
            .execution_options(synchronize_session=False)
        )
        try:
            result = self._session.execute(stmt)
            self._session.commit()
        except SQLAlchemyError as exc:
            self._session.rollback()
            raise StoreWriteError(
                f"Failed to close predictions for draw {draw.id}: {exc}"
            ) from exc

        self._session.refresh(draw)
        return result.rowcount == 1


__all__ = [
    "SlotStore",
    "SQLAlchemyStore",
    "compile_filter",
    "apply_sort",
]
