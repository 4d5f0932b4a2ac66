"""Query helpers shared by the SQLAlchemy repositories."""

from datetime import date
from typing import TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.orm import InstrumentedAttribute, Session

from cargodesk.application.common.pagination import Pagination
from cargodesk.domain.common.value_objects.reference_number import ReferenceFormat

M = TypeVar("M")


def next_reference(
    db: Session,
    column: InstrumentedAttribute[str],
    reference_format: ReferenceFormat,
    on: date,
) -> str:
    """
    Return the next free reference of ``reference_format`` for the period of ``on``.

    Soft-deleted rows still count, so a number is never handed out twice.
    """
    prefix = reference_format.period_prefix(on)
    stmt = select(func.max(column)).where(column.like(f"{prefix}%"))
    last = db.execute(stmt).scalar_one_or_none()
    return reference_format.next_after(on, last)


def paginate(db: Session, stmt: Select[tuple[M]], pagination: Pagination) -> tuple[list[M], int]:
    """Run ``stmt`` for one page and count every matching row."""
    count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
    total = db.execute(count_stmt).scalar_one()
    page = stmt.offset(pagination.offset).limit(pagination.limit)
    return list(db.execute(page).scalars().all()), total
