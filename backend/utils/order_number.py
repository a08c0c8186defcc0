# backend/utils/order_number.py
from datetime import date
from typing import Optional

from sqlalchemy import func, update
from sqlalchemy.orm import Session

from models.order import Order, OrderSequence

PREFIX = "ORD"


def period_of(day: date) -> str:
    return f"{day.year}{day.month:02d}"


def format_order_number(period: str, seq: int) -> str:
    return f"{PREFIX}-{period}-{seq:04d}"


def next_order_number(db: Session, today: Optional[date] = None) -> str:
    """
    Reserve the next ORD-YYYYMM-#### number for the month of `today`.

    Must run inside the caller's transaction, and before any read in it: the
    UPDATE takes the write lock (SQLite) or the row lock (PostgreSQL) and keeps
    it until commit, so concurrent creators are serialized. A month without a
    counter row is seeded from the orders already numbered in that month.
    """
    period = period_of(today or date.today())

    bumped = db.execute(
        update(OrderSequence)
        .where(OrderSequence.period == period)
        .values(last_value=OrderSequence.last_value + 1)
    )

    if bumped.rowcount:
        value = db.query(OrderSequence.last_value).filter(OrderSequence.period == period).scalar()
    else:
        existing = db.query(func.count(Order.id)).filter(
            Order.order_number.like(f"{PREFIX}-{period}%")
        ).scalar()
        value = (existing or 0) + 1
        db.add(OrderSequence(period=period, last_value=value))
        db.flush()

    return format_order_number(period, value)
