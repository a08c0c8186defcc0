# backend/utils/totals.py
"""
Order arithmetic.

Line level:
    line_sale = quantity * price * (1 - discount_percent / 100)
    line_cost = quantity * cost

Order level:
    total_sale   = sum(line_sale) * (1 - discount_percent / 100) + extra_costs
    gross_profit = total_sale - sum(line_cost) - extra_costs

extra_costs is added on the sale side and taken off again in the profit, so
it never moves gross_profit, and the order discount never applies to it.
This is the agreed business rule; keep it as is.
"""
import logging
import math
from typing import Any, Iterable, List, Mapping, Union

from pydantic import BaseModel

logger = logging.getLogger(__name__)


def to_number(value: Any, default: float = 0.0) -> float:
    """
    Parse a numeric field from a request body, falling back to `default`.

    None, empty strings, unparsable strings, NaN/inf and unsupported types
    all give `default`. Booleans count as 0/1. Malformed non-empty input is
    logged, never raised.
    """
    if value is None:
        return default
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return default
        try:
            number = float(text)
        except ValueError:
            logger.warning("Non-numeric value %r replaced with %s", value, default)
            return default
    else:
        logger.warning("Unsupported numeric value %r replaced with %s", value, default)
        return default

    if not math.isfinite(number):
        logger.warning("Non-finite value %r replaced with %s", value, default)
        return default
    return number


class LineTotals(BaseModel):
    quantity: float
    cost: float
    price: float
    discount_percent: float
    line_sale: float
    line_cost: float


class OrderTotals(BaseModel):
    lines: List[LineTotals]
    discount_percent: float
    extra_costs: float
    subtotal: float
    total_sale: float
    total_cost: float
    gross_profit: float


def _field(item: Union[Mapping, Any], name: str) -> Any:
    if isinstance(item, Mapping):
        return item.get(name)
    return getattr(item, name, None)


def line_totals(item: Union[Mapping, Any]) -> LineTotals:
    qty = to_number(_field(item, "quantity"))
    cost = to_number(_field(item, "cost"))
    price = to_number(_field(item, "price"))
    disc = to_number(_field(item, "discount_percent"))
    return LineTotals(
        quantity=qty, cost=cost, price=price, discount_percent=disc,
        line_sale=qty * price * (1 - disc / 100),
        line_cost=qty * cost,
    )


def compute_totals(items: Iterable, discount_percent: Any = 0, extra_costs: Any = 0) -> OrderTotals:
    """Price every line and roll the order up. Pure: no I/O, never raises on bad numbers."""
    lines = [line_totals(it) for it in items or []]
    disc = to_number(discount_percent)
    extra = to_number(extra_costs)

    subtotal = sum(l.line_sale for l in lines)
    total_cost = sum(l.line_cost for l in lines)

    total_sale = subtotal * (1 - disc / 100) + extra
    gross_profit = total_sale - total_cost - extra

    return OrderTotals(
        lines=lines, discount_percent=disc, extra_costs=extra,
        subtotal=subtotal, total_sale=total_sale,
        total_cost=total_cost, gross_profit=gross_profit,
    )
