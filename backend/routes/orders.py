# backend/routes/orders.py
from typing import List, Optional
from datetime import date
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, selectinload
import json
import logging

from database import get_db, atomic
from models.order import Order, OrderItem
from schemas.order import (
    OrderPayload, OrderSummary, OrderDetail, OrderCreated, OrderUpdated
)
from utils.order_number import next_order_number
from utils.totals import compute_totals, OrderTotals

router = APIRouter(prefix="/api/orders", tags=["Orders"])
logger = logging.getLogger(__name__)

# Largest id a 64-bit INTEGER column can hold; anything above cannot exist
MAX_ORDER_ID = 2**63 - 1

# Header columns copied verbatim from the payload
_TEXT_FIELDS = (
    "client", "status", "currency", "payment_terms",
    "planned_start", "planned_end", "actual_ship", "logistics",
)

# Apply payload fields and computed totals to an order row
def _fill_order(order: Order, payload: OrderPayload, totals: OrderTotals) -> None:
    for field in _TEXT_FIELDS:
        setattr(order, field, getattr(payload, field))
    order.discount_percent = totals.discount_percent
    order.extra_costs = totals.extra_costs
    order.wedrive_folder = payload.wedrive_folder or ""
    order.attachments = json.dumps(payload.attachments or [])
    order.total_sale = totals.total_sale
    order.total_cost = totals.total_cost
    order.gross_profit = totals.gross_profit

# Build item rows from the payload and their priced lines
def _build_items(payload: OrderPayload, totals: OrderTotals) -> List[OrderItem]:
    return [
        OrderItem(
            product=it.product, sku=it.sku, color=it.color, size=it.size,
            quantity=line.quantity, cost=line.cost, price=line.price,
            discount_percent=line.discount_percent,
            line_sale=line.line_sale, line_cost=line.line_cost,
            note=it.note or "",
        )
        for it, line in zip(payload.items or [], totals.lines)
    ]


def create_order_record(db: Session, payload: OrderPayload, today: Optional[date] = None) -> Order:
    """
    Number, price and insert an order with its items in one transaction.
    The order number is reserved first so the sequence lock is the first
    statement of the transaction.
    """
    totals = compute_totals(payload.items, payload.discount_percent, payload.extra_costs)
    with atomic(db):
        order = Order(order_number=next_order_number(db, today))
        _fill_order(order, payload, totals)
        order.items = _build_items(payload, totals)
        db.add(order)
        db.flush()
    logger.info("Order %s created (id=%s, items=%d)", order.order_number, order.id, len(totals.lines))
    return order


def replace_order_record(db: Session, order_id: int, payload: OrderPayload) -> Optional[Order]:
    """
    Overwrite the order header and swap its whole item set in one transaction.
    Returns None, writing nothing, when the order does not exist.
    """
    totals = compute_totals(payload.items, payload.discount_percent, payload.extra_costs)
    with atomic(db):
        order = db.query(Order).filter(Order.id == order_id).first()
        if not order:
            return None
        _fill_order(order, payload, totals)
        # delete-orphan cascade removes the previous lines on flush
        order.items = _build_items(payload, totals)
        db.flush()
    logger.info("Order %s updated (id=%s, items=%d)", order.order_number, order.id, len(totals.lines))
    return order


# List all orders, newest first
@router.get("", response_model=List[OrderSummary])
def list_orders(db: Session = Depends(get_db)):
    try:
        return db.query(Order).order_by(Order.id.desc()).all()
    except SQLAlchemyError as e:
        logger.exception("Failed to list orders: %s", e)
        raise HTTPException(status_code=500, detail=str(e))


# Get details of a specific order with its items
@router.get("/{order_id}", response_model=OrderDetail)
def get_order(order_id: int, db: Session = Depends(get_db)):
    if abs(order_id) > MAX_ORDER_ID:
        raise HTTPException(status_code=404, detail="Not found")
    try:
        order = db.query(Order).options(selectinload(Order.items)).filter(Order.id == order_id).first()
    except SQLAlchemyError as e:
        logger.exception("Failed to load order %s: %s", order_id, e)
        raise HTTPException(status_code=500, detail=str(e))
    if not order:
        raise HTTPException(status_code=404, detail="Not found")
    return order


# Create order together with its items
@router.post("", response_model=OrderCreated)
def create_order(payload: OrderPayload, db: Session = Depends(get_db)):
    try:
        order = create_order_record(db, payload)
    except IntegrityError as e:
        logger.exception("Order number collision: %s", e)
        raise HTTPException(status_code=409, detail=f"Order number conflict, please retry: {e.orig}")
    except SQLAlchemyError as e:
        logger.exception("Failed to create order: %s", e)
        raise HTTPException(status_code=500, detail=str(e))
    return OrderCreated(order_id=order.id, order_number=order.order_number)


# Full replace of the order header and its items
@router.put("/{order_id}", response_model=OrderUpdated)
def update_order(order_id: int, payload: OrderPayload, db: Session = Depends(get_db)):
    if abs(order_id) > MAX_ORDER_ID:
        raise HTTPException(status_code=404, detail="Not found")
    try:
        order = replace_order_record(db, order_id, payload)
    except SQLAlchemyError as e:
        logger.exception("Failed to update order %s: %s", order_id, e)
        raise HTTPException(status_code=500, detail=str(e))
    if order is None:
        raise HTTPException(status_code=404, detail="Not found")
    return OrderUpdated(order_id=order.id)
