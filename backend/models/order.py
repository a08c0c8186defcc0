from sqlalchemy import Column, Integer, String, Float, Text, ForeignKey, DateTime, func
from sqlalchemy.orm import relationship
from database import Base

# Sales order header. Totals are always recomputed from the item set on write.
class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    order_number = Column(String, unique=True, index=True)

    client = Column(String)
    status = Column(String)
    currency = Column(String)
    payment_terms = Column(String)

    # Planning dates are kept as the strings the client sent
    planned_start = Column(String)
    planned_end = Column(String)
    actual_ship = Column(String)
    logistics = Column(Text)

    discount_percent = Column(Float, default=0)
    extra_costs = Column(Float, default=0)

    # Shared folder reference and JSON-encoded list of attachment URLs
    wedrive_folder = Column(String, default="")
    attachments = Column(Text)

    total_sale = Column(Float, default=0)
    total_cost = Column(Float, default=0)
    gross_profit = Column(Float, default=0)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    items = relationship(
        "OrderItem", back_populates="order",
        cascade="all, delete-orphan", order_by="OrderItem.id",
    )

class OrderItem(Base):
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, index=True)

    product = Column(String)
    sku = Column(String)
    color = Column(String)
    size = Column(String)

    quantity = Column(Float, default=0)
    cost = Column(Float, default=0)
    price = Column(Float, default=0)
    discount_percent = Column(Float, default=0)

    line_sale = Column(Float, default=0)
    line_cost = Column(Float, default=0)
    note = Column(Text, default="")

    order = relationship("Order", back_populates="items")

# Per-month counter behind ORD-YYYYMM-#### numbers (period = "YYYYMM")
class OrderSequence(Base):
    __tablename__ = "order_sequences"

    period = Column(String(6), primary_key=True)
    last_value = Column(Integer, nullable=False, default=0)
