import json
from pydantic import BaseModel, BeforeValidator, ConfigDict, field_validator
from typing import Annotated, Any, List, Optional
from datetime import datetime


# Base configuration for ORM compatibility
class ORMBase(BaseModel):
    model_config = ConfigDict(from_attributes=True)


def _as_text(value: Any) -> Any:
    # Free-text columns keep whatever the client sent, rendered as a string
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    return str(value)


def _as_item(value: Any) -> Any:
    # A line that is not an object is priced as an empty line
    return value if isinstance(value, (dict, BaseModel)) else {}


Text = Annotated[Optional[str], BeforeValidator(_as_text)]


# Input schema for a single line item. Numeric fields accept anything;
# they are coerced by utils.totals.to_number rather than rejected.
class OrderItemIn(BaseModel):
    product: Text = None
    sku: Text = None
    color: Text = None
    size: Text = None
    quantity: Any = 0
    cost: Any = 0
    price: Any = 0
    discount_percent: Any = 0
    note: Text = ""


# Body of POST /api/orders and PUT /api/orders/{id}
class OrderPayload(BaseModel):
    client: Text = None
    status: Text = None
    currency: Text = None
    payment_terms: Text = None
    planned_start: Text = None
    planned_end: Text = None
    actual_ship: Text = None
    logistics: Text = None
    discount_percent: Any = 0
    extra_costs: Any = 0
    wedrive_folder: Text = ""
    attachments: Optional[List[Text]] = []
    items: Optional[List[Annotated[OrderItemIn, BeforeValidator(_as_item)]]] = []


# Output schema for an individual order line item
class OrderItemOut(ORMBase):
    id: int
    order_id: int
    product: Optional[str] = None
    sku: Optional[str] = None
    color: Optional[str] = None
    size: Optional[str] = None
    quantity: Optional[float] = None
    cost: Optional[float] = None
    price: Optional[float] = None
    discount_percent: Optional[float] = None
    line_sale: Optional[float] = None
    line_cost: Optional[float] = None
    note: Optional[str] = None


# Row of GET /api/orders
class OrderSummary(ORMBase):
    id: int
    order_number: Optional[str] = None
    client: Optional[str] = None
    status: Optional[str] = None
    currency: Optional[str] = None
    total_sale: Optional[float] = None
    gross_profit: Optional[float] = None
    created_at: Optional[datetime] = None


# Full order representation with its items
class OrderDetail(OrderSummary):
    payment_terms: Optional[str] = None
    planned_start: Optional[str] = None
    planned_end: Optional[str] = None
    actual_ship: Optional[str] = None
    logistics: Optional[str] = None
    discount_percent: Optional[float] = None
    extra_costs: Optional[float] = None
    wedrive_folder: Optional[str] = None
    attachments: List[str] = []
    total_cost: Optional[float] = None
    items: List[OrderItemOut] = []

    @field_validator("attachments", mode="before")
    @classmethod
    def _decode_attachments(cls, value):
        # Stored as JSON text in the orders table
        if isinstance(value, str):
            try:
                value = json.loads(value) if value else []
            except ValueError:
                return []
        if not isinstance(value, list):
            return []
        return [v for v in value if isinstance(v, str)]


class OrderCreated(BaseModel):
    success: bool = True
    order_id: int
    order_number: str


class OrderUpdated(BaseModel):
    success: bool = True
    order_id: int


class UploadResult(BaseModel):
    success: bool = True
    url: str
