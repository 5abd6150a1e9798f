from sqlmodel import SQLModel, Field, Relationship
from sqlalchemy import Column, DateTime, JSON
from typing import Optional, List, Dict, Any
from datetime import datetime
from decimal import Decimal
from enum import Enum
from storefront.models.user import utc_now


class OrderStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"


# Any status may move to any other. Delivered and cancelled are final in
# intent only; the back office is allowed to correct mistakes.
STATUS_TRANSITIONS: Dict[OrderStatus, frozenset] = {
    status: frozenset(OrderStatus) for status in OrderStatus
}


def can_transition(current: OrderStatus, new: OrderStatus) -> bool:
    return new in STATUS_TRANSITIONS[current]


class Order(SQLModel, table=True):
    __tablename__ = "orders"

    id: Optional[int] = Field(default=None, primary_key=True)
    order_number: str = Field(unique=True, index=True)

    # Plain reference: orders outlive a deleted owner
    user_id: int = Field(index=True)

    total: Decimal = Field(max_digits=10, decimal_places=2)

    status: OrderStatus = Field(default=OrderStatus.PENDING)

    # type/street/city/state/zip/country snapshot
    shipping_address: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON))

    payment_method: str
    payment_status: PaymentStatus = Field(default=PaymentStatus.PENDING)

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True), index=True)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))

    # Relationships
    items: List["OrderItem"] = Relationship(
        back_populates="order",
        sa_relationship_kwargs={"order_by": "OrderItem.id", "cascade": "all, delete-orphan"},
    )


class OrderItem(SQLModel, table=True):
    __tablename__ = "order_items"

    id: Optional[int] = Field(default=None, primary_key=True)
    order_id: int = Field(foreign_key="orders.id", index=True)

    # Snapshot of the catalog entry at checkout
    product_id: str = Field(index=True)
    name: str
    price: Decimal = Field(max_digits=10, decimal_places=2)
    quantity: int
    image: str
    category: str = Field(default="default")

    # Relationships
    order: Optional["Order"] = Relationship(back_populates="items")
