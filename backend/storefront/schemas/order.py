from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime
from decimal import Decimal
from storefront.models.order import OrderStatus, PaymentStatus


class OrderItemCreate(BaseModel):
    product_id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    price: Decimal = Field(ge=0)
    quantity: int
    image: str
    category: str = "default"

    class Config:
        extra = "forbid"


class ShippingAddress(BaseModel):
    type: str
    street: str
    city: str
    state: str
    zip: str
    country: str

    class Config:
        extra = "forbid"


class OrderCreate(BaseModel):
    items: List[OrderItemCreate]
    total: Decimal = Field(ge=0)
    shipping_address: ShippingAddress
    payment_method: str = Field(min_length=1)

    class Config:
        extra = "forbid"


class OrderStatusUpdate(BaseModel):
    status: str
    payment_status: Optional[str] = None

    class Config:
        extra = "forbid"


class OrderItemResponse(BaseModel):
    id: int
    product_id: str
    name: str
    price: Decimal
    quantity: int
    image: str
    category: str

    class Config:
        from_attributes = True


class OrderResponse(BaseModel):
    id: int
    order_number: str
    user_id: int

    items: List[OrderItemResponse] = []
    total: Decimal

    status: OrderStatus
    shipping_address: Optional[ShippingAddress] = None
    payment_method: str
    payment_status: PaymentStatus

    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class OrderOwner(BaseModel):
    id: int
    name: str
    email: str

    class Config:
        from_attributes = True


class AdminOrderResponse(OrderResponse):
    user: Optional[OrderOwner] = None


class OrderEnvelope(BaseModel):
    success: bool = True
    message: Optional[str] = None
    order: OrderResponse


class OrderListEnvelope(BaseModel):
    success: bool = True
    orders: List[OrderResponse]


class AdminOrderListResponse(BaseModel):
    orders: List[AdminOrderResponse]
    total: int
    total_pages: int
    current_page: int
