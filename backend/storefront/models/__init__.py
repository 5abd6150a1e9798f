from .user import User, UserRole
from .order import Order, OrderItem, OrderStatus, PaymentStatus

__all__ = [
    "User", "UserRole",
    "Order", "OrderItem", "OrderStatus", "PaymentStatus",
]
