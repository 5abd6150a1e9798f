import logging
import secrets
import time
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional
from sqlmodel import Session, select
from sqlalchemy.exc import IntegrityError
from storefront.models.order import Order, OrderItem, OrderStatus, PaymentStatus, can_transition
from storefront.models.user import User, utc_now
from storefront.schemas.order import OrderCreate
from storefront.core.errors import ValidationError, NotFound, ConflictError

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


def generate_order_number() -> str:
    """Millisecond timestamp plus a random suffix for same-millisecond checkouts"""
    timestamp = int(time.time() * 1000)
    random_part = secrets.token_hex(3).upper()
    return f"ORD-{timestamp}-{random_part}"


def to_cents(amount: Decimal) -> Decimal:
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def parse_status(value: str) -> OrderStatus:
    try:
        return OrderStatus(value)
    except ValueError:
        raise ValidationError("Invalid status")


def parse_payment_status(value: str) -> PaymentStatus:
    try:
        return PaymentStatus(value)
    except ValueError:
        raise ValidationError("Invalid payment status")


def create_order(db: Session, data: OrderCreate, user: User) -> Order:
    """Create an order from the client's cart snapshot"""
    if not data.items:
        raise ValidationError("Order must contain at least one item")

    for item in data.items:
        if item.quantity < 1:
            raise ValidationError(f"Quantity for {item.name} must be at least 1")

    # Carts send float totals (tax and shipping included); stored as submitted, in cents
    total = to_cents(data.total)
    items_total = sum((to_cents(item.price) * item.quantity for item in data.items), Decimal("0"))
    if items_total != total:
        logger.warning(
            "Order total %s differs from line items sum %s (user id=%s)",
            total, items_total, user.id
        )

    order = Order(
        order_number=generate_order_number(),
        user_id=user.id,
        total=total,
        shipping_address=data.shipping_address.model_dump(),
        payment_method=data.payment_method,
        status=OrderStatus.PENDING,
        payment_status=PaymentStatus.PENDING,
    )
    order.items = [
        OrderItem(**item.model_dump(exclude={"price"}), price=to_cents(item.price))
        for item in data.items
    ]

    db.add(order)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning("Order number collision for user id=%s", user.id)
        raise ConflictError("Could not allocate an order number, please retry")
    db.refresh(order)

    logger.info("Order %s created for user id=%s", order.order_number, user.id)
    return order


def list_orders(
    db: Session,
    user: User,
    page: Optional[int] = None,
    limit: Optional[int] = None
) -> List[Order]:
    """Orders owned by the user, newest first"""
    stmt = (
        select(Order)
        .where(Order.user_id == user.id)
        .order_by(Order.created_at.desc(), Order.id.desc())
    )

    if limit:
        stmt = stmt.offset(((page or 1) - 1) * limit).limit(limit)

    return list(db.exec(stmt).all())


def get_order(db: Session, user: User, order_id: int) -> Order:
    order = db.get(Order, order_id)

    # Someone else's order looks exactly like a missing one
    if not order or order.user_id != user.id:
        raise NotFound("Order not found")

    return order


def update_status(
    db: Session,
    order_id: int,
    new_status: str,
    payment_status: Optional[str] = None
) -> Order:
    status = parse_status(new_status)
    paid = parse_payment_status(payment_status) if payment_status is not None else None

    order = db.get(Order, order_id)
    if not order:
        raise NotFound("Order not found")

    if not can_transition(order.status, status):
        raise ValidationError(f"Cannot move order from {order.status.value} to {status.value}")

    previous = order.status
    order.status = status
    if paid is not None:
        order.payment_status = paid
    order.updated_at = utc_now()

    db.add(order)
    db.commit()
    db.refresh(order)

    logger.info("Order %s status %s -> %s", order.order_number, previous.value, status.value)
    return order
