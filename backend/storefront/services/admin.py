import logging
from collections import OrderedDict
from datetime import timedelta
from math import ceil
from typing import Dict, List, Optional
from sqlmodel import Session, select, func, col, or_
from storefront.models.user import User, UserRole, utc_now
from storefront.models.order import Order, OrderItem, OrderStatus
from storefront.schemas.admin import DashboardSummary, AnalyticsSummary, MonthlyPoint, TopProduct
from storefront.schemas.user import UserResponse, UserListResponse
from storefront.schemas.order import AdminOrderResponse, AdminOrderListResponse, OrderOwner
from storefront.services.catalog import ProductCatalog
from storefront.services.orders import parse_status
from storefront.core.errors import ValidationError, NotFound

logger = logging.getLogger(__name__)

MONTH_NAMES = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

RECENT_USERS_LIMIT = 5
TOP_PRODUCTS_LIMIT = 10


def _count_users(db: Session, *conditions) -> int:
    stmt = select(func.count()).select_from(User)
    if conditions:
        stmt = stmt.where(*conditions)
    return db.exec(stmt).one()


def _total_pages(total: int, limit: int) -> int:
    return ceil(total / limit) if limit else 0


# === Dashboard & analytics ===

def dashboard_summary(db: Session, catalog: ProductCatalog) -> DashboardSummary:
    total_users = _count_users(db, User.role == UserRole.USER)
    total_admins = _count_users(db, User.role == UserRole.ADMIN)

    # Users who actually signed in at least once
    total_signed_in_users = _count_users(
        db,
        User.role == UserRole.USER,
        or_(User.login_count > 0, col(User.last_login).is_not(None)),
    )

    recent_stmt = (
        select(User)
        .where(User.role == UserRole.USER)
        .order_by(col(User.last_login).desc().nulls_last(), col(User.created_at).desc())
        .limit(RECENT_USERS_LIMIT)
    )
    recent_users = db.exec(recent_stmt).all()

    total_orders = db.exec(select(func.count()).select_from(Order)).one()

    return DashboardSummary(
        total_users=total_users,
        total_signed_in_users=total_signed_in_users,
        total_admins=total_admins,
        total_products=catalog.count(),
        total_orders=total_orders,
        recent_users=[UserResponse.model_validate(u) for u in recent_users],
    )


def analytics_summary(db: Session, range_days: int = 30) -> AnalyticsSummary:
    """Revenue, orders, AOV, conversion, monthly series and top products"""
    range_days = max(1, range_days)
    start_date = utc_now() - timedelta(days=range_days)
    in_range = Order.created_at >= start_date

    totals_stmt = select(
        func.coalesce(func.sum(Order.total), 0),
        func.count(Order.id),
        func.count(func.distinct(Order.user_id)),
    ).where(in_range)
    revenue_result, total_orders, unique_buyers = db.exec(totals_stmt).one()
    total_revenue = float(revenue_result) if revenue_result else 0.0

    # Approximation: unique buyers over all registered shoppers
    total_registered = _count_users(db, User.role == UserRole.USER)
    conversion_rate = (unique_buyers / total_registered) * 100 if total_registered > 0 else 0.0
    avg_order_value = total_revenue / total_orders if total_orders > 0 else 0.0

    # Monthly series, chronological
    rows = db.exec(
        select(Order.created_at, Order.total).where(in_range).order_by(Order.created_at)
    ).all()
    buckets: Dict[tuple, List[float]] = OrderedDict()
    for created_at, total in rows:
        bucket = buckets.setdefault((created_at.year, created_at.month), [0.0, 0])
        bucket[0] += float(total)
        bucket[1] += 1
    monthly_data = [
        MonthlyPoint(month=f"{MONTH_NAMES[month - 1]} {year}", revenue=revenue, orders=orders)
        for (year, month), (revenue, orders) in buckets.items()
    ]

    # Top products by revenue within the period
    revenue_expr = func.sum(OrderItem.price * OrderItem.quantity)
    top_stmt = (
        select(
            OrderItem.product_id,
            OrderItem.name,
            func.sum(OrderItem.quantity),
            revenue_expr,
        )
        .join(Order, Order.id == OrderItem.order_id)
        .where(in_range)
        .group_by(OrderItem.product_id, OrderItem.name)
        .order_by(revenue_expr.desc())
        .limit(TOP_PRODUCTS_LIMIT)
    )
    top_products = [
        TopProduct(product_id=row[0], name=row[1], sales=int(row[2]), revenue=float(row[3]))
        for row in db.exec(top_stmt).all()
    ]

    return AnalyticsSummary(
        range_days=range_days,
        total_revenue=total_revenue,
        total_orders=total_orders,
        unique_buyers=unique_buyers,
        avg_order_value=avg_order_value,
        conversion_rate=conversion_rate,
        monthly_data=monthly_data,
        top_products=top_products,
    )


# === Users ===

def list_users(db: Session, page: int = 1, limit: int = 10, search: str = "") -> UserListResponse:
    stmt = select(User)
    count_stmt = select(func.count()).select_from(User)

    if search:
        matches = or_(
            col(User.name).icontains(search, autoescape=True),
            col(User.email).icontains(search, autoescape=True),
        )
        stmt = stmt.where(matches)
        count_stmt = count_stmt.where(matches)

    total = db.exec(count_stmt).one()
    users = db.exec(
        stmt.order_by(col(User.created_at).desc(), col(User.id).desc())
        .offset((page - 1) * limit)
        .limit(limit)
    ).all()

    return UserListResponse(
        users=[UserResponse.model_validate(u) for u in users],
        total=total,
        total_pages=_total_pages(total, limit),
        current_page=page,
    )


def get_user(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if not user:
        raise NotFound("User not found")
    return user


def set_user_role(db: Session, user_id: int, role: str) -> User:
    try:
        new_role = UserRole(role)
    except ValueError:
        raise ValidationError("Invalid role")

    user = get_user(db, user_id)
    user.role = new_role
    user.updated_at = utc_now()
    db.add(user)
    db.commit()
    db.refresh(user)

    logger.info("User id=%s role set to %s", user.id, new_role.value)
    return user


def toggle_user_active(db: Session, user_id: int) -> User:
    user = get_user(db, user_id)
    user.is_active = not user.is_active
    user.updated_at = utc_now()
    db.add(user)
    db.commit()
    db.refresh(user)

    logger.info("User id=%s %s", user.id, "activated" if user.is_active else "deactivated")
    return user


def delete_user(db: Session, user_id: int) -> None:
    user = get_user(db, user_id)
    db.delete(user)
    db.commit()
    logger.info("User id=%s deleted", user_id)


# === Orders ===

def _owners(db: Session, user_ids) -> Dict[int, User]:
    ids = set(user_ids)
    if not ids:
        return {}
    users = db.exec(select(User).where(col(User.id).in_(ids))).all()
    return {u.id: u for u in users}


def build_admin_order(order: Order, owner: Optional[User]) -> AdminOrderResponse:
    response = AdminOrderResponse.model_validate(order)
    if owner:
        response.user = OrderOwner.model_validate(owner)
    return response


def list_orders_admin(
    db: Session,
    page: int = 1,
    limit: int = 20,
    status: Optional[str] = None,
    search: str = ""
) -> AdminOrderListResponse:
    stmt = select(Order)
    count_stmt = select(func.count()).select_from(Order)
    conditions = []

    if status and status != "all":
        conditions.append(Order.status == parse_status(status))

    # Search by order number or owner name/email
    if search:
        user_ids = db.exec(
            select(User.id).where(
                or_(
                    col(User.name).icontains(search, autoescape=True),
                    col(User.email).icontains(search, autoescape=True),
                )
            )
        ).all()
        conditions.append(
            or_(
                col(Order.order_number).icontains(search, autoescape=True),
                col(Order.user_id).in_(user_ids),
            )
        )

    if conditions:
        stmt = stmt.where(*conditions)
        count_stmt = count_stmt.where(*conditions)

    total = db.exec(count_stmt).one()
    orders = db.exec(
        stmt.order_by(col(Order.created_at).desc(), col(Order.id).desc())
        .offset((page - 1) * limit)
        .limit(limit)
    ).all()

    owners = _owners(db, (o.user_id for o in orders))

    return AdminOrderListResponse(
        orders=[build_admin_order(o, owners.get(o.user_id)) for o in orders],
        total=total,
        total_pages=_total_pages(total, limit),
        current_page=page,
    )


def get_order_admin(db: Session, order_id: int) -> AdminOrderResponse:
    order = db.get(Order, order_id)
    if not order:
        raise NotFound("Order not found")
    return build_admin_order(order, db.get(User, order.user_id))
