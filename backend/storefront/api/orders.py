from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session
from typing import Optional
from storefront.api.deps import get_db, get_current_user, admin_required
from storefront.models.user import User
from storefront.schemas.common import DataResponse
from storefront.schemas.order import (
    OrderCreate, OrderStatusUpdate, OrderResponse, OrderEnvelope, OrderListEnvelope,
    AdminOrderResponse, AdminOrderListResponse
)
from storefront.services import orders as order_service
from storefront.services import admin as admin_service

router = APIRouter(tags=["orders"])


# === User: checkout and order history ===

@router.post("/api/orders", response_model=OrderEnvelope, status_code=status.HTTP_201_CREATED)
def create_order(
    data: OrderCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Place an order from the cart"""
    order = order_service.create_order(db, data, current_user)
    return OrderEnvelope(
        message="Order created successfully",
        order=OrderResponse.model_validate(order)
    )


@router.get("/api/orders", response_model=OrderListEnvelope)
def get_my_orders(
    page: Optional[int] = Query(None, ge=1),
    limit: Optional[int] = Query(None, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """My orders, newest first"""
    orders = order_service.list_orders(db, current_user, page, limit)
    return OrderListEnvelope(orders=[OrderResponse.model_validate(o) for o in orders])


@router.get("/api/orders/{order_id}", response_model=OrderEnvelope)
def get_my_order(
    order_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    order = order_service.get_order(db, current_user, order_id)
    return OrderEnvelope(order=OrderResponse.model_validate(order))


@router.put("/api/orders/{order_id}/status", response_model=OrderEnvelope)
def update_order_status(
    order_id: int,
    data: OrderStatusUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(admin_required)
):
    """Same operation as the admin route, kept for older clients"""
    order = order_service.update_status(db, order_id, data.status, data.payment_status)
    return OrderEnvelope(
        message="Order status updated successfully",
        order=OrderResponse.model_validate(order)
    )


# === Admin: order management ===

@router.get("/api/admin/orders", response_model=DataResponse[AdminOrderListResponse])
def admin_list_orders(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    status: Optional[str] = Query("all"),
    search: str = Query(""),
    db: Session = Depends(get_db),
    _: User = Depends(admin_required)
):
    """Orders with status filter and order number / customer search"""
    return DataResponse(data=admin_service.list_orders_admin(db, page, limit, status, search))


@router.get("/api/admin/orders/{order_id}", response_model=DataResponse[AdminOrderResponse])
def admin_get_order(
    order_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(admin_required)
):
    return DataResponse(data=admin_service.get_order_admin(db, order_id))


@router.patch("/api/admin/orders/{order_id}/status", response_model=DataResponse[AdminOrderResponse])
def admin_update_order_status(
    order_id: int,
    data: OrderStatusUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(admin_required)
):
    order_service.update_status(db, order_id, data.status, data.payment_status)
    return DataResponse(
        data=admin_service.get_order_admin(db, order_id),
        message="Order status updated"
    )
