from pydantic import BaseModel
from typing import List
from storefront.schemas.user import UserResponse


class DashboardSummary(BaseModel):
    total_users: int
    total_signed_in_users: int
    total_admins: int
    total_products: int
    total_orders: int
    recent_users: List[UserResponse]


class MonthlyPoint(BaseModel):
    month: str
    revenue: float
    orders: int


class TopProduct(BaseModel):
    product_id: str
    name: str
    sales: int
    revenue: float


class AnalyticsSummary(BaseModel):
    range_days: int
    total_revenue: float
    total_orders: int
    unique_buyers: int
    avg_order_value: float
    conversion_rate: float
    monthly_data: List[MonthlyPoint]
    top_products: List[TopProduct]
