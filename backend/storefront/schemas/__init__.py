from .common import DataResponse, MessageResponse, ErrorResponse
from .user import UserResponse, AuthResponse
from .order import OrderResponse, AdminOrderResponse
from .admin import DashboardSummary, AnalyticsSummary
from .product import CatalogProduct

__all__ = [
    "DataResponse", "MessageResponse", "ErrorResponse",
    "UserResponse", "AuthResponse",
    "OrderResponse", "AdminOrderResponse",
    "DashboardSummary", "AnalyticsSummary",
    "CatalogProduct",
]
