from fastapi import APIRouter, Depends, Query
from sqlmodel import Session
from storefront.api.deps import get_db, admin_required
from storefront.models.user import User
from storefront.schemas.common import DataResponse
from storefront.schemas.admin import DashboardSummary, AnalyticsSummary
from storefront.services import admin as admin_service
from storefront.services.catalog import ProductCatalog, get_catalog

router = APIRouter(prefix="/api/admin", tags=["admin-stats"])


@router.get("/dashboard", response_model=DataResponse[DashboardSummary])
def get_dashboard(
    db: Session = Depends(get_db),
    catalog: ProductCatalog = Depends(get_catalog),
    _: User = Depends(admin_required)
):
    """User, order and product counts plus recent sign-ins"""
    return DataResponse(data=admin_service.dashboard_summary(db, catalog))


@router.get("/analytics", response_model=DataResponse[AnalyticsSummary])
def get_analytics(
    range_days: int = Query(30, ge=1, le=3650),
    db: Session = Depends(get_db),
    _: User = Depends(admin_required)
):
    """Revenue and order analytics for the trailing ``range_days``"""
    return DataResponse(data=admin_service.analytics_summary(db, range_days))
