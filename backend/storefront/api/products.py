from fastapi import APIRouter, Depends
from typing import List
from storefront.schemas.common import DataResponse
from storefront.schemas.product import CatalogProduct
from storefront.services.catalog import ProductCatalog, get_catalog

router = APIRouter(prefix="/api/products", tags=["products"])


@router.get("/", response_model=DataResponse[List[CatalogProduct]])
def list_products(catalog: ProductCatalog = Depends(get_catalog)):
    """Read-only catalog for display"""
    return DataResponse(data=catalog.list_products())
