import logging
from pathlib import Path
from typing import List
from pydantic import TypeAdapter, ValidationError as SchemaError
from storefront.core.config import settings
from storefront.schemas.product import CatalogProduct

logger = logging.getLogger(__name__)

_products_adapter = TypeAdapter(List[CatalogProduct])


class ProductCatalog:
    """
    Read-only product source owned by the storefront frontend.

    The file is read on every call, so edits show up without a restart.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def list_products(self) -> List[CatalogProduct]:
        try:
            return _products_adapter.validate_json(self.path.read_bytes())
        except (OSError, SchemaError) as exc:
            logger.warning("Product catalog %s unavailable: %s", self.path, exc)
            return []

    def count(self) -> int:
        return len(self.list_products())


def get_catalog() -> ProductCatalog:
    return ProductCatalog(settings.CATALOG_PATH)
