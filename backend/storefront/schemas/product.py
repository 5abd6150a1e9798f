from pydantic import BaseModel
from decimal import Decimal


class CatalogProduct(BaseModel):
    id: str
    name: str
    price: Decimal
    image: str
    category: str = "default"
