# backend/rovart/schemas/services.py

from typing import Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CatalogServiceRead(BaseModel):
    id: str
    name: str
    category: str
    description: Optional[str] = None
    price: float
    max_price: Optional[float] = None
    duration_min: int

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
