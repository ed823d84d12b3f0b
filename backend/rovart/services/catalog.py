"""
Service catalog shown on the services page and used by the booking wizard.

Stored Services rows are created by the reservation writer on first
booking; when a row exists its current price and duration win.
"""

from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import Session

from ..models.generated import Services


@dataclass(frozen=True)
class CatalogEntry:
    id: str
    name: str
    category: str
    price: float
    duration_min: int
    description: str
    max_price: Optional[float] = None


CATALOG: tuple[CatalogEntry, ...] = (
    CatalogEntry(
        id="bridal",
        name="Bridal makeup",
        category="bridal",
        price=200.0,
        duration_min=120,
        description="A flawless, long-lasting look for your wedding day, matched to your wedding style.",
    ),
    CatalogEntry(
        id="bridal-trial",
        name="Bridal trial makeup",
        category="bridal",
        price=150.0,
        duration_min=60,
        description="Test and refine your wedding day look in a trial session tailored to your preferences.",
    ),
    CatalogEntry(
        id="bridesmaid",
        name="Bridesmaid or attendant makeup",
        category="bridal",
        price=100.0,
        duration_min=60,
        description="Cohesive, elegant makeup for the bridal party, customised to each person and the theme.",
    ),
    CatalogEntry(
        id="special-occasion",
        name="Special occasion makeup",
        category="special-occasion",
        price=60.0,
        max_price=150.0,
        duration_min=60,
        description="Makeup for proms, galas or any memorable event, designed around your outfit.",
    ),
    CatalogEntry(
        id="on-location",
        name="On-location makeup",
        category="special-occasion",
        price=150.0,
        max_price=250.0,
        duration_min=120,
        description="Professional makeup brought to your location, for events or busy schedules.",
    ),
)


def list_catalog(db: Session) -> list[dict]:
    """Catalog entries, with stored price/duration overriding the defaults."""
    stored = {
        s.service_key: s
        for s in db.query(Services).filter(
            Services.service_key.in_([e.id for e in CATALOG])
        ).all()
    }

    result = []
    for entry in CATALOG:
        row = stored.get(entry.id)
        result.append({
            "id": entry.id,
            "name": row.name if row else entry.name,
            "category": entry.category,
            "description": entry.description,
            "price": float(row.price) if row else entry.price,
            "max_price": entry.max_price,
            "duration_min": row.duration_min if row else entry.duration_min,
        })
    return result
