# backend/rovart/routers/services.py
# read-only: services are created/updated by bookings (upsert by key)

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas.services import CatalogServiceRead
from ..services.catalog import list_catalog

router = APIRouter(prefix="/services", tags=["services"])


@router.get("", response_model=list[CatalogServiceRead])
def list_services(db: Session = Depends(get_db)):
    return list_catalog(db)
