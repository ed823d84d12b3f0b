"""Upsert the service catalog into the database and print a summary."""

import sys, pathlib
sys.path.append(str(pathlib.Path(__file__).resolve().parents[1] / "backend"))

from sqlalchemy import text
from rovart.database import SessionLocal
from rovart.services.catalog import CATALOG
from rovart.services.reservations import upsert_service


def main():
    db = SessionLocal()
    try:
        print("DB OK:", db.execute(text("SELECT 1")).scalar())
        for entry in CATALOG:
            service = upsert_service(
                db,
                service_key=entry.id,
                name=entry.name,
                price=entry.price,
                duration_min=entry.duration_min,
            )
            print(f"✔ {service.service_key}: {service.name} ({service.duration_min} min, {service.price})")
    finally:
        db.close()


if __name__ == "__main__":
    main()
