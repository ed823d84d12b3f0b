# backend/rovart/routers/admin.py
# every route here goes through require_admin except /check

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..dependencies import get_current_actor, get_identity_provider, require_admin
from ..schemas.reservations import (
    AdminCheckResponse,
    AdminReservationList,
    ReservationEnvelope,
    ReservationStatusUpdate,
)
from ..services.identity import Actor, IdentityProvider
from ..services.reservations import (
    admin_view,
    list_reservations,
    reservation_view,
    update_reservation_status,
)

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/check", response_model=AdminCheckResponse)
async def check_admin(
    actor: Actor = Depends(get_current_actor),
    provider: IdentityProvider = Depends(get_identity_provider),
):
    return AdminCheckResponse(is_admin=provider.is_privileged(actor))


@router.get("/reservations", response_model=AdminReservationList)
def list_all_reservations(
    _: Actor = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return {"reservations": [admin_view(r) for r in list_reservations(db)]}


@router.patch("/reservations/{reservation_id}", response_model=ReservationEnvelope)
def update_status(
    reservation_id: str,
    data: ReservationStatusUpdate,
    _: Actor = Depends(require_admin),
    db: Session = Depends(get_db),
):
    reservation = update_reservation_status(db, reservation_id, data.status)
    return {"reservation": reservation_view(reservation)}
