# backend/rovart/routers/user.py

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..dependencies import get_current_actor
from ..schemas.reservations import UserReservationList
from ..services.identity import Actor
from ..services.reservations import list_customer_reservations, user_view

router = APIRouter(prefix="/user", tags=["user"])


@router.get("/reservations", response_model=UserReservationList)
def my_reservations(
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    # no email on the identity -> nothing to match a customer against
    if not actor.email:
        return {"reservations": []}

    return {
        "reservations": [
            user_view(r) for r in list_customer_reservations(db, actor.email)
        ]
    }
