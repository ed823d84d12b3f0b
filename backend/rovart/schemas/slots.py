# backend/rovart/schemas/slots.py
"""
Pydantic schemas for the availability API.
"""

from pydantic import BaseModel, Field


class AvailabilityResponse(BaseModel):
    """Bookable flag for every slot of one day."""
    date: str
    slots: dict[str, bool] = Field(description="Slot label -> bookable, all grid labels present")
    timezone: str
