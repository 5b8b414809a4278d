"""Time slot schemas."""
from __future__ import annotations

from datetime import time

from pydantic import BaseModel, ConfigDict

from roomescape.services.time_slot_service import AvailableTimeSlot


class TimeSlotCreate(BaseModel):
    """Payload for creating a time slot."""

    start_at: time


class TimeSlotRead(BaseModel):
    """Serialized time slot representation."""

    id: int
    start_at: time

    model_config = ConfigDict(from_attributes=True)


class AvailableTimeSlotRead(TimeSlotRead):
    """Time slot annotated with whether it is already reserved."""

    already_booked: bool

    @classmethod
    def from_available(cls, item: AvailableTimeSlot) -> "AvailableTimeSlotRead":
        return cls(
            id=item.time_slot.id,
            start_at=item.time_slot.start_at,
            already_booked=item.already_booked,
        )
