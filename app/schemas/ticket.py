from pydantic import BaseModel
from decimal import Decimal
from datetime import date, time
from typing import Optional

from app.schemas.common import Int32


# Ticket: Create (POST /tickets)
class TicketCreate(BaseModel):
    schedule_id: Int32
    seat: Int32


class Ticket(BaseModel):
    id: int
    schedule_id: int
    client_id: int
    seat: int

    class Config:
        from_attributes = True


# Ticket details: GET /tickets/{id}/details
class TicketDetails(BaseModel):
    show_date: date
    show_time: time
    hall_name: str
    seat: int
    title: str
    duration_minutes: int
    price: Decimal
    description: Optional[str] = None
