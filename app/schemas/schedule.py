from typing import List
from pydantic import BaseModel
from decimal import Decimal
from datetime import date, time

from app.schemas.common import Int32


# Schedule: Create (POST /admin/schedules). show_date is parsed by the
# endpoint so a bad date is reported as a 400 with a readable message.
class ScheduleCreate(BaseModel):
    hall_id: Int32
    showing_id: Int32
    movie_id: Int32
    show_date: str
    price: Decimal


class Schedule(BaseModel):
    id: int
    hall_id: int
    showing_id: int
    movie_id: int
    show_date: date
    price: Decimal

    class Config:
        from_attributes = True


# Denormalised schedule view: GET /schedules/{id}/info
class ScheduleInfo(BaseModel):
    hall_name: str
    seats_number: int
    title: str
    show_time: time
    show_date: date
    price: Decimal


# Seat occupancy for a schedule: GET /schedules/{id}/seats
class ScheduleSeats(BaseModel):
    schedule_id: int
    seats_number: int
    booked_seats: List[int]
    free_seats: List[int]
