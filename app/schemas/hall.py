from pydantic import BaseModel
from datetime import time

from app.schemas.common import Int32


# Hall Schemas
class HallCreate(BaseModel):
    name: str
    seats_number: Int32


class Hall(BaseModel):
    id: int
    name: str
    seats_number: int

    class Config:
        from_attributes = True


# Showing Schemas
class ShowingCreate(BaseModel):
    show_time: time


class Showing(BaseModel):
    id: int
    show_time: time

    class Config:
        from_attributes = True
