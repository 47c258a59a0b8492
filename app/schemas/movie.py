from typing import Optional
from pydantic import BaseModel
from decimal import Decimal
from datetime import date

from app.schemas.common import Int32


# Movie: Create (POST /admin/movies). Range checks live in the endpoint so the
# first failing field can be reported on its own.
class MovieCreate(BaseModel):
    title: str = ""
    budget: Decimal = Decimal("0")
    description: Optional[str] = None
    release_date: date
    box_office: Decimal = Decimal("0")
    duration_minutes: Int32
    tagline: Optional[str] = None
    average_rating: float = 0.0


class Movie(BaseModel):
    id: int
    title: str
    budget: Decimal
    description: Optional[str] = None
    release_date: date
    box_office: Decimal
    duration_minutes: int
    tagline: Optional[str] = None
    average_rating: float

    class Config:
        from_attributes = True


# Genre Schemas
class GenreCreate(BaseModel):
    name: str


class Genre(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True


# Movie/genre association view (POST /admin/movies/{id}/genres/{genre_id})
class MovieGenreInfo(BaseModel):
    movie_id: int
    title: str
    genre_name: str
