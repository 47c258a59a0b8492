from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.api.deps import Identity, get_current_admin_user
from app.core.errors import BadRequest, Conflict
from app.models.hall import Hall, Showing
from app.schemas.hall import (
    HallCreate,
    Hall as HallSchema,
    ShowingCreate,
    Showing as ShowingSchema,
)
from app.utils.constraints import commit_or_conflict

router = APIRouter(prefix="/admin/halls", tags=["Admin - Halls"])
showing_router = APIRouter(prefix="/admin/showings", tags=["Admin - Showings"])

SHOWING_TAKEN = "A showing already exists at this time."


@router.post("/", response_model=HallSchema, status_code=status.HTTP_201_CREATED)
def create_hall(
    data: HallCreate,
    db: Session = Depends(get_db),
    current_user: Identity = Depends(get_current_admin_user),
):
    if not data.name.strip():
        raise BadRequest("Hall name cannot be empty.")
    if data.seats_number <= 0:
        raise BadRequest("Number of seats must be greater than zero.")
    hall = Hall(**data.model_dump())
    db.add(hall)
    db.commit()
    db.refresh(hall)
    return hall


@showing_router.post("/", response_model=ShowingSchema, status_code=status.HTTP_201_CREATED)
def create_showing(
    data: ShowingCreate,
    db: Session = Depends(get_db),
    current_user: Identity = Depends(get_current_admin_user),
):
    if db.query(Showing.id).filter(Showing.show_time == data.show_time).first():
        raise Conflict(SHOWING_TAKEN)
    showing = Showing(show_time=data.show_time)
    db.add(showing)
    commit_or_conflict(db, SHOWING_TAKEN)
    db.refresh(showing)
    return showing
