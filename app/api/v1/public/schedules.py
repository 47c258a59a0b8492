from typing import List, Optional
from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session, joinedload

from app.db.session import get_db
from app.api.deps import RowId
from app.core.errors import IntegrityViolation, NotFound
from app.models.schedule import Schedule
from app.models.ticket import Ticket
from app.schemas.common import INT32_MAX, INT32_MIN
from app.schemas.schedule import Schedule as ScheduleSchema, ScheduleInfo, ScheduleSeats

router = APIRouter(prefix="/schedules", tags=["Schedules"])


def _get_schedule_or_404(db: Session, id: int, *, with_relations: bool = False) -> Schedule:
    query = db.query(Schedule)
    if with_relations:
        query = query.options(
            joinedload(Schedule.hall),
            joinedload(Schedule.showing),
            joinedload(Schedule.movie),
        )
    schedule = query.filter(Schedule.id == id).first()
    if not schedule:
        raise NotFound("Schedule not found")
    return schedule


@router.get("/", response_model=List[ScheduleSchema])
def list_schedules(
    movie_id: Optional[int] = Query(None, ge=INT32_MIN, le=INT32_MAX),
    show_date: Optional[date] = Query(None, description="Filter by date (YYYY-MM-DD)"),
    db: Session = Depends(get_db),
):
    query = db.query(Schedule)
    if movie_id is not None:
        query = query.filter(Schedule.movie_id == movie_id)
    if show_date:
        query = query.filter(Schedule.show_date == show_date)
    return query.order_by(Schedule.show_date, Schedule.id).all()


@router.get("/{id}", response_model=ScheduleSchema)
def get_schedule(id: RowId, db: Session = Depends(get_db)):
    return _get_schedule_or_404(db, id)


@router.get("/{id}/info", response_model=ScheduleInfo)
def get_schedule_info(id: RowId, db: Session = Depends(get_db)):
    schedule = _get_schedule_or_404(db, id, with_relations=True)
    if schedule.hall is None:
        raise IntegrityViolation("Hall with the specified ID does not exist.")
    if schedule.movie is None:
        raise IntegrityViolation("Movie with the specified ID does not exist.")
    if schedule.showing is None:
        raise IntegrityViolation("Showing time with the specified ID does not exist.")

    return ScheduleInfo(
        hall_name=schedule.hall.name,
        seats_number=schedule.hall.seats_number,
        title=schedule.movie.title,
        show_time=schedule.showing.show_time,
        show_date=schedule.show_date,
        price=schedule.price,
    )


@router.get("/{id}/seats", response_model=ScheduleSeats)
def get_schedule_seats(id: RowId, db: Session = Depends(get_db)):
    """Booked and still free seat numbers for a schedule."""
    schedule = _get_schedule_or_404(db, id, with_relations=True)
    if schedule.hall is None:
        raise IntegrityViolation("Hall with the specified ID does not exist.")

    booked = sorted(
        seat for (seat,) in db.query(Ticket.seat).filter(Ticket.schedule_id == id).all()
    )
    taken = set(booked)
    free = [n for n in range(1, schedule.hall.seats_number + 1) if n not in taken]

    return ScheduleSeats(
        schedule_id=schedule.id,
        seats_number=schedule.hall.seats_number,
        booked_seats=booked,
        free_seats=free,
    )
