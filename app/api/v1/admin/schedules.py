import logging
from datetime import date

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.api.deps import Identity, RowId, get_current_admin_user
from app.core.errors import BadRequest, Conflict, NotFound
from app.models.catalog import Movie
from app.models.hall import Hall, Showing
from app.models.schedule import Schedule
from app.models.ticket import Ticket
from app.schemas.schedule import ScheduleCreate, Schedule as ScheduleSchema
from app.utils.constraints import commit_or_conflict

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin/schedules", tags=["Admin - Schedules"])

SLOT_TAKEN = "Schedule already exists for the specified hall, showing, and date."


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _parse_show_date(value: str) -> date:
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        raise BadRequest("Invalid date format. Use YYYY-MM-DD.")


def _check_slot_free(db: Session, hall_id: int, showing_id: int, show_date: date):
    """Raise 409 if the hall already screens something at this showing on this day."""
    taken = db.query(Schedule.id).filter(
        Schedule.hall_id == hall_id,
        Schedule.showing_id == showing_id,
        Schedule.show_date == show_date,
    ).first()
    if taken:
        raise Conflict(SLOT_TAKEN)


# ---------------------------------------------------------------------------
# Schedule create / delete
# ---------------------------------------------------------------------------


@router.post("/", response_model=ScheduleSchema, status_code=status.HTTP_201_CREATED)
def create_schedule(
    data: ScheduleCreate,
    db: Session = Depends(get_db),
    current_user: Identity = Depends(get_current_admin_user),
):
    """
    Put a movie on a hall's showing for a given day.

    - `show_date` must be `YYYY-MM-DD` and not before today.
    - Hall, showing and movie must exist.
    - The (hall, showing, date) slot must be free.
    """
    show_date = _parse_show_date(data.show_date)
    if data.price < 0:
        raise BadRequest("Price cannot be negative.")

    if not db.query(Hall.id).filter(Hall.id == data.hall_id).first():
        raise Conflict("Hall with the specified ID does not exist.")
    if not db.query(Showing.id).filter(Showing.id == data.showing_id).first():
        raise Conflict("Showing with the specified ID does not exist.")
    if not db.query(Movie.id).filter(Movie.id == data.movie_id).first():
        raise Conflict("Movie with the specified ID does not exist.")

    if show_date < date.today():
        raise Conflict("The show date must be today or a future date.")

    _check_slot_free(db, data.hall_id, data.showing_id, show_date)

    schedule = Schedule(
        hall_id=data.hall_id,
        showing_id=data.showing_id,
        movie_id=data.movie_id,
        show_date=show_date,
        price=data.price,
    )
    db.add(schedule)
    commit_or_conflict(db, SLOT_TAKEN)
    db.refresh(schedule)
    logger.info(
        "Scheduled movie %s in hall %s, showing %s on %s.",
        schedule.movie_id, schedule.hall_id, schedule.showing_id, schedule.show_date,
    )
    return schedule


@router.delete("/{id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_schedule(
    id: RowId,
    db: Session = Depends(get_db),
    current_user: Identity = Depends(get_current_admin_user),
):
    """
    Delete a schedule and every ticket sold for it.
    Tickets are removed one by one ahead of the schedule; nothing is
    committed until the schedule itself is gone.
    """
    schedule = db.query(Schedule).filter(Schedule.id == id).first()
    if not schedule:
        raise NotFound("Schedule not found")

    tickets = db.query(Ticket).filter(Ticket.schedule_id == id).all()
    try:
        for ticket in tickets:
            db.delete(ticket)
            db.flush()
        db.delete(schedule)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Rolled back deletion of schedule %s.", id)
        raise

    logger.info("Deleted schedule %s with %d ticket(s).", id, len(tickets))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
