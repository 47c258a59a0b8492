import logging
from typing import List
from datetime import date

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session, joinedload

from app.db.session import get_db
from app.api.deps import Identity, RowId, get_current_client
from app.core.errors import Conflict, IntegrityViolation, NotFound
from app.models.hall import Hall
from app.models.schedule import Schedule
from app.models.ticket import Ticket
from app.schemas.ticket import TicketCreate, Ticket as TicketSchema, TicketDetails
from app.utils.constraints import commit_or_conflict

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tickets", tags=["Tickets"])

SEAT_TAKEN = "The seat is already booked."


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _get_owned_ticket(db: Session, ticket_id: int, identity: Identity, action: str) -> Ticket:
    """404 when the ticket is missing, 409 when it belongs to someone else."""
    ticket = db.query(Ticket).filter(Ticket.id == ticket_id).first()
    if not ticket:
        raise NotFound("Ticket not found")
    if ticket.client_id != identity.client_id:
        raise Conflict(f"You do not have permission to {action} this ticket.")
    return ticket


def _seat_is_taken(db: Session, schedule_id: int, seat: int) -> bool:
    for (booked,) in db.query(Ticket.seat).filter(Ticket.schedule_id == schedule_id):
        if booked == seat:
            return True
    return False


# ---------------------------------------------------------------------------
# Listings
# ---------------------------------------------------------------------------


@router.get("/", response_model=List[TicketSchema])
def list_all_tickets(db: Session = Depends(get_db)):
    return db.query(Ticket).order_by(Ticket.id).all()


@router.get("/me", response_model=List[TicketSchema])
def list_my_tickets(
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_client),
):
    """Every ticket owned by the caller, past shows included."""
    return (
        db.query(Ticket)
        .filter(Ticket.client_id == identity.client_id)
        .order_by(Ticket.id)
        .all()
    )


# ---------------------------------------------------------------------------
# POST /tickets: book a seat
# ---------------------------------------------------------------------------


@router.post("/", response_model=TicketSchema, status_code=status.HTTP_201_CREATED)
def book_ticket(
    data: TicketCreate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_client),
):
    """
    Book one seat for a schedule.

    Only shows dated after today can be booked. The seat must lie within
    the hall's range and must not already be taken for this schedule.
    """
    schedule = db.query(Schedule).filter(Schedule.id == data.schedule_id).first()
    if not schedule:
        raise Conflict("Schedule with the specified ID does not exist.")

    if schedule.show_date <= date.today():
        raise Conflict("The show date has already passed.")

    hall = db.query(Hall).filter(Hall.id == schedule.hall_id).first()
    if not hall:
        raise IntegrityViolation("Hall with the specified ID does not exist.")

    if data.seat < 1 or data.seat > hall.seats_number:
        raise Conflict("Invalid seat number.")

    if _seat_is_taken(db, schedule.id, data.seat):
        raise Conflict(SEAT_TAKEN)

    ticket = Ticket(schedule_id=schedule.id, client_id=identity.client_id, seat=data.seat)
    db.add(ticket)
    commit_or_conflict(db, SEAT_TAKEN)
    db.refresh(ticket)
    logger.info(
        "Client %s booked seat %s for schedule %s.",
        identity.client_id, ticket.seat, ticket.schedule_id,
    )
    return ticket


# ---------------------------------------------------------------------------
# GET /tickets/{id}/details
# ---------------------------------------------------------------------------


@router.get("/{ticket_id}/details", response_model=TicketDetails)
def get_ticket_details(
    ticket_id: RowId,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_client),
):
    ticket = _get_owned_ticket(db, ticket_id, identity, "access details for")

    schedule = (
        db.query(Schedule)
        .options(
            joinedload(Schedule.hall),
            joinedload(Schedule.movie),
            joinedload(Schedule.showing),
        )
        .filter(Schedule.id == ticket.schedule_id)
        .first()
    )
    if schedule is None:
        raise IntegrityViolation("Schedule with the specified ID does not exist.")
    if schedule.hall is None:
        raise IntegrityViolation("Hall with the specified ID does not exist.")
    if schedule.movie is None:
        raise IntegrityViolation("Movie with the specified ID does not exist.")
    if schedule.showing is None:
        raise IntegrityViolation("Showing time with the specified ID does not exist.")

    return TicketDetails(
        show_date=schedule.show_date,
        show_time=schedule.showing.show_time,
        hall_name=schedule.hall.name,
        seat=ticket.seat,
        title=schedule.movie.title,
        duration_minutes=schedule.movie.duration_minutes,
        price=schedule.price,
        description=schedule.movie.description,
    )


# ---------------------------------------------------------------------------
# DELETE /tickets/{id}
# ---------------------------------------------------------------------------


@router.delete("/{ticket_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_ticket(
    ticket_id: RowId,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_client),
):
    ticket = _get_owned_ticket(db, ticket_id, identity, "delete")
    db.delete(ticket)
    db.commit()
    logger.info("Client %s released ticket %s.", identity.client_id, ticket_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
