import logging
from datetime import date

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.api.deps import Identity, RowId, get_current_admin_user
from app.core.errors import BadRequest, Conflict, NotFound
from app.models.catalog import Movie, Genre, MovieGenre
from app.models.schedule import Schedule
from app.models.ticket import Ticket
from app.schemas.movie import (
    MovieCreate,
    Movie as MovieSchema,
    GenreCreate,
    Genre as GenreSchema,
    MovieGenreInfo,
)
from app.utils.constraints import commit_or_conflict

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin/movies", tags=["Admin - Movies"])
genre_router = APIRouter(prefix="/admin/genres", tags=["Admin - Genres"])


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _validate_movie(data: MovieCreate):
    """Raise 400 naming the first invalid field, in declaration order."""
    if not data.title:
        raise BadRequest("Title cannot be empty.")
    if data.budget < 0:
        raise BadRequest("Budget cannot be negative.")
    if data.release_date > date.today():
        raise BadRequest("Release date cannot be in the future.")
    if data.box_office < 0:
        raise BadRequest("Box office cannot be negative.")
    if data.duration_minutes <= 0:
        raise BadRequest("Duration must be greater than zero.")
    if not 0 <= data.average_rating <= 10:
        raise BadRequest("Average rating must be between 0 and 10.")


# ---------------------------------------------------------------------------
# Movie CRUD
# ---------------------------------------------------------------------------


@router.post("/", response_model=MovieSchema, status_code=status.HTTP_201_CREATED)
def create_movie(
    data: MovieCreate,
    db: Session = Depends(get_db),
    current_user: Identity = Depends(get_current_admin_user),
):
    _validate_movie(data)
    movie = Movie(**data.model_dump())
    db.add(movie)
    db.commit()
    db.refresh(movie)
    return movie


@router.delete("/{id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_movie(
    id: RowId,
    db: Session = Depends(get_db),
    current_user: Identity = Depends(get_current_admin_user),
):
    """
    Delete a movie together with everything hanging off it.

    Children go first, in one transaction:
    genre links -> tickets of the movie's schedules -> schedules -> movie.
    """
    movie = db.query(Movie).filter(Movie.id == id).first()
    if not movie:
        raise NotFound("Movie not found")

    schedule_ids = select(Schedule.id).where(Schedule.movie_id == id)

    try:
        links = db.query(MovieGenre).filter(MovieGenre.movie_id == id).delete(
            synchronize_session=False
        )
        tickets = db.query(Ticket).filter(Ticket.schedule_id.in_(schedule_ids)).delete(
            synchronize_session=False
        )
        schedules = db.query(Schedule).filter(Schedule.movie_id == id).delete(
            synchronize_session=False
        )
        db.delete(movie)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Rolled back deletion of movie %s.", id)
        raise

    logger.info(
        "Deleted movie %s with %d genre link(s), %d schedule(s), %d ticket(s).",
        id, links, schedules, tickets,
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ---------------------------------------------------------------------------
# Genres
# ---------------------------------------------------------------------------


@router.post("/{movie_id}/genres/{genre_id}", response_model=MovieGenreInfo)
def add_movie_genre(
    movie_id: RowId,
    genre_id: RowId,
    db: Session = Depends(get_db),
    current_user: Identity = Depends(get_current_admin_user),
):
    """Attach a genre to a movie. Attaching it again is a no-op."""
    movie = db.query(Movie).filter(Movie.id == movie_id).first()
    if not movie:
        raise Conflict("Movie with the specified ID does not exist.")
    genre = db.query(Genre).filter(Genre.id == genre_id).first()
    if not genre:
        raise Conflict("Genre with the specified ID does not exist.")

    link = db.query(MovieGenre).filter(
        MovieGenre.movie_id == movie_id,
        MovieGenre.genre_id == genre_id,
    ).first()
    if not link:
        db.add(MovieGenre(movie_id=movie_id, genre_id=genre_id))
        try:
            db.commit()
        except IntegrityError:
            # A concurrent request attached the same genre first
            db.rollback()

    return MovieGenreInfo(movie_id=movie_id, title=movie.title, genre_name=genre.name)


@genre_router.post("/", response_model=GenreSchema, status_code=status.HTTP_201_CREATED)
def create_genre(
    data: GenreCreate,
    db: Session = Depends(get_db),
    current_user: Identity = Depends(get_current_admin_user),
):
    name = data.name.strip()
    if not name:
        raise BadRequest("Genre name cannot be empty.")
    if db.query(Genre.id).filter(Genre.name == name).first():
        raise Conflict("Genre already exists.")
    genre = Genre(name=name)
    db.add(genre)
    commit_or_conflict(db, "Genre already exists.")
    db.refresh(genre)
    return genre
