from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.api.deps import RowId
from app.core.errors import NotFound
from app.models.catalog import Movie, Genre, MovieGenre
from app.schemas.movie import Movie as MovieSchema, Genre as GenreSchema, MovieGenreInfo
from app.schemas.common import INT32_MAX, PaginatedResponse

router = APIRouter(prefix="/movies", tags=["Movies"])
genre_router = APIRouter(prefix="/genres", tags=["Genres"])


@router.get("/", response_model=PaginatedResponse[MovieSchema])
def list_movies(
    search: Optional[str] = None,
    page: int = Query(1, ge=1, le=INT32_MAX),
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
):
    query = db.query(Movie)
    if search:
        query = query.filter(Movie.title.ilike(f"%{search}%"))

    total = query.count()
    movies = query.order_by(Movie.id).offset((page - 1) * limit).limit(limit).all()

    return PaginatedResponse(
        data=movies,
        total=total,
        page=page,
        limit=limit,
        total_pages=-(-total // limit) if total else 0,
    )


@router.get("/{id}", response_model=MovieSchema)
def get_movie(id: RowId, db: Session = Depends(get_db)):
    movie = db.query(Movie).filter(Movie.id == id).first()
    if not movie:
        raise NotFound("Movie not found")
    return movie


@router.get("/{id}/genres", response_model=List[MovieGenreInfo])
def list_movie_genres(id: RowId, db: Session = Depends(get_db)):
    movie = db.query(Movie).filter(Movie.id == id).first()
    if not movie:
        raise NotFound("Movie not found")

    rows = (
        db.query(Genre.name)
        .join(MovieGenre, MovieGenre.genre_id == Genre.id)
        .filter(MovieGenre.movie_id == id)
        .order_by(Genre.name)
        .all()
    )
    return [
        MovieGenreInfo(movie_id=movie.id, title=movie.title, genre_name=name)
        for (name,) in rows
    ]


@genre_router.get("/", response_model=List[GenreSchema])
def list_genres(db: Session = Depends(get_db)):
    return db.query(Genre).order_by(Genre.name).all()
