from sqlalchemy import Column, String, Integer, Float, Date, Text, DECIMAL, ForeignKey
from sqlalchemy.orm import relationship
from app.db.session import Base


class Movie(Base):
    __tablename__ = "movies"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    budget = Column(DECIMAL(14, 2), nullable=False, default=0)
    description = Column(Text, nullable=True)
    release_date = Column(Date, nullable=False)
    box_office = Column(DECIMAL(14, 2), nullable=False, default=0)
    duration_minutes = Column(Integer, nullable=False)
    tagline = Column(String(500), nullable=True)
    average_rating = Column(Float, nullable=False, default=0.0)

    # Deletion is done explicitly (see DELETE /admin/movies/{id}), so no ORM cascade here
    genre_links = relationship("MovieGenre", back_populates="movie", passive_deletes=True)
    schedules = relationship("Schedule", back_populates="movie", passive_deletes=True)


class Genre(Base):
    __tablename__ = "genres"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), unique=True, nullable=False)

    movie_links = relationship("MovieGenre", back_populates="genre")


class MovieGenre(Base):
    __tablename__ = "movie_genres"

    movie_id = Column(Integer, ForeignKey("movies.id"), primary_key=True)
    genre_id = Column(Integer, ForeignKey("genres.id"), primary_key=True)

    movie = relationship("Movie", back_populates="genre_links")
    genre = relationship("Genre", back_populates="movie_links")
