from app.db.session import Base
from app.models.client import Client, ClientSession
from app.models.catalog import Movie, Genre, MovieGenre
from app.models.hall import Hall, Showing
from app.models.schedule import Schedule
from app.models.ticket import Ticket
