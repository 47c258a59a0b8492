from app.schemas.common import PaginatedResponse, Int32
from app.schemas.client import ClientRegister, AdminRegister, ClientLogin, ClientDisplay, SessionToken
from app.schemas.movie import Movie, MovieCreate, Genre, GenreCreate, MovieGenreInfo
from app.schemas.hall import Hall, HallCreate, Showing, ShowingCreate
from app.schemas.schedule import Schedule, ScheduleCreate, ScheduleInfo, ScheduleSeats
from app.schemas.ticket import Ticket, TicketCreate, TicketDetails
