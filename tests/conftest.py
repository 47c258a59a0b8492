import os

# Must be set before anything under app/ reads settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["SECRET_KEY"] = "test-secret"

from datetime import date, time, timedelta
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.core.config import settings
from app.db.base import Base
from app.db.session import get_db
from app.models.catalog import Movie
from app.models.hall import Hall, Showing
from app.models.schedule import Schedule

API = settings.API_V1_STR

TOMORROW = date.today() + timedelta(days=1)
TODAY = date.today()
YESTERDAY = date.today() - timedelta(days=1)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Accounts
# ---------------------------------------------------------------------------


def registration(login="alice", password="secret1", **overrides):
    body = {
        "name": "Alice",
        "surname": "Smith",
        "login": login,
        "password": password,
        "confirm_password": password,
    }
    body.update(overrides)
    return body


def login_headers(client, login, password):
    resp = client.post(f"{API}/auth/login", json={"login": login, "password": password})
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}


@pytest.fixture
def register_and_login(client):
    """Register a standard client and return auth headers for it."""
    def _register_and_login(login="alice", password="secret1"):
        resp = client.post(f"{API}/auth/register", json=registration(login, password))
        assert resp.status_code == 201, resp.text
        return login_headers(client, login, password)
    return _register_and_login


@pytest.fixture
def user_headers(register_and_login):
    return register_and_login("alice")


@pytest.fixture
def admin_headers(client):
    body = registration("root", "rootpass", admin_secret=settings.ADMIN_SECRET_KEY)
    resp = client.post(f"{API}/auth/admin/register", json=body)
    assert resp.status_code == 201, resp.text
    return login_headers(client, "root", "rootpass")


# ---------------------------------------------------------------------------
# Catalog seed
# ---------------------------------------------------------------------------


def add_movie(db, title="Inception", **overrides):
    fields = dict(
        title=title,
        budget=Decimal("160000000"),
        description="A thief who steals corporate secrets through dreams.",
        release_date=date(2010, 7, 16),
        box_office=Decimal("836800000"),
        duration_minutes=148,
        tagline="Your mind is the scene of the crime.",
        average_rating=8.8,
    )
    fields.update(overrides)
    movie = Movie(**fields)
    db.add(movie)
    db.commit()
    db.refresh(movie)
    return movie


def add_schedule(db, hall_id, showing_id, movie_id, show_date, price=Decimal("10.00")):
    """Insert a schedule directly, bypassing the date rules of the endpoint."""
    schedule = Schedule(
        hall_id=hall_id,
        showing_id=showing_id,
        movie_id=movie_id,
        show_date=show_date,
        price=price,
    )
    db.add(schedule)
    db.commit()
    db.refresh(schedule)
    return schedule


@pytest.fixture
def cinema(db):
    """Hall 1 with 50 seats, an 18:00 showing and one movie."""
    hall = Hall(name="Hall A", seats_number=50)
    showing = Showing(show_time=time(18, 0))
    db.add_all([hall, showing])
    db.commit()
    movie = add_movie(db)
    return {"hall_id": hall.id, "showing_id": showing.id, "movie_id": movie.id}


@pytest.fixture
def schedule_payload(cinema):
    return {**cinema, "show_date": TOMORROW.isoformat(), "price": "10.00"}
