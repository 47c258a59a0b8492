from datetime import date, timedelta

import pytest
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.catalog import Movie, Genre, MovieGenre
from app.models.schedule import Schedule
from app.models.ticket import Ticket

from conftest import API, TOMORROW, add_movie, add_schedule


def movie_payload(**overrides):
    body = {
        "title": "Arrival",
        "budget": "47000000",
        "description": "A linguist works with the military to talk to aliens.",
        "release_date": "2016-11-11",
        "box_office": "203400000",
        "duration_minutes": 116,
        "tagline": "Why are they here?",
        "average_rating": 7.9,
    }
    body.update(overrides)
    return body


# ---------------------------------------------------------------------------
# Gate
# ---------------------------------------------------------------------------


def test_add_movie_requires_login(client):
    resp = client.post(f"{API}/admin/movies/", json=movie_payload())
    assert resp.status_code == 401


def test_add_movie_requires_admin(client, user_headers):
    resp = client.post(f"{API}/admin/movies/", json=movie_payload(), headers=user_headers)
    assert resp.status_code == 403
    assert resp.json()["detail"] == "User does not have access rights."


def test_gate_runs_before_validation(client, user_headers):
    resp = client.post(f"{API}/admin/movies/", json=movie_payload(title=""), headers=user_headers)
    assert resp.status_code == 403


# ---------------------------------------------------------------------------
# AddMovie / GetMovie
# ---------------------------------------------------------------------------


def test_add_and_get_movie(client, admin_headers):
    resp = client.post(f"{API}/admin/movies/", json=movie_payload(), headers=admin_headers)
    assert resp.status_code == 201
    movie = resp.json()
    assert movie["id"] >= 1
    assert movie["title"] == "Arrival"

    fetched = client.get(f"{API}/movies/{movie['id']}")
    assert fetched.status_code == 200
    assert fetched.json()["duration_minutes"] == 116


def test_get_missing_movie(client):
    assert client.get(f"{API}/movies/999").status_code == 404


@pytest.mark.parametrize(
    "overrides, detail",
    [
        ({"title": ""}, "Title cannot be empty."),
        ({"budget": "-1"}, "Budget cannot be negative."),
        ({"release_date": (date.today() + timedelta(days=1)).isoformat()}, "Release date cannot be in the future."),
        ({"box_office": "-0.01"}, "Box office cannot be negative."),
        ({"duration_minutes": 0}, "Duration must be greater than zero."),
        ({"average_rating": 10.5}, "Average rating must be between 0 and 10."),
        ({"average_rating": -0.1}, "Average rating must be between 0 and 10."),
        # Only the first broken field is reported
        ({"title": "", "budget": "-1", "duration_minutes": 0}, "Title cannot be empty."),
        ({"budget": "-1", "average_rating": 11}, "Budget cannot be negative."),
    ],
)
def test_add_movie_validation(client, db, admin_headers, overrides, detail):
    resp = client.post(f"{API}/admin/movies/", json=movie_payload(**overrides), headers=admin_headers)
    assert resp.status_code == 400
    assert resp.json()["detail"] == detail
    assert db.query(Movie).count() == 0


def test_add_movie_accepts_boundaries(client, admin_headers):
    body = movie_payload(
        budget="0", box_office="0", average_rating=10, release_date=date.today().isoformat()
    )
    assert client.post(f"{API}/admin/movies/", json=body, headers=admin_headers).status_code == 201


def test_malformed_movie_body_is_bad_request(client, admin_headers):
    resp = client.post(
        f"{API}/admin/movies/", json=movie_payload(duration_minutes="long"), headers=admin_headers
    )
    assert resp.status_code == 400
    assert resp.json()["errors"]


def test_list_movies_paginates_and_searches(client, db):
    for title in ("Alien", "Aliens", "Heat"):
        add_movie(db, title=title)

    page = client.get(f"{API}/movies/", params={"limit": 2}).json()
    assert page["total"] == 3
    assert page["total_pages"] == 2
    assert [m["title"] for m in page["data"]] == ["Alien", "Aliens"]

    found = client.get(f"{API}/movies/", params={"search": "alien"}).json()
    assert found["total"] == 2


# ---------------------------------------------------------------------------
# Genres
# ---------------------------------------------------------------------------


def test_add_genre_and_reject_duplicate(client, admin_headers):
    resp = client.post(f"{API}/admin/genres/", json={"name": "Drama"}, headers=admin_headers)
    assert resp.status_code == 201
    dup = client.post(f"{API}/admin/genres/", json={"name": "Drama"}, headers=admin_headers)
    assert dup.status_code == 409
    assert [g["name"] for g in client.get(f"{API}/genres/").json()] == ["Drama"]


def test_add_movie_genre_is_idempotent(client, db, cinema, admin_headers):
    genre = Genre(name="Sci-Fi")
    db.add(genre)
    db.commit()
    url = f"{API}/admin/movies/{cinema['movie_id']}/genres/{genre.id}"

    first = client.post(url, headers=admin_headers)
    second = client.post(url, headers=admin_headers)

    assert first.status_code == second.status_code == 200
    assert first.json() == second.json() == {
        "movie_id": cinema["movie_id"], "title": "Inception", "genre_name": "Sci-Fi",
    }
    assert db.query(MovieGenre).count() == 1

    listed = client.get(f"{API}/movies/{cinema['movie_id']}/genres").json()
    assert [g["genre_name"] for g in listed] == ["Sci-Fi"]


def test_add_movie_genre_unknown_ids(client, db, cinema, admin_headers):
    genre = Genre(name="Sci-Fi")
    db.add(genre)
    db.commit()

    resp = client.post(f"{API}/admin/movies/999/genres/{genre.id}", headers=admin_headers)
    assert resp.status_code == 409
    assert resp.json()["detail"] == "Movie with the specified ID does not exist."

    resp = client.post(f"{API}/admin/movies/{cinema['movie_id']}/genres/999", headers=admin_headers)
    assert resp.status_code == 409
    assert resp.json()["detail"] == "Genre with the specified ID does not exist."


# ---------------------------------------------------------------------------
# DeleteMovie cascade
# ---------------------------------------------------------------------------


def test_delete_movie_cascades(client, db, cinema, admin_headers, user_headers):
    genre = Genre(name="Thriller")
    db.add(genre)
    db.commit()
    client.post(f"{API}/admin/movies/{cinema['movie_id']}/genres/{genre.id}", headers=admin_headers)

    schedule = add_schedule(db, cinema["hall_id"], cinema["showing_id"], cinema["movie_id"], TOMORROW)
    schedule_id = schedule.id
    client.post(f"{API}/tickets/", json={"schedule_id": schedule.id, "seat": 3}, headers=user_headers)
    client.post(f"{API}/tickets/", json={"schedule_id": schedule.id, "seat": 4}, headers=user_headers)

    # A second movie whose data must survive
    other = add_movie(db, title="Tenet")
    other_id = other.id
    other_schedule = add_schedule(
        db, cinema["hall_id"], cinema["showing_id"], other.id, TOMORROW + timedelta(days=1)
    )
    client.post(f"{API}/tickets/", json={"schedule_id": other_schedule.id, "seat": 1}, headers=user_headers)

    resp = client.delete(f"{API}/admin/movies/{cinema['movie_id']}", headers=admin_headers)
    assert resp.status_code == 204

    db.expire_all()
    assert db.query(Movie).filter(Movie.id == cinema["movie_id"]).first() is None
    assert db.query(MovieGenre).filter(MovieGenre.movie_id == cinema["movie_id"]).count() == 0
    assert db.query(Schedule).filter(Schedule.movie_id == cinema["movie_id"]).count() == 0
    assert db.query(Ticket).filter(Ticket.schedule_id == schedule_id).count() == 0

    assert db.query(Schedule).filter(Schedule.movie_id == other_id).count() == 1
    assert db.query(Ticket).count() == 1
    assert db.query(Genre).count() == 1
    assert client.get(f"{API}/movies/{cinema['movie_id']}").status_code == 404


def test_delete_missing_movie(client, admin_headers):
    assert client.delete(f"{API}/admin/movies/999", headers=admin_headers).status_code == 404


def test_delete_movie_requires_admin(client, cinema, user_headers):
    resp = client.delete(f"{API}/admin/movies/{cinema['movie_id']}", headers=user_headers)
    assert resp.status_code == 403


def test_failed_movie_delete_rolls_back_the_cascade(client, db, cinema, admin_headers, user_headers, monkeypatch):
    genre = Genre(name="Thriller")
    db.add(genre)
    db.commit()
    client.post(f"{API}/admin/movies/{cinema['movie_id']}/genres/{genre.id}", headers=admin_headers)
    schedule_id = add_schedule(db, cinema["hall_id"], cinema["showing_id"], cinema["movie_id"], TOMORROW).id
    client.post(f"{API}/tickets/", json={"schedule_id": schedule_id, "seat": 3}, headers=user_headers)

    # Links, tickets and schedules are bulk-deleted before the movie row fails
    original_delete = Session.delete

    def delete_all_but_movies(self, instance):
        if isinstance(instance, Movie):
            raise SQLAlchemyError("disk I/O error")
        return original_delete(self, instance)

    monkeypatch.setattr(Session, "delete", delete_all_but_movies)
    with pytest.raises(SQLAlchemyError):
        client.delete(f"{API}/admin/movies/{cinema['movie_id']}", headers=admin_headers)

    db.expire_all()
    assert db.query(Movie).filter(Movie.id == cinema["movie_id"]).count() == 1
    assert db.query(MovieGenre).filter(MovieGenre.movie_id == cinema["movie_id"]).count() == 1
    assert db.query(Schedule).filter(Schedule.id == schedule_id).count() == 1
    assert db.query(Ticket).filter(Ticket.schedule_id == schedule_id).count() == 1
