from fastapi import APIRouter

# Auth
from app.api.v1.public.auth import router as auth_router

# Public: accounts
from app.api.v1.public.me import router as me_router
from app.api.v1.public.clients import router as clients_router

# Public: catalog & schedules
from app.api.v1.public.movies import router as movies_router, genre_router
from app.api.v1.public.halls import router as halls_router, showing_router
from app.api.v1.public.schedules import router as schedules_router

# Public: tickets
from app.api.v1.public.tickets import router as tickets_router

# Admin
from app.api.v1.admin.movies import router as admin_movies_router, genre_router as admin_genre_router
from app.api.v1.admin.halls import router as admin_halls_router, showing_router as admin_showing_router
from app.api.v1.admin.schedules import router as admin_schedules_router

api_router = APIRouter()

# --- Auth ---
api_router.include_router(auth_router)

# --- Public: accounts ---
api_router.include_router(me_router)
api_router.include_router(clients_router)

# --- Public: catalog & schedules ---
api_router.include_router(movies_router)
api_router.include_router(genre_router)
api_router.include_router(halls_router)
api_router.include_router(showing_router)
api_router.include_router(schedules_router)

# --- Public: tickets ---
api_router.include_router(tickets_router)

# --- Admin ---
api_router.include_router(admin_movies_router)
api_router.include_router(admin_genre_router)
api_router.include_router(admin_halls_router)
api_router.include_router(admin_showing_router)
api_router.include_router(admin_schedules_router)
