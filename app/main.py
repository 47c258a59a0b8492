import asyncio
import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from app.db.init_db import create_database
from app.db.base import Base
from app.db.session import engine, SessionLocal
from app.core.config import settings
from app.api.v1.router import api_router
from app.utils.sessions import purge_expired_sessions

logger = logging.getLogger(__name__)


def _purge_sessions_once(session_factory=SessionLocal) -> int:
    db = session_factory()
    try:
        count = purge_expired_sessions(db)
        if count:
            logger.info("Purged %d expired session(s).", count)
        return count
    finally:
        db.close()


async def _session_purge_loop(interval: float, session_factory=SessionLocal) -> None:
    """Background task: drop idle sessions every `interval` seconds."""
    while True:
        try:
            _purge_sessions_once(session_factory)
        except Exception:
            logger.exception("Error during expired-session purge.")
        await asyncio.sleep(interval)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: Ensure DB exists and create tables
    create_database()
    Base.metadata.create_all(bind=engine)

    # Run an immediate purge, then keep running in the background
    purge_task = asyncio.create_task(_session_purge_loop(settings.SESSION_PURGE_INTERVAL_SECONDS))
    yield

    # Shutdown: cancel background task
    purge_task.cancel()
    try:
        await purge_task
    except asyncio.CancelledError:
        pass


from fastapi.middleware.cors import CORSMiddleware

app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)

# Set all CORS enabled origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed input is a plain 400, same as the endpoints' own range checks."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=jsonable_encoder({"detail": "Invalid request data.", "errors": exc.errors()}),
    )


app.include_router(api_router, prefix=settings.API_V1_STR)

@app.get("/")
def read_root():
    return {"Hello": "Cinema"}
