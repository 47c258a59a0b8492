import logging
import re
from typing import Optional

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.core.config import settings
from app.core.errors import Conflict, Forbidden, Unauthorized
from app.core.security import (
    create_access_token,
    get_password_hash,
    password_needs_rehash,
    verify_password,
)
from app.api.deps import get_session_id
from app.models.client import Client
from app.schemas.client import ClientRegister, AdminRegister, ClientLogin, ClientDisplay, SessionToken
from app.utils.constraints import commit_or_conflict
from app.utils.sessions import open_session, close_session

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

LOGIN_TAKEN = "A client with this login already exists."

_NAME_RE = re.compile(r"[a-zA-Z]+")


def _has_whitespace(value: str) -> bool:
    return any(ch.isspace() for ch in value)


def _check_registration(body: ClientRegister, db: Session):
    """Apply the registration rules in order; the first broken rule wins."""
    if db.query(Client.id).filter(Client.login == body.login).first():
        raise Conflict(LOGIN_TAKEN)
    if body.password != body.confirm_password:
        raise Conflict("The password and confirmation password do not match.")
    if not all((body.name, body.surname, body.login, body.password)):
        raise Conflict("All fields must be filled.")
    if not _NAME_RE.fullmatch(body.name) or not _NAME_RE.fullmatch(body.surname):
        raise Conflict("The name and surname must contain only letters.")
    if _has_whitespace(body.login) or _has_whitespace(body.password):
        raise Conflict("The values of fields must not contain spaces.")


def _create_client(body: ClientRegister, db: Session, access_rights: bool) -> Client:
    _check_registration(body, db)
    client = Client(
        first_name=body.name,
        last_name=body.surname,
        login=body.login,
        password_hash=get_password_hash(body.password),
        access_rights=access_rights,
    )
    db.add(client)
    commit_or_conflict(db, LOGIN_TAKEN)
    db.refresh(client)
    logger.info("Registered client %s (%s).", client.id, client.role.value)
    return client


@router.post("/register", response_model=ClientDisplay, status_code=status.HTTP_201_CREATED)
def register(body: ClientRegister, db: Session = Depends(get_db)):
    return _create_client(body, db, access_rights=False)


@router.post("/admin/register", response_model=ClientDisplay, status_code=status.HTTP_201_CREATED)
def admin_register(body: AdminRegister, db: Session = Depends(get_db)):
    if body.admin_secret != settings.ADMIN_SECRET_KEY:
        raise Forbidden("Invalid admin secret")
    return _create_client(body, db, access_rights=True)


@router.post("/login", response_model=SessionToken)
def login(body: ClientLogin, db: Session = Depends(get_db)):
    client = db.query(Client).filter(Client.login == body.login).first()
    if not client or not verify_password(body.password, client.password_hash):
        logger.warning("Rejected login attempt for %r.", body.login)
        raise Unauthorized("Invalid login or password.")

    if password_needs_rehash(client.password_hash):
        client.password_hash = get_password_hash(body.password)
        db.commit()
        logger.info("Upgraded password hash for client %s.", client.id)

    client_session = open_session(db, client)
    return SessionToken(
        access_token=create_access_token(subject=client_session.sid),
        token_type="bearer",
        client=ClientDisplay.model_validate(client),
    )


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def logout(
    sid: Optional[str] = Depends(get_session_id),
    db: Session = Depends(get_db),
):
    """
    Drop the caller's session. Always succeeds, with or without one.
    """
    if sid:
        close_session(db, sid)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
