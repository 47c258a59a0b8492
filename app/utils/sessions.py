import logging
import secrets
from datetime import timedelta
from typing import Optional

from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.security import utcnow
from app.models.client import Client, ClientSession

logger = logging.getLogger(__name__)


def _idle_cutoff():
    return utcnow() - timedelta(minutes=settings.SESSION_IDLE_MINUTES)


def open_session(db: Session, client: Client) -> ClientSession:
    """Store (client id, access rights) under a fresh opaque session id."""
    now = utcnow()
    client_session = ClientSession(
        sid=secrets.token_urlsafe(32),
        client_id=client.id,
        access_rights=client.access_rights,
        created_at=now,
        last_seen_at=now,
    )
    db.add(client_session)
    db.commit()
    db.refresh(client_session)
    logger.info("Opened session for client %s.", client.id)
    return client_session


def resolve_session(db: Session, sid: str) -> Optional[ClientSession]:
    """
    Look up a live session and slide its idle window.

    A session idle for longer than SESSION_IDLE_MINUTES is removed and
    treated as absent.
    """
    client_session = db.query(ClientSession).filter(ClientSession.sid == sid).first()
    if not client_session:
        return None

    if client_session.last_seen_at < _idle_cutoff():
        db.delete(client_session)
        db.commit()
        logger.info("Session for client %s expired after inactivity.", client_session.client_id)
        return None

    client_session.last_seen_at = utcnow()
    db.commit()
    return client_session


def close_session(db: Session, sid: str) -> bool:
    """Remove a session. Returns False when there was nothing to remove."""
    removed = db.query(ClientSession).filter(ClientSession.sid == sid).delete(
        synchronize_session=False
    )
    db.commit()
    if removed:
        logger.info("Closed session %s...", sid[:8])
    return bool(removed)


def purge_expired_sessions(db: Session) -> int:
    """Delete every session past its idle window. Returns the number removed."""
    count = (
        db.query(ClientSession)
        .filter(ClientSession.last_seen_at < _idle_cutoff())
        .delete(synchronize_session=False)
    )
    db.commit()
    return count
