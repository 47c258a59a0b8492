import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import Conflict

logger = logging.getLogger(__name__)


def commit_or_conflict(db: Session, detail: str) -> None:
    """
    Commit pending inserts guarded by a unique constraint.

    If another request won the race for the same key, the constraint fires
    here; the transaction is rolled back and the loser gets a 409.
    """
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.warning("Unique constraint rejected write (%s): %s", detail, exc.orig)
        raise Conflict(detail) from exc
