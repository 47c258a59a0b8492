from dataclasses import dataclass
from typing import Annotated, Optional

from fastapi import Depends, Path
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.core.errors import Conflict, Forbidden, Unauthorized
from app.core.security import decode_token
from app.models.client import Role
from app.schemas.common import INT32_MAX, INT32_MIN
from app.utils.sessions import resolve_session

bearer_scheme = HTTPBearer(auto_error=False)

# Path ids share the 32-bit range of the integer columns
RowId = Annotated[int, Path(ge=INT32_MIN, le=INT32_MAX)]


@dataclass(frozen=True)
class Identity:
    """Who is calling, resolved once per request from the session token."""
    client_id: int
    role: Role
    sid: str

    @property
    def is_admin(self) -> bool:
        return self.role is Role.admin


def get_session_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[str]:
    if credentials is None:
        return None
    return decode_token(credentials.credentials)


def get_identity(
    sid: Optional[str] = Depends(get_session_id),
    db: Session = Depends(get_db),
) -> Optional[Identity]:
    """Returns None for anonymous callers."""
    if not sid:
        return None
    client_session = resolve_session(db, sid)
    if not client_session:
        return None
    return Identity(
        client_id=client_session.client_id,
        role=Role.from_access_rights(client_session.access_rights),
        sid=client_session.sid,
    )


def get_current_client(identity: Optional[Identity] = Depends(get_identity)) -> Identity:
    """Client-facing operations report a missing session as a conflict."""
    if identity is None:
        raise Conflict("User is not logged in.")
    return identity


def get_current_admin_user(identity: Optional[Identity] = Depends(get_identity)) -> Identity:
    if identity is None:
        raise Unauthorized()
    if not identity.is_admin:
        raise Forbidden()
    return identity
