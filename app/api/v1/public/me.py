from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.api.deps import Identity, get_current_client
from app.core.errors import NotFound
from app.models.client import Client
from app.schemas.client import ClientDisplay

router = APIRouter(prefix="/me", tags=["Me"])


@router.get("/", response_model=ClientDisplay)
def get_me(
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_client),
):
    """Return the logged-in client's profile."""
    client = db.query(Client).filter(Client.id == identity.client_id).first()
    if not client:
        # Session outlived its client row
        raise NotFound("Client not found")
    return client
