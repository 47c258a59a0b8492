from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.models.client import Client
from app.schemas.client import ClientDisplay

router = APIRouter(prefix="/clients", tags=["Clients"])


@router.get("/", response_model=List[ClientDisplay])
def list_clients(db: Session = Depends(get_db)):
    return db.query(Client).order_by(Client.id).all()
