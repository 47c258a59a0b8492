from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.models.hall import Hall, Showing
from app.schemas.hall import Hall as HallSchema, Showing as ShowingSchema

router = APIRouter(prefix="/halls", tags=["Halls"])
showing_router = APIRouter(prefix="/showings", tags=["Showings"])


@router.get("/", response_model=List[HallSchema])
def list_halls(db: Session = Depends(get_db)):
    return db.query(Hall).order_by(Hall.id).all()


@showing_router.get("/", response_model=List[ShowingSchema])
def list_showings(db: Session = Depends(get_db)):
    return db.query(Showing).order_by(Showing.show_time).all()
