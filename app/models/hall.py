from sqlalchemy import Column, String, Integer, Time, CheckConstraint
from sqlalchemy.orm import relationship
from app.db.session import Base

class Hall(Base):
    __tablename__ = "halls"
    __table_args__ = (CheckConstraint("seats_number > 0", name="ck_halls_seats_positive"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    seats_number = Column(Integer, nullable=False) # valid seats are 1..seats_number

    schedules = relationship("Schedule", back_populates="hall")


class Showing(Base):
    __tablename__ = "showings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    show_time = Column(Time, unique=True, nullable=False)

    schedules = relationship("Schedule", back_populates="showing")
