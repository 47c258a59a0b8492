from sqlalchemy import Column, Integer, Date, DECIMAL, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from app.db.session import Base

class Schedule(Base):
    __tablename__ = "schedules"
    __table_args__ = (
        # One screening per hall, showing time and day
        UniqueConstraint("hall_id", "showing_id", "show_date", name="uq_schedules_slot"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    hall_id = Column(Integer, ForeignKey("halls.id"), nullable=False, index=True)
    showing_id = Column(Integer, ForeignKey("showings.id"), nullable=False)
    movie_id = Column(Integer, ForeignKey("movies.id"), nullable=False, index=True)
    show_date = Column(Date, nullable=False, index=True)
    price = Column(DECIMAL(10, 2), nullable=False)

    # Relationships
    hall = relationship("Hall", back_populates="schedules")
    showing = relationship("Showing", back_populates="schedules")
    movie = relationship("Movie", back_populates="schedules")
    tickets = relationship("Ticket", back_populates="schedule", passive_deletes=True)
