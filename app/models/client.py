import enum
from sqlalchemy import Column, String, Boolean, Integer, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from app.db.session import Base


class Role(str, enum.Enum):
    standard = "standard"
    admin = "admin"

    @classmethod
    def from_access_rights(cls, access_rights: bool) -> "Role":
        return cls.admin if access_rights else cls.standard


class Client(Base):
    __tablename__ = "clients"

    id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    login = Column(String(100), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    access_rights = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    tickets = relationship("Ticket", back_populates="client")
    sessions = relationship("ClientSession", back_populates="client", cascade="all, delete-orphan")

    @property
    def role(self) -> Role:
        return Role.from_access_rights(self.access_rights)


class ClientSession(Base):
    __tablename__ = "client_sessions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    sid = Column(String(64), unique=True, nullable=False, index=True)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=False, index=True)
    access_rights = Column(Boolean, nullable=False, default=False) # snapshot taken at login
    created_at = Column(DateTime, nullable=False)
    last_seen_at = Column(DateTime, nullable=False, index=True)

    client = relationship("Client", back_populates="sessions")
