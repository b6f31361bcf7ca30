# fitlab/models.py
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from .db import Base


class Instructor(Base):
    __tablename__ = "instructors"

    id = Column(Integer, primary_key=True, index=True)
    full_name = Column(String(120), nullable=False)

    class_sessions = relationship("ClassSession", back_populates="instructor")


class ClassType(Base):
    __tablename__ = "class_types"

    id = Column(Integer, primary_key=True, index=True)
    # category is derived from the name (scheduling_rules.classify), never stored
    name = Column(String(120), unique=True, nullable=False)

    class_sessions = relationship("ClassSession", back_populates="class_type")


class ClassSession(Base):
    __tablename__ = "class_sessions"

    id = Column(Integer, primary_key=True, index=True)
    class_type_id = Column(Integer, ForeignKey("class_types.id"), nullable=False)
    instructor_id = Column(Integer, ForeignKey("instructors.id"), nullable=False)
    start_time = Column(DateTime, nullable=False, index=True)
    end_time = Column(DateTime, nullable=False)
    max_capacity = Column(Integer, nullable=False, default=3)

    class_type = relationship("ClassType", back_populates="class_sessions")
    instructor = relationship("Instructor", back_populates="class_sessions")
    bookings = relationship("Booking", back_populates="class_session", cascade="all, delete-orphan")


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    class_session_id = Column(Integer, ForeignKey("class_sessions.id", ondelete="CASCADE"), nullable=False)
    full_name = Column(String(120), nullable=False)
    email = Column(String(160), nullable=True)
    phone = Column(String(32), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    class_session = relationship("ClassSession", back_populates="bookings")
