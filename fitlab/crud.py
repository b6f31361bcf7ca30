# fitlab/crud.py
"""
CRUD Module
-----------
Database access for the class calendar. Uses SQLAlchemy ORM sessions
and hands plain dicts back to the routers and rule code.
"""

from typing import Any, Dict, Iterable, List, Optional
from datetime import date, datetime, time, timedelta
from sqlalchemy import func, select

from .db import get_session
from .models import Booking, ClassSession, ClassType, Instructor


def _session_dict(s: ClassSession) -> Dict[str, Any]:
    return {
        "id": s.id,
        "class_type_id": s.class_type_id,
        "instructor_id": s.instructor_id,
        "start_time": s.start_time,
        "end_time": s.end_time,
        "max_capacity": s.max_capacity,
    }


# 🟢 Reference data

def list_instructors() -> List[Dict]:
    with get_session() as s:
        rows = s.execute(select(Instructor).order_by(Instructor.full_name)).scalars().all()
        return [{"id": i.id, "full_name": i.full_name} for i in rows]


def list_class_types() -> List[Dict]:
    with get_session() as s:
        rows = s.execute(select(ClassType).order_by(ClassType.name)).scalars().all()
        return [{"id": c.id, "name": c.name} for c in rows]


# 🔵 Class sessions

def get_class_session(session_id: int) -> Optional[Dict]:
    with get_session() as s:
        row = s.get(ClassSession, session_id)
        return _session_dict(row) if row else None


def sessions_between(start: date, end: date) -> List[Dict]:
    """All class sessions starting between start 00:00 and end 23:59:59."""
    lo = datetime.combine(start, time.min)
    hi = datetime.combine(end + timedelta(days=1), time.min)
    with get_session() as s:
        rows = s.execute(
            select(ClassSession)
            .where(ClassSession.start_time >= lo, ClassSession.start_time < hi)
            .order_by(ClassSession.start_time)
        ).scalars().all()
        return [_session_dict(r) for r in rows]


def sessions_on_date(day: date) -> List[Dict]:
    return sessions_between(day, day)


def enrolled_counts(session_ids: Iterable[int]) -> Dict[int, int]:
    """Confirmed bookings per session; sessions with none get 0."""
    ids = list(session_ids)
    if not ids:
        return {}
    with get_session() as s:
        rows = s.execute(
            select(Booking.class_session_id, func.count(Booking.id))
            .where(Booking.class_session_id.in_(ids))
            .group_by(Booking.class_session_id)
        ).all()
    counts = {sid: 0 for sid in ids}
    counts.update({sid: n for sid, n in rows})
    return counts


def create_class_session(
    class_type_id: int,
    instructor_id: int,
    start_time: datetime,
    end_time: datetime,
    max_capacity: int,
) -> Dict:
    with get_session() as s:
        row = ClassSession(
            class_type_id=class_type_id,
            instructor_id=instructor_id,
            start_time=start_time,
            end_time=end_time,
            max_capacity=max_capacity,
        )
        s.add(row)
        s.flush()
        return _session_dict(row)


def update_class_session(session_id: int, **fields) -> Optional[Dict]:
    with get_session() as s:
        row = s.get(ClassSession, session_id)
        if not row:
            return None
        for key, value in fields.items():
            setattr(row, key, value)
        s.flush()
        return _session_dict(row)


def delete_class_session(session_id: int) -> bool:
    with get_session() as s:
        row = s.get(ClassSession, session_id)
        if not row:
            return False
        s.delete(row)
        return True


# 🟠 Bookings

def add_booking(class_session_id: int, full_name: str, email: str | None = None, phone: str | None = None) -> int:
    with get_session() as s:
        row = Booking(class_session_id=class_session_id, full_name=full_name, email=email, phone=phone)
        s.add(row)
        s.flush()
        return row.id
