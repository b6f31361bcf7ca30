# fitlab/admin_calendar.py
"""
Admin weekly calendar: week bounds, hourly grid, and the per-day list of
classes with names, category colours and enrolment filled in.
"""

from __future__ import annotations
import logging
from datetime import date, datetime, timedelta
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple
from zoneinfo import ZoneInfo

from .config import CALENDAR_END_HOUR, CALENDAR_START_HOUR, TZ_NAME
from .scheduling_rules import DAY_NAMES, card_color_scheme, classify, studio_weekday, to_date

log = logging.getLogger(__name__)


def today_local() -> date:
    return datetime.now(ZoneInfo(TZ_NAME)).date()


def week_bounds(day: Optional[date] = None) -> Tuple[date, date]:
    """Monday..Sunday of the week containing `day`."""
    d = day or today_local()
    monday = d - timedelta(days=d.weekday())
    return monday, monday + timedelta(days=6)


def week_days(day: Optional[date] = None) -> List[date]:
    monday, _ = week_bounds(day)
    return [monday + timedelta(days=i) for i in range(7)]


def time_slots(start_hour: int = CALENDAR_START_HOUR, end_hour: int = CALENDAR_END_HOUR) -> List[str]:
    return [f"{h:02d}:00" for h in range(start_hour, end_hour + 1)]


TIME_SLOTS = time_slots()


def _as_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))


def card_layout(start: Any, end: Any, grid_start_hour: int = CALENDAR_START_HOUR) -> Dict[str, str]:
    """Card position on the day column: 1px per minute, grid start hour = 0px."""
    s = _as_datetime(start)
    e = _as_datetime(end)
    start_min = s.hour * 60 + s.minute
    end_min = e.hour * 60 + e.minute
    return {
        "top": f"{start_min - grid_start_hour * 60}px",
        "height": f"{end_min - start_min}px",
    }


def enrich_sessions(
    sessions: Iterable[Mapping[str, Any]],
    class_types: Iterable[Mapping[str, Any]],
    instructors: Iterable[Mapping[str, Any]],
    enrolled_counts: Optional[Mapping[Any, int]] = None,
) -> List[Dict[str, Any]]:
    ct_by_id = {str(ct["id"]): ct for ct in class_types}
    inst_by_id = {str(i["id"]): i for i in instructors}
    counts = enrolled_counts or {}

    out = []
    for sess in sessions:
        ct = ct_by_id.get(str(sess.get("class_type_id")))
        inst = inst_by_id.get(str(sess.get("instructor_id")))
        category = classify(ct)
        enrolled = int(counts.get(sess.get("id"), sess.get("enrolled_count") or 0))
        start = _as_datetime(sess["start_time"])
        end = _as_datetime(sess["end_time"])
        out.append({
            **sess,
            "start_time": start.isoformat(),
            "end_time": end.isoformat(),
            "class_type_name": ct["name"] if ct else "N/A",
            "instructor_name": inst["full_name"] if inst else "N/A",
            "category": category,
            "colors": card_color_scheme(category),
            "enrolled_count": enrolled,
            "is_full": enrolled >= int(sess.get("max_capacity") or 0),
            "layout": card_layout(start, end),
        })
    return out


def sessions_for_day(sessions: Iterable[Mapping[str, Any]], day: date) -> List[Mapping[str, Any]]:
    return [s for s in sessions if _as_datetime(s["start_time"]).date() == day]


def build_week_view(
    day: Optional[date],
    sessions: Iterable[Mapping[str, Any]],
    class_types: Iterable[Mapping[str, Any]],
    instructors: Iterable[Mapping[str, Any]],
    enrolled_counts: Optional[Mapping[Any, int]] = None,
) -> Dict[str, Any]:
    monday, sunday = week_bounds(to_date(day) if day else None)
    enriched = enrich_sessions(sessions, class_types, instructors, enrolled_counts)
    enriched.sort(key=lambda s: s["start_time"])

    days = []
    for d in week_days(monday):
        day_sessions = sessions_for_day(enriched, d)
        days.append({
            "date": d.isoformat(),
            "label": DAY_NAMES[studio_weekday(d)],
            "sessions": day_sessions,
        })

    log.info(f"[CALENDAR] Week {monday} – {sunday}: {len(enriched)} sessions")
    return {
        "week_start": monday.isoformat(),
        "week_end": sunday.isoformat(),
        "time_slots": TIME_SLOTS,
        "days": days,
    }
