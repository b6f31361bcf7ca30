# fitlab/scheduling_rules.py
"""
Scheduling Rules
----------------
Class category, instructor availability, the Personal Training rota and
the PT slot ceiling. Everything here is a pure function of its arguments
plus an immutable SchedulingConfig; nothing fetches data or raises for a
rule violation. Violations come back as values the caller shows to the
admin.

Weekday numbers follow the studio table: 0=Sunday .. 6=Saturday.
"""

from __future__ import annotations
import logging
from datetime import date, datetime
from typing import Any, Iterable, Mapping, Optional, Tuple, Union

from . import settings
from .logic_models import (
    PERSONAL_TRAINING,
    PILATES,
    AvailabilityResult,
    Category,
    ClassTypeRef,
    DateLike,
    LimitCheck,
    SchedulingConfig,
    SessionSlot,
    Suggestion,
)

log = logging.getLogger(__name__)

STUDIO_CONFIG = SchedulingConfig.from_settings(
    settings.PILATES_SCHEDULE,
    settings.PT_INSTRUCTORS,
    settings.PT_MAX_CAPACITY,
)

# 0=Sunday, matches the roster table
DAY_NAMES = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)

PT_KEYWORDS = ("personal", "training", "pt")

CARD_COLORS = {
    PILATES: {"bg": "bg-red-900/40", "border": "border-red-600", "text": "text-zinc-100"},
    PERSONAL_TRAINING: {"bg": "bg-zinc-800/40", "border": "border-zinc-500", "text": "text-zinc-100"},
}


# ── Helpers ──────────────────────────────────────────────────────────────────
def to_date(value: DateLike) -> date:
    """Accepts a date, a datetime or an ISO string ('2024-06-04' or '2024-06-04T15:00:00')."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value).strip()[:10])


def studio_weekday(value: DateLike) -> int:
    """Weekday with Sunday=0 (Python's own weekday() has Monday=0)."""
    return (to_date(value).weekday() + 1) % 7


def hhmm_to_minutes(hhmm: str) -> int:
    """'09:30' -> 570. Extra ':SS' is ignored."""
    parts = str(hhmm).strip().split(":")
    return int(parts[0]) * 60 + int(parts[1])


def _parse_timestamp(value: str) -> datetime:
    v = value.strip()
    if v.endswith("Z"):
        v = v[:-1] + "+00:00"
    return datetime.fromisoformat(v)


def _slot_key(start: Union[datetime, str], on_date: date) -> Tuple[date, int]:
    """
    Reduce a session start to (date, minutes) at HH:MM granularity.
    Timestamps keep their wall-clock date/time; a bare 'HH:MM' is taken to be on `on_date`.
    """
    if isinstance(start, datetime):
        return start.date(), start.hour * 60 + start.minute
    text = str(start).strip()
    if "T" in text or " " in text or len(text) >= 10:
        ts = _parse_timestamp(text)
        return ts.date(), ts.hour * 60 + ts.minute
    return on_date, hhmm_to_minutes(text)


def _match_roster(name_lower: str, roster: Iterable[str]) -> Optional[str]:
    for entry in roster:
        if entry.lower() in name_lower:
            return entry
    return None


def _as_slot(session: Union[SessionSlot, Mapping[str, Any]]) -> SessionSlot:
    if isinstance(session, SessionSlot):
        return session
    return SessionSlot.from_mapping(session)


# ── Category ────────────────────────────────────────────────────────────────
def classify(class_type: Union[ClassTypeRef, Mapping[str, Any], str, None]) -> Category:
    """
    Map a class type to its category by keyword. No class type → pilates.
    Plain substring match, so 'pt' inside another word also counts.
    """
    if not class_type:
        return PILATES
    if isinstance(class_type, str):
        name = class_type
    elif isinstance(class_type, Mapping):
        name = class_type.get("name") or ""
    else:
        name = class_type.name or ""
    name = name.lower()
    if any(k in name for k in PT_KEYWORDS):
        return PERSONAL_TRAINING
    return PILATES


def card_color_scheme(category: Category) -> dict:
    return dict(CARD_COLORS.get(category, CARD_COLORS[PERSONAL_TRAINING]))


# ── Availability ────────────────────────────────────────────────────────────
def check_availability(
    instructor_name: str,
    on_date: DateLike,
    start_time: str,
    category: Category,
    *,
    config: SchedulingConfig = STUDIO_CONFIG,
) -> AvailabilityResult:
    """
    Can this instructor teach this category at this date/time?
    Roster membership is a case-insensitive substring test, so 'Chiara Rossi' matches 'Chiara'.
    """
    name = instructor_name or ""
    normalized = name.lower()

    if category == PILATES:
        matched = _match_roster(normalized, config.pilates_roster)
        if not matched:
            return AvailabilityResult(
                False,
                f"{name} is not a Pilates instructor. "
                f"Pilates instructors: {', '.join(config.pilates_roster)}",
            )

        window = config.pilates_windows.get(matched)
        if window is None:
            log.error(f"[RULES] Pilates instructor {matched!r} has no weekly window configured")
            return AvailabilityResult(False, f"No schedule configured for {name}")

        try:
            weekday = studio_weekday(on_date)
            start = hhmm_to_minutes(start_time)
        except (TypeError, ValueError, IndexError):
            return AvailabilityResult(
                False,
                f"Invalid date or start time: {on_date!r} {start_time!r} (expected YYYY-MM-DD and HH:MM)",
            )

        if weekday not in window.days:
            allowed = ", ".join(DAY_NAMES[d] for d in window.days)
            return AvailabilityResult(
                False,
                f"{name} is not available on {DAY_NAMES[weekday]}. Available days: {allowed}",
            )

        if start < hhmm_to_minutes(window.start_time) or start > hhmm_to_minutes(window.end_time):
            return AvailabilityResult(
                False,
                f"{name} is only available from {window.start_time} to {window.end_time}",
            )

        return AvailabilityResult(True)

    # Personal Training: the rota and the slot ceiling are checked elsewhere
    if not _match_roster(normalized, config.pt_roster):
        return AvailabilityResult(
            False,
            f"{name} is not a Personal Training instructor. "
            f"PT instructors: {', '.join(config.pt_roster)}",
        )
    return AvailabilityResult(True)


# ── PT rota ─────────────────────────────────────────────────────────────────
def resolve_alternating_instructor(on_date: DateLike, *, config: SchedulingConfig = STUDIO_CONFIG) -> str:
    """Even weekday (Sun, Tue, Thu, Sat) → first PT instructor, odd (Mon, Wed, Fri) → second."""
    first, second = config.pt_roster
    return first if studio_weekday(on_date) % 2 == 0 else second


def suggest_pt_instructor(
    on_date: DateLike,
    chosen_name: Optional[str] = None,
    *,
    config: SchedulingConfig = STUDIO_CONFIG,
) -> Suggestion:
    """
    Rota suggestion for a PT date. When `chosen_name` is given, report whether it
    follows the rota. A different choice is allowed: this is advice, not a rule.
    """
    d = to_date(on_date)
    suggested = resolve_alternating_instructor(d, config=config)
    if chosen_name is None:
        return Suggestion(suggested, d, None, f"Suggested PT instructor for {d.isoformat()}: {suggested}")

    matches = suggested.lower() in chosen_name.lower()
    if matches:
        message = f"{chosen_name} follows the PT rota for {d.isoformat()}"
    else:
        message = f"Suggestion: for {d.isoformat()} the alternating PT instructor is {suggested}"
    return Suggestion(suggested, d, matches, message)


# ── PT slot ceiling ─────────────────────────────────────────────────────────
def check_pt_limit_reached(
    on_date: DateLike,
    start_time: str,
    existing_sessions: Iterable[Union[SessionSlot, Mapping[str, Any]]],
    exclude_session_id: Optional[Any] = None,
    *,
    config: SchedulingConfig = STUDIO_CONFIG,
) -> LimitCheck:
    """
    Sum enrolments of every session starting at the same date + HH:MM.
    The ceiling belongs to the slot, not to a single session, so parallel
    sessions at that time add up. The session being edited is left out.
    """
    try:
        target = (to_date(on_date), hhmm_to_minutes(start_time))
    except (TypeError, ValueError, IndexError):
        return LimitCheck(
            False,
            f"Invalid date or start time: {on_date!r} {start_time!r} (expected YYYY-MM-DD and HH:MM)",
        )

    total = 0
    for raw in existing_sessions:
        try:
            slot = _as_slot(raw)
        except (TypeError, ValueError):
            log.warning(f"[RULES] Skipping unreadable session {raw!r}")
            continue
        if exclude_session_id is not None and slot.id is not None and str(slot.id) == str(exclude_session_id):
            continue
        try:
            key = _slot_key(slot.start_time, target[0])
        except (TypeError, ValueError, IndexError):
            log.warning(f"[RULES] Skipping session {slot.id!r} with unreadable start_time={slot.start_time!r}")
            continue
        if key == target:
            total += slot.enrolled_count or 0

    if total >= config.pt_max_capacity:
        return LimitCheck(
            True,
            f"Personal Training limit of {config.pt_max_capacity} people already reached at this time",
        )
    return LimitCheck(False)
