# fitlab/class_form.py
"""
class_form.py
──────────────
Validation for the admin "add / edit class" form.

Runs the scheduling rules against the submitted fields and returns
field-level errors (blocking) plus rota advisories (non-blocking).
"""

from __future__ import annotations
import logging
import re
from dataclasses import dataclass, fields, replace
from datetime import datetime
from typing import Any, Iterable, List, Mapping, Optional

from .logic_models import PERSONAL_TRAINING, FormValidation, SchedulingConfig
from .scheduling_rules import (
    STUDIO_CONFIG,
    check_availability,
    check_pt_limit_reached,
    classify,
    hhmm_to_minutes,
    resolve_alternating_instructor,
    suggest_pt_instructor,
    to_date,
)
from .settings import DEFAULT_MAX_CAPACITY

log = logging.getLogger(__name__)

_HHMM = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")
_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _attr(obj: Any, name: str, default: Any = None) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(name, default)
    return getattr(obj, name, default)


def _find_by_id(items: Iterable[Any], item_id: str) -> Optional[Any]:
    if not item_id:
        return None
    for item in items:
        if str(_attr(item, "id", "")) == item_id:
            return item
    return None


def is_valid_hhmm(value: str) -> bool:
    return bool(_HHMM.match(value or ""))


def is_valid_date(value: str) -> bool:
    if not _ISO_DATE.match(value or ""):
        return False
    try:
        to_date(value)
        return True
    except ValueError:
        return False


@dataclass
class ClassForm:
    class_type_id: str = ""
    instructor_id: str = ""
    date: str = ""
    start_time: str = ""
    end_time: str = ""
    max_capacity: int = DEFAULT_MAX_CAPACITY

    @staticmethod
    def _capacity(value: Any) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return 0

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ClassForm":
        def s(key: str) -> str:
            v = data.get(key)
            return "" if v is None else str(v).strip()

        return cls(
            class_type_id=s("class_type_id"),
            instructor_id=s("instructor_id"),
            date=s("date"),
            start_time=s("start_time"),
            end_time=s("end_time"),
            max_capacity=cls._capacity(data.get("max_capacity", DEFAULT_MAX_CAPACITY)),
        )

    @classmethod
    def from_session(cls, session: Mapping[str, Any]) -> "ClassForm":
        """Edit mode: split the stored start/end timestamps back into date + HH:MM."""
        start = session["start_time"]
        end = session["end_time"]
        if not isinstance(start, datetime):
            start = datetime.fromisoformat(str(start))
        if not isinstance(end, datetime):
            end = datetime.fromisoformat(str(end))
        return cls(
            class_type_id=str(session.get("class_type_id") or ""),
            instructor_id=str(session.get("instructor_id") or ""),
            date=start.strftime("%Y-%m-%d"),
            start_time=start.strftime("%H:%M"),
            end_time=end.strftime("%H:%M"),
            max_capacity=cls._capacity(session.get("max_capacity")),
        )

    def start_timestamp(self) -> datetime:
        return datetime.fromisoformat(f"{self.date}T{self.start_time}:00")

    def end_timestamp(self) -> datetime:
        return datetime.fromisoformat(f"{self.date}T{self.end_time}:00")

    def to_dict(self) -> dict:
        return {
            "class_type_id": self.class_type_id,
            "instructor_id": self.instructor_id,
            "date": self.date,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "max_capacity": self.max_capacity,
        }


def _same_category_sessions(existing_sessions: Iterable[Any], class_types: List[Any]) -> List[Any]:
    """
    Keep sessions that are Personal Training, or whose class type is unknown.
    A Pilates class at the same hour doesn't take PT places.
    """
    out = []
    for sess in existing_sessions:
        ct_id = _attr(sess, "class_type_id")
        if ct_id is None:
            out.append(sess)
            continue
        ct = _find_by_id(class_types, str(ct_id))
        if ct is None or classify(ct) == PERSONAL_TRAINING:
            out.append(sess)
    return out


def validate_class_form(
    form: ClassForm,
    class_types: Iterable[Any],
    instructors: Iterable[Any],
    existing_sessions: Iterable[Any] = (),
    session_id: Optional[Any] = None,
    *,
    config: SchedulingConfig = STUDIO_CONFIG,
) -> FormValidation:
    """
    Validate a class form. `session_id` is the class being edited (None when creating),
    so it doesn't count against its own slot. Class types and instructors may be
    row dicts or ClassTypeRef / InstructorRef values.
    """
    class_types = list(class_types)
    instructors = list(instructors)
    result = FormValidation()
    errors = result.errors

    if not form.class_type_id:
        errors["class_type_id"] = "Select a class type"
    if not form.instructor_id:
        errors["instructor_id"] = "Select an instructor"
    if not form.date:
        errors["date"] = "Select a date"
    elif not is_valid_date(form.date):
        errors["date"] = "Enter the date as YYYY-MM-DD"
    if not form.start_time:
        errors["start_time"] = "Enter a start time"
    elif not is_valid_hhmm(form.start_time):
        errors["start_time"] = "Enter the start time as HH:MM"
    if not form.end_time:
        errors["end_time"] = "Enter an end time"
    elif not is_valid_hhmm(form.end_time):
        errors["end_time"] = "Enter the end time as HH:MM"
    if form.max_capacity < 1:
        errors["max_capacity"] = "Max capacity must be at least 1"

    times_ok = "start_time" not in errors and "end_time" not in errors
    if times_ok and hhmm_to_minutes(form.start_time) >= hhmm_to_minutes(form.end_time):
        errors["end_time"] = "End time must be after the start time"

    if not (form.class_type_id and form.instructor_id and is_valid_date(form.date) and is_valid_hhmm(form.start_time)):
        return result

    class_type = _find_by_id(class_types, form.class_type_id)
    instructor = _find_by_id(instructors, form.instructor_id)
    if class_type is None:
        errors["class_type_id"] = "Unknown class type"
    if instructor is None:
        errors["instructor_id"] = "Unknown instructor"
    if class_type is None or instructor is None:
        return result

    category = classify(class_type)
    full_name = _attr(instructor, "full_name", "") or ""

    availability = check_availability(full_name, form.date, form.start_time, category, config=config)
    if not availability.available:
        errors["instructor_id"] = availability.reason or "Instructor not available"

    if category == PERSONAL_TRAINING:
        if form.max_capacity != config.pt_max_capacity:
            errors["max_capacity"] = (
                f"Personal Training has a hard limit of {config.pt_max_capacity} people"
            )

        limit = check_pt_limit_reached(
            form.date,
            form.start_time,
            _same_category_sessions(existing_sessions, class_types),
            session_id,
            config=config,
        )
        if limit.reached:
            errors["start_time"] = limit.reason or "PT limit reached"

        suggestion = suggest_pt_instructor(form.date, full_name, config=config)
        if suggestion.matches_choice is False:
            log.warning(f"[FORM] {suggestion.message} (chosen: {full_name})")
            result.advisories.append(suggestion)

    return result


def apply_field_change(
    form: ClassForm,
    field_name: str,
    value: Any,
    class_types: Iterable[Any],
    instructors: Iterable[Any],
    *,
    config: SchedulingConfig = STUDIO_CONFIG,
) -> ClassForm:
    """
    Return the form after one field edit, with the PT conveniences applied:
    picking a date for a PT class pre-selects the rota instructor, and picking
    a PT class type forces capacity to the PT limit.
    """
    if field_name not in {f.name for f in fields(ClassForm)}:
        log.warning(f"[FORM] Ignoring change to unknown field {field_name!r}")
        return form

    if field_name == "max_capacity":
        updated = replace(form, max_capacity=ClassForm._capacity(value))
    else:
        updated = replace(form, **{field_name: "" if value is None else str(value).strip()})

    class_types = list(class_types)

    if field_name == "date" and updated.date and is_valid_date(updated.date):
        ct = _find_by_id(class_types, form.class_type_id)
        if ct is not None and classify(ct) == PERSONAL_TRAINING:
            suggested = resolve_alternating_instructor(updated.date, config=config).lower()
            for inst in instructors:
                if suggested in (_attr(inst, "full_name", "") or "").lower():
                    updated = replace(updated, instructor_id=str(_attr(inst, "id")))
                    break

    if field_name == "class_type_id":
        ct = _find_by_id(class_types, updated.class_type_id)
        if ct is not None and classify(ct) == PERSONAL_TRAINING:
            updated = replace(updated, max_capacity=config.pt_max_capacity)

    return updated
