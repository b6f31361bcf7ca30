# fitlab/logic_models.py
from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date, datetime
from types import MappingProxyType
from typing import Any, Dict, Literal, Mapping, Optional, Tuple, Union

Category = Literal["pilates", "personal-training"]

PILATES: Category = "pilates"
PERSONAL_TRAINING: Category = "personal-training"

DateLike = Union[date, datetime, str]


@dataclass(frozen=True)
class ClassTypeRef:
    name: str
    id: Optional[Any] = None


@dataclass(frozen=True)
class InstructorRef:
    full_name: str
    id: Optional[Any] = None


@dataclass(frozen=True)
class SessionSlot:
    start_time: Union[datetime, str]
    max_capacity: int = 0
    enrolled_count: int = 0
    id: Optional[Any] = None

    @classmethod
    def from_mapping(cls, row: Mapping[str, Any]) -> "SessionSlot":
        return cls(
            start_time=row.get("start_time") or "",
            max_capacity=int(row.get("max_capacity") or 0),
            enrolled_count=int(row.get("enrolled_count") or 0),
            id=row.get("id"),
        )


@dataclass(frozen=True)
class WeeklyWindow:
    """Days an instructor teaches (0=Sunday .. 6=Saturday) and one daily time range."""
    days: Tuple[int, ...]
    start_time: str
    end_time: str


@dataclass(frozen=True)
class SchedulingConfig:
    """
    Roster and availability rules for the studio.
    Frozen: rule functions receive it explicitly and never modify it.
    """
    pilates_roster: Tuple[str, ...]
    pilates_windows: Mapping[str, WeeklyWindow]
    pt_roster: Tuple[str, str]
    pt_max_capacity: int = 3

    def __post_init__(self):
        if len(self.pt_roster) != 2:
            raise ValueError(f"PT roster must have exactly two instructors, got {self.pt_roster!r}")
        # read-only view so the table can't drift at runtime
        object.__setattr__(self, "pilates_windows", MappingProxyType(dict(self.pilates_windows)))

    @classmethod
    def from_settings(cls, schedule: Mapping[str, Mapping[str, Any]], pt_roster, pt_max_capacity: int) -> "SchedulingConfig":
        windows = {
            name: WeeklyWindow(tuple(rule["days"]), rule["start_time"], rule["end_time"])
            for name, rule in schedule.items()
        }
        return cls(
            pilates_roster=tuple(schedule),
            pilates_windows=windows,
            pt_roster=tuple(pt_roster),
            pt_max_capacity=pt_max_capacity,
        )


# --- Results ---

@dataclass(frozen=True)
class AvailabilityResult:
    available: bool
    reason: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"available": self.available}
        if self.reason:
            out["reason"] = self.reason
        return out


@dataclass(frozen=True)
class LimitCheck:
    reached: bool
    reason: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"reached": self.reached}
        if self.reason:
            out["reason"] = self.reason
        return out


@dataclass(frozen=True)
class Suggestion:
    """Soft nudge for the PT rota. Never a reason to reject a booking."""
    instructor: str
    date: date
    matches_choice: Optional[bool] = None
    message: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "instructor": self.instructor,
            "date": self.date.isoformat(),
            "matches_choice": self.matches_choice,
            "message": self.message,
        }


@dataclass
class FormValidation:
    errors: Dict[str, str] = field(default_factory=dict)
    advisories: list = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ok": self.ok,
            "errors": dict(self.errors),
            "advisories": [a.to_dict() for a in self.advisories],
        }
