# fitlab/formatters.py
#Keeps rule/data results separate from admin-facing wording.

"""
Response Formatter
------------------
Turns week views and form validation results into short text messages
for the admin (notifications and plain-text summaries).
"""

from typing import Dict, List

_FIELD_LABELS = {
    "class_type_id": "Class type",
    "instructor_id": "Instructor",
    "date": "Date",
    "start_time": "Start time",
    "end_time": "End time",
    "max_capacity": "Max capacity",
}


def _hhmm(iso_ts: str) -> str:
    return iso_ts[11:16]


# 🟢 Calendar

def format_session_line(s: Dict) -> str:
    line = (
        f"- {_hhmm(s['start_time'])}–{_hhmm(s['end_time'])} {s['class_type_name']} "
        f"with {s['instructor_name']} ({s['enrolled_count']}/{s['max_capacity']})"
    )
    if s.get("is_full"):
        line += " FULL"
    return line


def format_week_schedule(view: Dict) -> str:
    total = sum(len(d["sessions"]) for d in view["days"])
    header = f"📅 Week {view['week_start']} – {view['week_end']}"
    if not total:
        return header + "\nNo classes scheduled."
    lines = [header]
    for day in view["days"]:
        if not day["sessions"]:
            continue
        lines.append(f"{day['label']} {day['date']}:")
        lines.extend(format_session_line(s) for s in day["sessions"])
    return "\n".join(lines)


# 🔵 Validation

def format_validation_errors(errors: Dict[str, str]) -> str:
    if not errors:
        return "✅ Class details are valid."
    lines = [f"- {_FIELD_LABELS.get(k, k)}: {v}" for k, v in errors.items()]
    return "⚠️ Please fix the following:\n" + "\n".join(lines)


def format_advisories(advisories: List) -> str:
    return "\n".join(f"💡 {a.message}" for a in advisories)


# 🟠 Notices

def format_session_saved(action: str, session: Dict) -> str:
    return f"✅ Class {action}: {session['class_type_name']} with {session['instructor_name']} on {session['start_time'][:16].replace('T', ' ')}"
