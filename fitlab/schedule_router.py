"""
schedule_router.py
────────────────────────────────────────────────────────────
Admin class calendar endpoints for Fit Lab.

 • Week view for the admin calendar (category colours, enrolment)
 • Create / edit / delete classes, validated against the studio rules
 • Availability check and PT rota suggestion for the class form

Validation runs on a snapshot of the day's classes read just before the
write. Two admins saving at the same moment can both pass the PT limit
check; closing that needs a database-side constraint.
────────────────────────────────────────────────────────────
"""

import logging
from datetime import date
from flask import Blueprint, request, jsonify

from . import crud
from .admin_calendar import build_week_view, enrich_sessions, today_local, week_bounds
from .class_form import ClassForm, is_valid_date, is_valid_hhmm, validate_class_form
from .formatters import (
    format_advisories,
    format_session_saved,
    format_validation_errors,
    format_week_schedule,
)
from .logic_models import PERSONAL_TRAINING, PILATES
from .notify import notify_admin
from .scheduling_rules import check_availability, classify, suggest_pt_instructor

bp = Blueprint("schedule_bp", __name__)
log = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────
def _parse_date_arg(raw: str | None) -> date | None:
    if not raw:
        return None
    return date.fromisoformat(raw.strip())


def _day_snapshot(day: date) -> list[dict]:
    """Classes on `day` with their current enrolment."""
    sessions = crud.sessions_on_date(day)
    counts = crud.enrolled_counts(s["id"] for s in sessions)
    return [{**s, "enrolled_count": counts.get(s["id"], 0)} for s in sessions]


def _validate(form: ClassForm, session_id=None):
    class_types = crud.list_class_types()
    instructors = crud.list_instructors()
    existing = []
    if form.date:
        try:
            existing = _day_snapshot(date.fromisoformat(form.date))
        except ValueError:
            pass  # bad date is reported by validate_class_form
    result = validate_class_form(form, class_types, instructors, existing, session_id)
    return result, class_types, instructors


def _invalid(result):
    body = result.to_dict()
    body["message"] = format_validation_errors(result.errors)
    return jsonify(body), 422


def _saved(action: str, row: dict, result, class_types, instructors, status: int):
    enriched = enrich_sessions([row], class_types, instructors)[0]
    text = format_session_saved(action, enriched)
    log.info(f"[SCHEDULE] {text}")
    notify_admin(f"class_{action}", text, session_id=row["id"])
    if result.advisories:
        notify_admin("pt_rota_advisory", format_advisories(result.advisories), session_id=row["id"])
    return jsonify({
        "ok": True,
        "message": f"Class {action}",
        "session": enriched,
        "advisories": [a.to_dict() for a in result.advisories],
    }), status


# ─────────────────────────────────────────────────────────────
# 1️⃣ Week view
# ─────────────────────────────────────────────────────────────
@bp.route("/week", methods=["GET"])
def week():
    """Admin calendar for the week containing ?date= (default: today)."""
    try:
        day = _parse_date_arg(request.args.get("date")) or today_local()
    except ValueError:
        return jsonify({"ok": False, "error": "date must be YYYY-MM-DD"}), 400
    try:
        sessions = crud.sessions_between(*week_bounds(day))
        counts = crud.enrolled_counts(s["id"] for s in sessions)
        view = build_week_view(day, sessions, crud.list_class_types(), crud.list_instructors(), counts)
        return jsonify({"ok": True, "week": view, "summary": format_week_schedule(view)}), 200
    except Exception as e:
        log.exception("week view error")
        return jsonify({"ok": False, "error": str(e)}), 500


# ─────────────────────────────────────────────────────────────
# 2️⃣ Form helpers: availability + PT rota
# ─────────────────────────────────────────────────────────────
@bp.route("/availability", methods=["POST"])
def availability():
    data = request.get_json(silent=True) or {}
    name = (data.get("instructor_name") or "").strip()
    category = (data.get("category") or "").strip() or classify(data.get("class_type_name"))
    on_date = (data.get("date") or "").strip()
    start_time = (data.get("start_time") or "").strip()

    if category not in (PILATES, PERSONAL_TRAINING):
        return jsonify({"ok": False, "error": f"Unknown category '{category}'"}), 400
    if not name or not is_valid_date(on_date) or not is_valid_hhmm(start_time):
        return jsonify({"ok": False, "error": "instructor_name, date (YYYY-MM-DD) and start_time (HH:MM) are required"}), 400

    result = check_availability(name, on_date, start_time, category)
    return jsonify({"ok": True, "category": category, **result.to_dict()}), 200


@bp.route("/suggest-instructor", methods=["GET"])
def suggest_instructor():
    """PT rota suggestion for ?date=. Advice only."""
    try:
        day = _parse_date_arg(request.args.get("date")) or today_local()
    except ValueError:
        return jsonify({"ok": False, "error": "date must be YYYY-MM-DD"}), 400
    suggestion = suggest_pt_instructor(day, request.args.get("instructor") or None)
    return jsonify({"ok": True, "suggestion": suggestion.to_dict()}), 200


@bp.route("/validate", methods=["POST"])
def validate():
    """Dry run of the class form (no write)."""
    try:
        data = request.get_json(silent=True) or {}
        result, _, _ = _validate(ClassForm.from_mapping(data), data.get("session_id"))
        body = result.to_dict()
        body["message"] = format_validation_errors(result.errors)
        return jsonify(body), 200
    except Exception as e:
        log.exception("validate error")
        return jsonify({"ok": False, "error": str(e)}), 500


# ─────────────────────────────────────────────────────────────
# 3️⃣ Class CRUD
# ─────────────────────────────────────────────────────────────
@bp.route("/sessions", methods=["POST"])
def create_session():
    try:
        form = ClassForm.from_mapping(request.get_json(silent=True) or {})
        result, class_types, instructors = _validate(form)
        if not result.ok:
            log.info(f"[SCHEDULE] Create rejected: {result.errors}")
            return _invalid(result)

        row = crud.create_class_session(
            class_type_id=int(form.class_type_id),
            instructor_id=int(form.instructor_id),
            start_time=form.start_timestamp(),
            end_time=form.end_timestamp(),
            max_capacity=form.max_capacity,
        )
        return _saved("created", row, result, class_types, instructors, 201)
    except Exception as e:
        log.exception("create_session error")
        return jsonify({"ok": False, "error": str(e)}), 500


@bp.route("/sessions/<int:session_id>", methods=["PUT"])
def update_session(session_id: int):
    try:
        current = crud.get_class_session(session_id)
        if not current:
            return jsonify({"ok": False, "error": f"Class {session_id} not found"}), 404

        data = request.get_json(silent=True) or {}
        form = ClassForm.from_mapping({**ClassForm.from_session(current).to_dict(), **data})
        result, class_types, instructors = _validate(form, session_id)
        if not result.ok:
            log.info(f"[SCHEDULE] Update of {session_id} rejected: {result.errors}")
            return _invalid(result)

        row = crud.update_class_session(
            session_id,
            class_type_id=int(form.class_type_id),
            instructor_id=int(form.instructor_id),
            start_time=form.start_timestamp(),
            end_time=form.end_timestamp(),
            max_capacity=form.max_capacity,
        )
        return _saved("updated", row, result, class_types, instructors, 200)
    except Exception as e:
        log.exception("update_session error")
        return jsonify({"ok": False, "error": str(e)}), 500


@bp.route("/sessions/<int:session_id>", methods=["DELETE"])
def delete_session(session_id: int):
    try:
        if not crud.delete_class_session(session_id):
            return jsonify({"ok": False, "error": f"Class {session_id} not found"}), 404
        log.info(f"[SCHEDULE] Class {session_id} deleted")
        notify_admin("class_deleted", f"🗑 Class {session_id} deleted", session_id=session_id)
        return jsonify({"ok": True, "message": "Class deleted"}), 200
    except Exception as e:
        log.exception("delete_session error")
        return jsonify({"ok": False, "error": str(e)}), 500


# ─────────────────────────────────────────────────────────────
# 4️⃣ Health
# ─────────────────────────────────────────────────────────────
@bp.route("/health", methods=["GET"])
def health():
    return jsonify({
        "status": "ok",
        "service": "Schedule Router",
        "endpoints": [
            "/schedule/week",
            "/schedule/availability",
            "/schedule/suggest-instructor",
            "/schedule/validate",
            "/schedule/sessions",
            "/schedule/health",
        ],
    }), 200
