import pytest

from fitlab.class_form import ClassForm, apply_field_change, validate_class_form
from fitlab.logic_models import ClassTypeRef, InstructorRef

CLASS_TYPES = [
    {"id": 1, "name": "Reformer Flow"},
    {"id": 2, "name": "Personal Training 1:1"},
]
INSTRUCTORS = [
    {"id": 10, "full_name": "Chiara Rossi"},
    {"id": 11, "full_name": "Emma"},
    {"id": 20, "full_name": "Antonio Esposito"},
    {"id": 21, "full_name": "Vittorio"},
]


def _form(**overrides):
    data = {
        "class_type_id": "1",
        "instructor_id": "11",
        "date": "2024-06-03",
        "start_time": "10:00",
        "end_time": "11:00",
        "max_capacity": 6,
    }
    data.update(overrides)
    return ClassForm.from_mapping(data)


def _pt_form(**overrides):
    base = {"class_type_id": "2", "instructor_id": "20", "date": "2024-06-04", "start_time": "15:00",
            "end_time": "16:00", "max_capacity": 3}
    base.update(overrides)
    return _form(**base)


def test_valid_pilates_form():
    result = validate_class_form(_form(), CLASS_TYPES, INSTRUCTORS)
    assert result.ok
    assert result.advisories == []


def test_required_fields():
    result = validate_class_form(ClassForm(max_capacity=0), CLASS_TYPES, INSTRUCTORS)
    assert set(result.errors) == {
        "class_type_id", "instructor_id", "date", "start_time", "end_time", "max_capacity",
    }


def test_malformed_date_and_time():
    result = validate_class_form(_form(date="03/06/2024", start_time="9:00"), CLASS_TYPES, INSTRUCTORS)
    assert "YYYY-MM-DD" in result.errors["date"]
    assert "HH:MM" in result.errors["start_time"]


def test_end_must_follow_start():
    result = validate_class_form(_form(start_time="12:00", end_time="12:00"), CLASS_TYPES, INSTRUCTORS)
    assert result.errors["end_time"] == "End time must be after the start time"


def test_unavailable_pilates_instructor_flags_instructor_field():
    result = validate_class_form(_form(date="2024-06-08"), CLASS_TYPES, INSTRUCTORS)
    assert "Saturday" in result.errors["instructor_id"]


def test_unknown_ids():
    result = validate_class_form(_form(class_type_id="99", instructor_id="98"), CLASS_TYPES, INSTRUCTORS)
    assert result.errors["class_type_id"] == "Unknown class type"
    assert result.errors["instructor_id"] == "Unknown instructor"


def test_pt_capacity_must_be_three():
    result = validate_class_form(_pt_form(max_capacity=5), CLASS_TYPES, INSTRUCTORS)
    assert "3" in result.errors["max_capacity"]


def test_pt_with_pilates_instructor_is_rejected():
    result = validate_class_form(_pt_form(instructor_id="11"), CLASS_TYPES, INSTRUCTORS)
    assert "not a Personal Training instructor" in result.errors["instructor_id"]


def test_pt_slot_full_blocks_start_time():
    existing = [{"id": 5, "class_type_id": 2, "start_time": "2024-06-04T15:00:00", "max_capacity": 3,
                 "enrolled_count": 3}]
    result = validate_class_form(_pt_form(), CLASS_TYPES, INSTRUCTORS, existing)
    assert "limit of 3" in result.errors["start_time"]


def test_pt_slot_check_skips_session_being_edited():
    existing = [{"id": 5, "class_type_id": 2, "start_time": "2024-06-04T15:00:00", "max_capacity": 3,
                 "enrolled_count": 3}]
    result = validate_class_form(_pt_form(), CLASS_TYPES, INSTRUCTORS, existing, session_id=5)
    assert result.ok


def test_pilates_class_at_same_hour_does_not_fill_pt_slot():
    existing = [{"id": 6, "class_type_id": 1, "start_time": "2024-06-04T15:00:00", "max_capacity": 8,
                 "enrolled_count": 8}]
    result = validate_class_form(_pt_form(), CLASS_TYPES, INSTRUCTORS, existing)
    assert result.ok


def test_off_rota_pt_instructor_is_an_advisory_only():
    # Monday → rota says Vittorio
    result = validate_class_form(_pt_form(date="2024-06-03"), CLASS_TYPES, INSTRUCTORS)
    assert result.ok
    assert len(result.advisories) == 1
    assert result.advisories[0].instructor == "Vittorio"
    assert result.to_dict()["advisories"][0]["matches_choice"] is False


def test_on_rota_pt_instructor_has_no_advisory():
    result = validate_class_form(_pt_form(), CLASS_TYPES, INSTRUCTORS)
    assert result.ok and result.advisories == []


def test_from_mapping_bad_capacity_becomes_zero():
    assert ClassForm.from_mapping({"max_capacity": "lots"}).max_capacity == 0


def test_from_session_splits_timestamps():
    form = ClassForm.from_session({
        "class_type_id": 2, "instructor_id": 20, "max_capacity": 3,
        "start_time": "2024-06-04T15:00:00", "end_time": "2024-06-04T16:00:00",
    })
    assert (form.class_type_id, form.date, form.start_time, form.end_time) == ("2", "2024-06-04", "15:00", "16:00")


# ── field changes ───────────────────────────────────────────

def test_date_change_preselects_rota_instructor_for_pt():
    form = ClassForm(class_type_id="2", instructor_id="20")
    updated = apply_field_change(form, "date", "2024-06-03", CLASS_TYPES, INSTRUCTORS)
    assert updated.date == "2024-06-03"
    assert updated.instructor_id == "21"


def test_date_change_leaves_pilates_instructor_alone():
    form = ClassForm(class_type_id="1", instructor_id="11")
    updated = apply_field_change(form, "date", "2024-06-03", CLASS_TYPES, INSTRUCTORS)
    assert updated.instructor_id == "11"


def test_choosing_pt_type_forces_capacity():
    form = ClassForm(max_capacity=8)
    assert apply_field_change(form, "class_type_id", "2", CLASS_TYPES, INSTRUCTORS).max_capacity == 3
    assert apply_field_change(form, "class_type_id", "1", CLASS_TYPES, INSTRUCTORS).max_capacity == 8


def test_field_change_does_not_mutate_original():
    form = ClassForm()
    apply_field_change(form, "start_time", "10:00", CLASS_TYPES, INSTRUCTORS)
    assert form.start_time == ""


@pytest.mark.parametrize("value,expected", [("4", 4), ("", 0), (None, 0)])
def test_capacity_field_change(value, expected):
    assert apply_field_change(ClassForm(), "max_capacity", value, CLASS_TYPES, INSTRUCTORS).max_capacity == expected


def test_unknown_field_change_leaves_form_unchanged():
    form = ClassForm(date="2024-06-03")
    assert apply_field_change(form, "colour", "red", CLASS_TYPES, INSTRUCTORS) is form


def test_validate_accepts_ref_objects():
    class_types = [ClassTypeRef("Personal Training 1:1", id=2)]
    instructors = [InstructorRef("Antonio Esposito", id=20), InstructorRef("Vittorio", id=21)]
    result = validate_class_form(_pt_form(date="2024-06-03"), class_types, instructors)
    assert result.ok
    assert result.advisories[0].instructor == "Vittorio"

    updated = apply_field_change(ClassForm(class_type_id="2"), "date", "2024-06-03", class_types, instructors)
    assert updated.instructor_id == "21"
