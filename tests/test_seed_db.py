from fitlab import crud
from fitlab.seed_db import seed_class_types, seed_instructors


def test_seed_is_idempotent(db):
    assert seed_instructors() == 5
    assert seed_class_types() == 5
    assert seed_instructors() == 0
    assert seed_class_types() == 0
    names = [i["full_name"] for i in crud.list_instructors()]
    assert sorted(names) == ["Anna", "Antonio", "Chiara", "Emma", "Vittorio"]


def test_enrolled_counts_default_to_zero(seeded):
    from datetime import datetime

    row = crud.create_class_session(
        class_type_id=seeded["class_types"]["Reformer Flow"],
        instructor_id=seeded["instructors"]["Emma"],
        start_time=datetime(2024, 6, 3, 10, 0),
        end_time=datetime(2024, 6, 3, 11, 0),
        max_capacity=6,
    )
    assert crud.enrolled_counts([row["id"]]) == {row["id"]: 0}
    crud.add_booking(row["id"], "Ada")
    assert crud.enrolled_counts([row["id"]]) == {row["id"]: 1}
    assert crud.enrolled_counts([]) == {}
