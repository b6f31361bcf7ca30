# fitlab/seed_db.py
"""
Seed convenience: inserts the studio roster and the class types.
Usage:
  python -m fitlab.seed_db
"""
import logging
from sqlalchemy import select

from .db import get_session, init_db
from .models import ClassType, Instructor
from .settings import CLASS_TYPES, PILATES_INSTRUCTORS, PT_INSTRUCTORS

log = logging.getLogger(__name__)


def seed_instructors() -> int:
    """Insert roster instructors that are missing. Returns how many were added."""
    added = 0
    with get_session() as s:
        existing = set(s.execute(select(Instructor.full_name)).scalars())
        for name in (*PILATES_INSTRUCTORS, *PT_INSTRUCTORS):
            if name not in existing:
                s.add(Instructor(full_name=name))
                added += 1
    return added


def seed_class_types() -> int:
    added = 0
    with get_session() as s:
        existing = set(s.execute(select(ClassType.name)).scalars())
        for name in CLASS_TYPES:
            if name not in existing:
                s.add(ClassType(name=name))
                added += 1
    return added


def main():
    logging.basicConfig(level=logging.INFO)
    init_db()
    n_inst = seed_instructors()
    n_types = seed_class_types()
    log.info(f"[SEED] Added {n_inst} instructors, {n_types} class types")


if __name__ == "__main__":
    main()
