import os
import tempfile

# Config is read at import time: point the app at a throwaway SQLite file first.
_TMP_DIR = tempfile.mkdtemp(prefix="fitlab-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP_DIR, 'test.db')}"
os.environ["ADMIN_WEBHOOK_URL"] = ""
os.environ.setdefault("TZ_NAME", "Europe/Rome")

import pytest

from fitlab import create_app
from fitlab.db import Base, engine, init_db
from fitlab.seed_db import seed_class_types, seed_instructors
from fitlab import crud


@pytest.fixture
def db():
    init_db()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def seeded(db):
    seed_instructors()
    seed_class_types()
    instructors = {i["full_name"]: i["id"] for i in crud.list_instructors()}
    class_types = {c["name"]: c["id"] for c in crud.list_class_types()}
    return {"instructors": instructors, "class_types": class_types}


@pytest.fixture
def app(db):
    app = create_app()
    app.config.update(TESTING=True)
    return app


@pytest.fixture
def client(app):
    return app.test_client()
