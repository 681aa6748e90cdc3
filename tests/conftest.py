"""
Pytest fixtures for the baroform Flask app.
"""

import os

# must be set before the app module reads its configuration
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SLACK_WEBHOOK_URL"] = ""
os.environ["DISPLAY_TIMEZONE"] = "UTC"

from datetime import datetime, timedelta, timezone

import pytest

from baroform import app as flask_app, db
from baroform.models import Consultation, PracticeApplication


@pytest.fixture
def app():
    """Flask app with a fresh in-memory database per test."""
    flask_app.config["TESTING"] = True
    flask_app.config["SLACK_WEBHOOK_URL"] = ""
    with flask_app.app_context():
        db.create_all()
        yield flask_app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def base_time():
    return datetime(2024, 3, 15, 10, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_consultation(app, base_time):
    """Insert a consultation row; later calls get later created_at values."""
    counter = {"n": 0}

    def _make(**fields):
        counter["n"] += 1
        values = {
            "name": f"학생{counter['n']}",
            "contact": f"010-0000-{counter['n']:04d}",
            "type": "consultation",
            "created_at": base_time + timedelta(minutes=counter["n"]),
        }
        values.update(fields)
        record = Consultation(**values)
        db.session.add(record)
        db.session.commit()
        return record

    return _make


@pytest.fixture
def make_practice(app, base_time):
    counter = {"n": 0}

    def _make(**fields):
        counter["n"] += 1
        values = {
            "student_name": f"실습생{counter['n']}",
            "contact": f"010-1111-{counter['n']:04d}",
            "created_at": base_time + timedelta(minutes=counter["n"]),
        }
        values.update(fields)
        record = PracticeApplication(**values)
        db.session.add(record)
        db.session.commit()
        return record

    return _make
