"""Pytest fixtures for the prep tracker."""

import os

import pytest


# Disable OpenTelemetry for tests
os.environ["OTEL_SDK_DISABLED"] = "true"


@pytest.fixture
def app():
    """Create test application."""
    from kitchen_prep import create_app
    from kitchen_prep.config import TestConfig

    app = create_app(TestConfig)
    app.config["TESTING"] = True

    yield app


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def db(app):
    """Create test database."""
    from kitchen_prep.extensions import db as _db
    from kitchen_prep.services import init_database

    with app.app_context():
        init_database()
        yield _db
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def stations(db):
    """Seed the default stations and return them keyed by name."""
    from kitchen_prep.services import list_stations, seed_stations

    seed_stations()
    return {station.name: station for station in list_stations()}


@pytest.fixture
def grill(stations):
    return stations["Grill"]
