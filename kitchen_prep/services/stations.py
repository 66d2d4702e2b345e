"""Station queries."""

import logging
from collections.abc import Iterable

from flask import current_app
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError

from kitchen_prep.extensions import db
from kitchen_prep.models import Station


logger = logging.getLogger(__name__)

_CONFLICT_TOLERANT_INSERTS = {
    "postgresql": postgresql_insert,
    "sqlite": sqlite_insert,
}


def list_stations() -> list[Station]:
    """Return every station ordered by ascending id."""
    return db.session.query(Station).order_by(Station.id.asc()).all()


def create_station(name: str) -> Station:
    """Insert a station.

    Duplicate names are rejected by the unique constraint; the session is
    rolled back and the error propagates.

    Args:
        name: Trimmed, non-empty station name.

    Returns:
        The stored station with its generated id.
    """
    station = Station(name=name)
    try:
        db.session.add(station)
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        raise

    logger.info(f"Station created: {station.name}", extra={"station_id": station.id})
    return station


def seed_stations(names: Iterable[str] | None = None) -> None:
    """Ensure each named station exists, skipping names already stored.

    Args:
        names: Station names. Defaults to the DEFAULT_STATIONS setting.
    """
    if names is None:
        names = current_app.config["DEFAULT_STATIONS"]

    insert = _CONFLICT_TOLERANT_INSERTS.get(db.engine.dialect.name)
    try:
        for name in names:
            if insert is not None:
                stmt = insert(Station).values(name=name).on_conflict_do_nothing(
                    index_elements=["name"]
                )
                db.session.execute(stmt)
            elif db.session.query(Station).filter(Station.name == name).first() is None:
                db.session.add(Station(name=name))
                db.session.flush()
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Error seeding stations")
        raise

    logger.info("Stations seeded successfully")
