"""Database schema creation."""

import logging

from sqlalchemy.exc import SQLAlchemyError

from kitchen_prep.extensions import db

# Registers the tables on db.metadata
from kitchen_prep import models  # noqa: F401


logger = logging.getLogger(__name__)


def init_database() -> None:
    """Create the stations and tasks tables and their indexes.

    Uses create-if-not-exists for every table and index, so calling it on a
    database that already holds data leaves the data untouched. Nothing is
    ever dropped or altered.

    Raises:
        SQLAlchemyError: If the DDL cannot be applied.
    """
    try:
        db.create_all()
    except SQLAlchemyError:
        logger.exception("Error initializing database")
        raise

    logger.info("Database initialized successfully")
