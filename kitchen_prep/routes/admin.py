"""One-time database setup endpoint."""

import logging

from flask import Blueprint, jsonify
from sqlalchemy.exc import SQLAlchemyError

from kitchen_prep.errors import error_response
from kitchen_prep.services import init_database, seed_stations
from kitchen_prep.telemetry import get_tracer


logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)

admin_bp = Blueprint("admin", __name__, url_prefix="/api")


@admin_bp.route("/init", methods=["GET", "POST"])
def init_db():
    """Create the schema and seed the default stations.

    Safe to call repeatedly.
    """
    with tracer.start_as_current_span("database.init"):
        try:
            init_database()
            seed_stations()
        except SQLAlchemyError:
            logger.exception("Error initializing database")
            return error_response("Failed to initialize database", 500)

    return jsonify(
        {
            "success": True,
            "message": "Database initialized and seeded successfully",
        }
    )
