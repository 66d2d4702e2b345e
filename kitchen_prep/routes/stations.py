"""Station endpoints."""

import logging

from flask import Blueprint, jsonify, request
from marshmallow import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from kitchen_prep.errors import error_response, validation_error_response
from kitchen_prep.schemas import StationCreateSchema, StationSchema
from kitchen_prep.services import create_station, list_stations
from kitchen_prep.telemetry import get_meter, get_tracer


logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)
meter = get_meter(__name__)

stations_created = meter.create_counter(
    name="stations.created",
    description="Stations created",
    unit="1",
)

stations_bp = Blueprint("stations", __name__, url_prefix="/api/stations")


@stations_bp.route("", methods=["GET"])
def get_stations():
    """List all stations ordered by id."""
    try:
        stations = list_stations()
    except SQLAlchemyError:
        logger.exception("Error fetching stations")
        return error_response("Failed to fetch stations", 500)

    return jsonify(StationSchema(many=True).dump(stations))


@stations_bp.route("", methods=["POST"])
def post_station():
    """Create a station.

    Returns:
        JSON response with the created station, 201.
    """
    with tracer.start_as_current_span("station.create") as span:
        try:
            data = StationCreateSchema().load(request.get_json(silent=True) or {})
        except ValidationError as err:
            return validation_error_response(err)

        try:
            station = create_station(data["name"])
        except SQLAlchemyError:
            logger.exception("Error creating station")
            return error_response("Failed to create station", 500)

        span.set_attribute("station.id", station.id)
        stations_created.add(1)

        return jsonify(StationSchema().dump(station)), 201
