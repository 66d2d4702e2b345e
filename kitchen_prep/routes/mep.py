"""Mise en Place endpoints: JSON sheet and printable page."""

import logging

from flask import Blueprint, jsonify, render_template
from sqlalchemy.exc import SQLAlchemyError

from kitchen_prep.errors import error_response
from kitchen_prep.schemas import TaskSchema
from kitchen_prep.services import build_mep
from kitchen_prep.services.dates import resolve_date


logger = logging.getLogger(__name__)

mep_api_bp = Blueprint("mep_api", __name__, url_prefix="/api/mep")
mep_page_bp = Blueprint("mep_page", __name__, url_prefix="/mep")


@mep_api_bp.route("/<date_param>", methods=["GET"])
def get_mep(date_param: str):
    """Open tasks for a date grouped by station.

    Args:
        date_param: ``today``, ``tomorrow`` or ``YYYY-MM-DD``.
    """
    try:
        target_date = resolve_date(date_param)
    except ValueError:
        return error_response("Dates must use the YYYY-MM-DD format", 400)

    try:
        sections = build_mep(target_date)
    except SQLAlchemyError:
        logger.exception("Error building MEP")
        return error_response("Failed to build MEP", 500)

    task_schema = TaskSchema(many=True)
    return jsonify(
        {
            "target_date": target_date.isoformat(),
            "stations": [
                {
                    "id": section.station.id,
                    "name": section.station.name,
                    "tasks": task_schema.dump(section.tasks),
                }
                for section in sections
            ],
        }
    )


@mep_page_bp.route("/<date_param>", methods=["GET"])
def mep_page(date_param: str):
    """Printable Mise en Place sheet."""
    try:
        target_date = resolve_date(date_param)
    except ValueError:
        return error_response("Dates must use the YYYY-MM-DD format", 400)

    try:
        sections = build_mep(target_date)
    except SQLAlchemyError:
        logger.exception("Error building MEP")
        return error_response("Failed to build MEP", 500)

    has_tasks = any(section.tasks for section in sections)
    return render_template(
        "mep.html",
        target_date=target_date,
        sections=sections,
        has_tasks=has_tasks,
    )
