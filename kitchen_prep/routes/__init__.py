"""API route blueprints."""

from kitchen_prep.routes.admin import admin_bp
from kitchen_prep.routes.health import health_bp
from kitchen_prep.routes.mep import mep_api_bp, mep_page_bp
from kitchen_prep.routes.stations import stations_bp
from kitchen_prep.routes.tasks import tasks_bp


__all__ = ["admin_bp", "health_bp", "mep_api_bp", "mep_page_bp", "stations_bp", "tasks_bp"]
