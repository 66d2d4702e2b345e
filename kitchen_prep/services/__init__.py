"""Service modules."""

from kitchen_prep.services.exceptions import EmptyUpdateError, TaskNotFoundError
from kitchen_prep.services.mep import MepSection, build_mep
from kitchen_prep.services.schema import init_database
from kitchen_prep.services.stations import create_station, list_stations, seed_stations
from kitchen_prep.services.tasks import create_task, delete_task, list_tasks, update_task


__all__ = [
    "EmptyUpdateError",
    "TaskNotFoundError",
    "MepSection",
    "build_mep",
    "init_database",
    "create_station",
    "list_stations",
    "seed_stations",
    "create_task",
    "delete_task",
    "list_tasks",
    "update_task",
]
