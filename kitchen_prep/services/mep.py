"""Mise en Place sheet assembly."""

from dataclasses import dataclass, field
from datetime import date

from kitchen_prep.models import Station, Task
from kitchen_prep.services.stations import list_stations
from kitchen_prep.services.tasks import list_tasks


@dataclass
class MepSection:
    """One station's block on the sheet."""

    station: Station
    tasks: list[Task] = field(default_factory=list)


def build_mep(target_date: date) -> list[MepSection]:
    """Group the open tasks for a date by station.

    Every station gets a section, including stations with nothing to do.
    Sections are sorted by station name; tasks keep the listing order
    (high priority first, then oldest first).
    """
    sections = {station.id: MepSection(station) for station in list_stations()}
    for task in list_tasks(target_date=target_date, is_done=False):
        section = sections.setdefault(task.station_id, MepSection(task.station))
        section.tasks.append(task)
    return sorted(sections.values(), key=lambda section: section.station.name.lower())
