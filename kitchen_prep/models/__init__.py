"""Database models."""

from kitchen_prep.models.station import Station
from kitchen_prep.models.task import PRIORITIES, PRIORITY_HIGH, PRIORITY_NORMAL, Task


__all__ = ["Station", "Task", "PRIORITIES", "PRIORITY_HIGH", "PRIORITY_NORMAL"]
