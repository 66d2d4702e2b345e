"""Marshmallow schemas for serialization and validation."""

from kitchen_prep.schemas.station import StationCreateSchema, StationSchema
from kitchen_prep.schemas.task import (
    TaskCreateSchema,
    TaskFilterSchema,
    TaskSchema,
    TaskUpdateSchema,
)


__all__ = [
    "StationSchema",
    "StationCreateSchema",
    "TaskSchema",
    "TaskCreateSchema",
    "TaskUpdateSchema",
    "TaskFilterSchema",
]
