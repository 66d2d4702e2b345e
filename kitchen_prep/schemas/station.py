"""Station-related Marshmallow schemas."""

from marshmallow import EXCLUDE, Schema, fields, pre_load, validate


class StationSchema(Schema):
    """Schema for station serialization."""

    id = fields.Int(dump_only=True)
    name = fields.Str(required=True)
    created_at = fields.DateTime(dump_only=True, format="iso")


class StationCreateSchema(Schema):
    """Schema for station creation validation."""

    class Meta:
        unknown = EXCLUDE

    name = fields.Str(
        required=True,
        validate=[
            validate.Length(min=1, error="Station name is required"),
            validate.Length(max=100),
        ],
        error_messages={
            "required": "Station name is required",
            "null": "Station name is required",
            "invalid": "Station name is required",
        },
    )

    @pre_load
    def strip_name(self, data, **kwargs):
        if isinstance(data, dict) and isinstance(data.get("name"), str):
            data = {**data, "name": data["name"].strip()}
        return data
