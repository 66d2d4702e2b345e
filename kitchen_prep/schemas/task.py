"""Task-related Marshmallow schemas."""

from marshmallow import EXCLUDE, Schema, fields, pre_load, validate

from kitchen_prep.models import PRIORITIES, PRIORITY_NORMAL


PRIORITY_ERROR = 'Priority must be "normal" or "high"'
DATE_ERROR = "Dates must use the YYYY-MM-DD format"

# Ids are SERIAL (int4) columns
MAX_ID = 2**31 - 1


class JsonBool(fields.Boolean):
    """Boolean that only accepts JSON true and false.

    ``1`` and ``0`` compare equal to ``True`` and ``False``, so they are
    rejected by type before the truthy lookup.
    """

    def _deserialize(self, value, attr, data, **kwargs):
        if type(value) is not bool:
            raise self.make_error("invalid", input=value)
        return value


class IdField(fields.Int):
    """Positive int4 id.

    JSON bodies must send an integer; query strings (``from_string``) must
    send plain ASCII digits. Booleans, floats, signs, padding and ``1_0``
    style literals are rejected.
    """

    def __init__(self, *, from_string: bool = False, **kwargs):
        kwargs.setdefault("validate", validate.Range(min=1, max=MAX_ID))
        super().__init__(**kwargs)
        self.from_string = from_string

    def _deserialize(self, value, attr, data, **kwargs):
        if self.from_string and isinstance(value, str):
            if not (value.isascii() and value.isdigit()):
                raise self.make_error("invalid", input=value)
            return int(value)
        if type(value) is not int:
            raise self.make_error("invalid", input=value)
        return value


def _priority_field(**kwargs) -> fields.Str:
    return fields.Str(
        validate=validate.OneOf(PRIORITIES, error=PRIORITY_ERROR),
        error_messages={"invalid": PRIORITY_ERROR, "null": PRIORITY_ERROR},
        **kwargs,
    )


def _date_field(**kwargs) -> fields.Date:
    return fields.Date(
        error_messages={"invalid": DATE_ERROR, "null": DATE_ERROR},
        **kwargs,
    )


class TaskSchema(Schema):
    """Schema for task serialization."""

    id = fields.Int(dump_only=True)
    station_id = fields.Int()
    station_name = fields.Str(dump_only=True)
    title = fields.Str()
    details = fields.Str(allow_none=True)
    priority = fields.Str()
    target_date = fields.Date()
    created_at = fields.DateTime(dump_only=True, format="iso")
    created_by = fields.Str(allow_none=True)
    is_done = fields.Bool()


class TaskCreateSchema(Schema):
    """Schema for task creation validation.

    Optional text fields are trimmed and blank values are dropped, so an
    empty ``priority`` or ``target_date`` falls back to its default.
    """

    class Meta:
        unknown = EXCLUDE

    station_id = IdField(
        required=True,
        validate=validate.Range(min=1, max=MAX_ID, error="Valid station_id is required"),
        error_messages={
            "required": "Valid station_id is required",
            "null": "Valid station_id is required",
            "invalid": "Valid station_id is required",
        },
    )
    title = fields.Str(
        required=True,
        validate=[
            validate.Length(min=1, error="Task title is required"),
            validate.Length(max=255),
        ],
        error_messages={
            "required": "Task title is required",
            "null": "Task title is required",
            "invalid": "Task title is required",
        },
    )
    details = fields.Str()
    priority = _priority_field(load_default=PRIORITY_NORMAL)
    target_date = _date_field()
    created_by = fields.Str(validate=validate.Length(max=100))

    @pre_load
    def normalize(self, data, **kwargs):
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if isinstance(data.get("title"), str):
            data["title"] = data["title"].strip()
        for key in ("details", "created_by"):
            if isinstance(data.get(key), str):
                data[key] = data[key].strip()
        for key in ("details", "created_by", "priority", "target_date"):
            if key in data and data[key] in (None, ""):
                del data[key]
        return data


class TaskUpdateSchema(Schema):
    """Schema for partial task updates.

    Only keys present in the payload appear in the loaded result; a key sent
    with a falsy value (``false``, ``""``, ``null`` details) is still kept.
    """

    class Meta:
        unknown = EXCLUDE

    title = fields.Str(
        validate=[
            validate.Length(min=1, error="Task title cannot be blank"),
            validate.Length(max=255),
        ],
        error_messages={"null": "Task title cannot be blank"},
    )
    details = fields.Str(allow_none=True)
    priority = _priority_field()
    target_date = _date_field()
    is_done = JsonBool(
        error_messages={
            "invalid": "is_done must be true or false",
            "null": "is_done must be true or false",
        }
    )

    @pre_load
    def strip_title(self, data, **kwargs):
        if isinstance(data, dict) and isinstance(data.get("title"), str):
            data = {**data, "title": data["title"].strip()}
        return data


class TaskFilterSchema(Schema):
    """Schema for the task listing query string.

    Empty query values are treated as absent.
    """

    class Meta:
        unknown = EXCLUDE

    station_id = IdField(
        from_string=True,
        error_messages={"invalid": "station_id must be an integer"},
    )
    target_date = _date_field()
    is_done = fields.Bool(
        truthy={"true", "1"},
        falsy={"false", "0"},
        error_messages={"invalid": "is_done must be true or false"},
    )

    @pre_load
    def drop_empty(self, data, **kwargs):
        return {key: value for key, value in data.items() if value != ""}
