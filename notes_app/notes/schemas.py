from datetime import timezone
from marshmallow import EXCLUDE, Schema, ValidationError, fields, validate

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

TITLE_MIN = 3
TITLE_MAX = 255


def not_blank(message: str):
    def _check(value):
        if not value.strip():
            raise ValidationError(message)
    return _check


class NoteIn(Schema):
    class Meta:
        # le client peut renvoyer id / createdAt: on ignore
        unknown = EXCLUDE

    title = fields.String(
        required=True,
        validate=[
            not_blank("Title must not be blank."),
            validate.Length(
                min=TITLE_MIN,
                max=TITLE_MAX,
                error="Title must be between {min} and {max} characters.",
            ),
        ],
        error_messages={
            "required": "Title must not be blank.",
            "null": "Title must not be blank.",
            "invalid": "Title must be a string.",
        },
    )
    content = fields.String(
        required=True,
        validate=not_blank("Content must not be blank."),
        error_messages={
            "required": "Content must not be blank.",
            "null": "Content must not be blank.",
            "invalid": "Content must be a string.",
        },
    )


class Timestamp(fields.DateTime):
    """`YYYY-MM-DD HH:MM:SS` en UTC (SQLite rend des datetimes naïfs, déjà en UTC)."""

    def __init__(self, **kwargs):
        super().__init__(format=TIMESTAMP_FORMAT, **kwargs)

    def _serialize(self, value, attr, obj, **kwargs):
        if value is not None and value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return super()._serialize(value, attr, obj, **kwargs)


class NoteOut(Schema):
    id = fields.Integer(required=True)
    title = fields.String(required=True)
    content = fields.String(required=True)
    created_at = Timestamp(data_key="createdAt", required=True)
    updated_at = Timestamp(data_key="updatedAt", required=True)


note_in = NoteIn()


def collect_violations(payload: dict) -> list[str]:
    """Valide {title, content} et retourne la liste (vide si OK) des messages."""
    errors = note_in.validate(payload)
    messages = []
    for field in ("title", "content"):
        messages.extend(errors.get(field, []))
    return messages
