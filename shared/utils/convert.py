from datetime import datetime, timezone
from enum import Enum

from bson import Binary


def convert_to_document(data: dict) -> dict:
    """Convert complex types to MongoDB compatible types, dropping unset fields."""
    document = {}
    for key, value in data.items():
        if value is None:
            continue
        elif isinstance(value, Enum):
            document[key] = value.value
        elif isinstance(value, (bytes, bytearray)):
            document[key] = Binary(bytes(value))
        elif isinstance(value, (datetime, str, int, float, bool)):
            document[key] = value
        else:
            document[key] = str(value)
    return document


def ensure_utc(value: datetime) -> datetime:
    """Mongo hands back naive datetimes that are implicitly UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
