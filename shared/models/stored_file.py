"""
Stored file domain model.
"""

from dataclasses import asdict, dataclass, field, fields
from datetime import datetime, timezone
from typing import Optional

from shared.utils.convert import convert_to_document, ensure_utc
from shared.utils.exceptions import ValidationException


@dataclass
class StoredFile:
    """
    One uploaded document aligned with the MongoDB collection schema.
    _id: file_id (ObjectId hex, assigned by the store on insert)
    """

    # ========== IDENTIFICATION ==========
    original_name: str
    content_type: str
    file_id: Optional[str] = None  # _id in MongoDB

    # ========== PAYLOAD ==========
    size: int = 0
    data: Optional[bytes] = None  # blob mode
    filename: Optional[str] = None  # disk mode
    path: Optional[str] = None  # disk mode

    # ========== TIMESTAMPS ==========
    upload_date: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self):
        if not self.original_name or not str(self.original_name).strip():
            raise ValidationException("original_name is required")
        if not self.content_type:
            raise ValidationException("content_type is required")
        if self.size is None or self.size < 0:
            raise ValidationException(f"size must be a non-negative integer, got {self.size}")
        if self.data is not None and self.path is not None:
            raise ValidationException("a stored file carries either inline data or a disk path, not both")
        if self.data is not None and len(self.data) != self.size:
            raise ValidationException(f"size {self.size} does not match payload length {len(self.data)}")
        if not isinstance(self.upload_date, datetime):
            raise ValidationException("upload_date must be a datetime")
        self.upload_date = ensure_utc(self.upload_date)

    @property
    def is_on_disk(self) -> bool:
        return self.path is not None

    def to_dict(self) -> dict:
        """Convert StoredFile to a MongoDB document. file_id is left to the store."""
        result = asdict(self)
        result.pop("file_id")
        return convert_to_document(result)

    @classmethod
    def from_dict(cls, data: dict) -> 'StoredFile':
        """Create StoredFile from a MongoDB document, mapping _id to file_id."""
        known = {f.name for f in fields(cls)}
        converted_data = {key: value for key, value in data.items() if key in known}

        if "_id" in data:
            converted_data["file_id"] = str(data["_id"])
        if converted_data.get("data") is not None:
            converted_data["data"] = bytes(converted_data["data"])

        try:
            return cls(**converted_data)
        except TypeError as e:
            raise ValidationException(f"Malformed stored file document: {e}") from e
