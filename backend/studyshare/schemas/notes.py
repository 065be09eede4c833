"""Note schemas."""

from datetime import datetime

from studyshare.schemas.base import BaseSchema, IDMixin


class NoteRead(BaseSchema, IDMixin):
    """Schema for reading note data."""

    title: str
    description: str
    file_name: str
    file_size: int
    file_type: str
    upload_date: datetime
    user_id: int
    category_id: int
    downloads: int
    views: int
