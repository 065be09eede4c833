"""Category schemas."""

from studyshare.schemas.base import BaseSchema, IDMixin


class CategoryRead(BaseSchema, IDMixin):
    """Schema for reading category data."""

    name: str
    color: str
    icon: str
