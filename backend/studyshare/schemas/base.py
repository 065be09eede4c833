"""Base schema configuration."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseSchema(BaseModel):
    """Base schema with common configuration. Fields travel as camelCase."""

    model_config = ConfigDict(
        from_attributes=True,  # Read straight from store records
        str_strip_whitespace=True,
        validate_assignment=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class IDMixin(BaseModel):
    """Mixin for integer primary key."""

    id: int


class MessageResponse(BaseSchema):
    """Plain `{"message": ...}` body, also used for every error response."""

    message: str
