"""
Base schema and field types shared by every resource.

Python attributes stay snake_case; the JSON contract is camelCase.
"""
from datetime import datetime, timezone
from typing import Annotated, Optional
from pydantic import AfterValidator, BaseModel
from pydantic.alias_generators import to_camel


def ensure_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Coerce a datetime into UTC timezone-aware form (naive values are UTC)."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


# Datetime normalised to aware UTC, both on input and when read from the store
UTCDateTime = Annotated[datetime, AfterValidator(ensure_utc)]


class CamelModel(BaseModel):
    """Base model exposing camelCase aliases and reading ORM attributes."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class MessageResponse(CamelModel):
    """Confirmation body returned by delete endpoints."""
    message: str
    deleted_id: Optional[int] = None
