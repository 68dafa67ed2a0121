# models/base.py

from typing import Annotated, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict
from pydantic.alias_generators import to_camel

from core.timestamps import to_datetime


# Set by the server on every write; never taken from a request body
SERVER_FIELDS = ("id", "createdAt", "updatedAt")


def _iso_timestamp(value):
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    converted = to_datetime(value)
    if converted is None:
        raise ValueError("must be a date or an ISO-8601 timestamp")
    return converted.isoformat()


# Dates arrive as ISO strings, epochs or {seconds, nanoseconds} maps and
# are stored as ISO-8601 UTC
Timestamp = Annotated[Optional[str], BeforeValidator(_iso_timestamp)]


class DocumentModel(BaseModel):
    """
    Request bodies for stored documents.
    Documents use camelCase keys; Python code uses snake_case attributes.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    def to_document(self, *, exclude_unset: bool = False) -> dict:
        data = self.model_dump(
            mode="json",
            by_alias=True,
            exclude_unset=exclude_unset,
            exclude_none=exclude_unset,
        )
        for name in SERVER_FIELDS:
            data.pop(name, None)
        return data
