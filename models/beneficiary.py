# models/beneficiary.py

from typing import Optional
from pydantic import ConfigDict, Field

from .base import DocumentModel, Timestamp


class BeneficiaryCreate(DocumentModel):
    """Open schema: fields beyond these are stored as sent."""

    model_config = ConfigDict(extra="allow")

    name: str = Field(..., min_length=1)
    program: str = Field(..., min_length=1)
    contact: str = Field(..., min_length=1)
    location: Optional[str] = None
    date: Timestamp = None


class BeneficiaryUpdate(DocumentModel):
    model_config = ConfigDict(extra="allow")

    name: Optional[str] = Field(None, min_length=1)
    program: Optional[str] = Field(None, min_length=1)
    contact: Optional[str] = Field(None, min_length=1)
    location: Optional[str] = None
    date: Timestamp = None
