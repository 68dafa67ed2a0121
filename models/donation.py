# models/donation.py

from typing import Optional
from pydantic import ConfigDict, Field

from .base import DocumentModel, Timestamp


# -------------------------------------------------
# Create (date defaults to "now" in the router)
# -------------------------------------------------
class DonationCreate(DocumentModel):
    model_config = ConfigDict(extra="allow")

    donor: str = Field(..., min_length=1)
    amount: float = Field(..., gt=0)
    method: str = Field(..., min_length=1)
    project: str = Field(..., min_length=1)
    recurring: bool = False
    date: Timestamp = None


# -------------------------------------------------
# Update
# -------------------------------------------------
class DonationUpdate(DocumentModel):
    model_config = ConfigDict(extra="allow")

    donor: Optional[str] = Field(None, min_length=1)
    amount: Optional[float] = Field(None, gt=0)
    method: Optional[str] = Field(None, min_length=1)
    project: Optional[str] = Field(None, min_length=1)
    recurring: Optional[bool] = None
    date: Timestamp = None
