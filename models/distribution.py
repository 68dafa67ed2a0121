# models/distribution.py

from typing import Optional
from pydantic import Field

from .base import DocumentModel, Timestamp
from .enums import DistributionStatus


class DistributionCreate(DocumentModel):
    """
    resourceName / unitValue / totalValue are snapshotted from the
    resource on the server; values sent by the client are ignored.
    """

    resource_id: str = Field(..., min_length=1)
    # Strict: JSON true/false and "4" are not quantities
    quantity: int = Field(..., strict=True)
    recipient: str = Field(..., min_length=1)
    location: str = Field(..., min_length=1)
    notes: Optional[str] = None
    date: Timestamp = None


class DistributionUpdate(DocumentModel):
    """
    Quantity and resource are fixed once stock has been decremented;
    only the workflow fields can change.
    """

    status: Optional[DistributionStatus] = None
    recipient: Optional[str] = Field(None, min_length=1)
    location: Optional[str] = Field(None, min_length=1)
    notes: Optional[str] = None
    date: Timestamp = None
