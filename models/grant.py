# models/grant.py

from typing import Optional
from pydantic import ConfigDict, Field

from .base import DocumentModel, Timestamp


class GrantCreate(DocumentModel):
    """
    startDate / endDate default to "now" in the router when omitted.
    """

    model_config = ConfigDict(extra="allow")

    name: str = Field(..., min_length=1)
    funder: str = Field(..., min_length=1)
    amount: float = Field(..., gt=0)
    status: str = Field("active", min_length=1)
    utilization_rate: float = Field(0, ge=0)
    reports_due: int = Field(0, ge=0)
    start_date: Timestamp = None
    end_date: Timestamp = None


class GrantUpdate(DocumentModel):
    model_config = ConfigDict(extra="allow")

    name: Optional[str] = Field(None, min_length=1)
    funder: Optional[str] = Field(None, min_length=1)
    amount: Optional[float] = Field(None, gt=0)
    status: Optional[str] = Field(None, min_length=1)
    utilization_rate: Optional[float] = Field(None, ge=0)
    reports_due: Optional[int] = Field(None, ge=0)
    start_date: Timestamp = None
    end_date: Timestamp = None
