# models/finance.py

from typing import List, Optional
from pydantic import Field, field_validator

from .base import DocumentModel, Timestamp


# -------------------------------------------------
# Finance request (cash advance)
# -------------------------------------------------
class FinanceRequestCreate(DocumentModel):
    """
    Requester id/name/role and the status are stamped by the server.
    `department` falls back to the requester's own department.
    """

    amount: float = Field(..., gt=0)
    currency: str = Field("MWK", min_length=3, max_length=3)
    purpose: str = Field(..., min_length=1)
    project: Optional[str] = None
    department: Optional[str] = None

    @field_validator("currency", mode="before")
    def upper_currency(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v


# -------------------------------------------------
# Liquidation (receipts against an approved request)
# -------------------------------------------------
class Receipt(DocumentModel):
    id: Optional[str] = None
    name: str = Field(..., min_length=1)
    amount: float = Field(..., ge=0)
    date: Timestamp = Field(...)
    description: str = ""
    file_url: Optional[str] = None


class LiquidationCreate(DocumentModel):
    request_id: str = Field(..., min_length=1)
    receipts: List[Receipt] = Field(..., min_length=1)


class LiquidationUpdate(DocumentModel):
    """Replaces the receipts; a rejected liquidation is resubmitted."""

    receipts: List[Receipt] = Field(..., min_length=1)


# -------------------------------------------------
# Decisions
# -------------------------------------------------
class RejectionPayload(DocumentModel):
    reason: str = Field(..., min_length=1)
