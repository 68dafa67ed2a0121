# models/partner.py

from typing import Optional
from pydantic import ConfigDict, EmailStr, Field

from .base import DocumentModel


class PartnerCreate(DocumentModel):
    model_config = ConfigDict(extra="allow")

    name: str = Field(..., min_length=1)
    contact_person: str = Field(..., min_length=1)
    email: EmailStr
    phone: Optional[str] = None


class PartnerUpdate(DocumentModel):
    model_config = ConfigDict(extra="allow")

    name: Optional[str] = Field(None, min_length=1)
    contact_person: Optional[str] = Field(None, min_length=1)
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
