# models/resource.py

from typing import Optional
from pydantic import ConfigDict, Field

from .base import DocumentModel


# -------------------------------------------------
# Create
# -------------------------------------------------
class ResourceCreate(DocumentModel):
    """
    `unit` is free text; models.enums.ResourceUnit lists the suggestions
    offered by the dashboard.
    """

    model_config = ConfigDict(extra="allow")

    name: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    quantity: int = Field(..., ge=0)
    unit: str = Field(..., min_length=1)
    value: float = Field(0, ge=0, description="Value of one unit")
    description: Optional[str] = None
    location: Optional[str] = None


# -------------------------------------------------
# Update (administrative edit: may set quantity directly)
# -------------------------------------------------
class ResourceUpdate(DocumentModel):
    model_config = ConfigDict(extra="allow")

    name: Optional[str] = Field(None, min_length=1)
    category: Optional[str] = Field(None, min_length=1)
    quantity: Optional[int] = Field(None, ge=0)
    unit: Optional[str] = Field(None, min_length=1)
    value: Optional[float] = Field(None, ge=0)
    description: Optional[str] = None
    location: Optional[str] = None
