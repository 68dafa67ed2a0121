# models/project.py

from typing import Optional
from pydantic import ConfigDict, Field

from .base import DocumentModel, Timestamp


class ProjectCreate(DocumentModel):
    model_config = ConfigDict(extra="allow")

    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    status: str = Field(..., min_length=1)
    # A zero budget is allowed; a missing one is not
    budget: float = Field(..., ge=0)
    spent: float = Field(0, ge=0)
    start_date: Timestamp = None
    end_date: Timestamp = None


class ProjectUpdate(DocumentModel):
    model_config = ConfigDict(extra="allow")

    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    status: Optional[str] = Field(None, min_length=1)
    budget: Optional[float] = Field(None, ge=0)
    spent: Optional[float] = Field(None, ge=0)
    start_date: Timestamp = None
    end_date: Timestamp = None
