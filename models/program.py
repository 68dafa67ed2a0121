# models/program.py

from typing import Optional
from pydantic import ConfigDict, Field

from .base import DocumentModel, Timestamp


class ProgramCreate(DocumentModel):
    model_config = ConfigDict(extra="allow")

    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    budget: Optional[float] = Field(None, ge=0)
    start_date: Timestamp = None
    end_date: Timestamp = None


class ProgramUpdate(DocumentModel):
    model_config = ConfigDict(extra="allow")

    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    budget: Optional[float] = Field(None, ge=0)
    start_date: Timestamp = None
    end_date: Timestamp = None
