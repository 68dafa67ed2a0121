# models/department.py

from typing import Optional
from pydantic import BaseModel


class DepartmentCreate(BaseModel):
    """Blank names are rejected by the router, not here."""
    name: str = ""
    description: Optional[str] = None
