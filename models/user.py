# models/user.py

from typing import Optional
from pydantic import BaseModel, EmailStr, Field, field_validator

from .enums import Role


class UserCreate(BaseModel):
    """Creates the Supabase Auth user and its users document."""

    name: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=6)
    role: Role
    department: Optional[str] = None

    @field_validator("role", mode="before")
    def normalize_role(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("department", mode="before")
    def drop_placeholder_department(cls, v):
        # The dashboard sends "no-department" for the empty option
        if v in ("", "no-department"):
            return None
        return v
