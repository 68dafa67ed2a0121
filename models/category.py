# models/category.py

from pydantic import BaseModel


class CategoryCreate(BaseModel):
    """Blank names are rejected by services.categories, not here."""
    name: str = ""
