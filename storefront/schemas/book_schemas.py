from pydantic import BaseModel, Field
from typing import Any, Optional


class Book(BaseModel):
    """Read-only snapshot of a catalog book as the backend returns it."""

    id: str = Field(..., alias="_id")
    title: str
    author: str = ""
    price: float = Field(..., ge=0)
    stock: int = Field(default=0, ge=0)
    category: Optional[Any] = None

    class Config:
        populate_by_name = True
        extra = "allow"
