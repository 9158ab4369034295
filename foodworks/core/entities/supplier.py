"""Supplier entity."""

from datetime import datetime

from pydantic import BaseModel, Field


class Supplier(BaseModel):
    """Approved or pending supplier of raw materials."""

    id: int | None = None
    name: str
    contact_name: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    products: list[str] = Field(default_factory=list)  # product types supplied
    is_approved: bool = False
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
