"""
Pydantic models for card data.

``CardCreate`` and ``CardUpdate`` accept every field as optional; the
service decides what is required.  A price of ``0`` is a real value
and is distinguished from an absent price by comparing with ``None``.
"""

from typing import Optional

from pydantic import BaseModel, Field


class CardBase(BaseModel):
    name: Optional[str] = Field(None, example="Holo")
    description: Optional[str] = Field(None, example="rare")
    price: Optional[float] = Field(None, example=9.99)


class CardCreate(CardBase):
    """Schema for creating a card."""
    pass


class CardUpdate(CardBase):
    """Schema for updating a card.

    All fields are optional; only provided fields will be updated.
    """
    pass


class CardRead(BaseModel):
    """Schema for reading a card from the API."""

    id: int
    user_id: int
    name: str
    description: str
    price: float
    created_at: Optional[str] = None

    model_config = {
        "from_attributes": True,
    }
