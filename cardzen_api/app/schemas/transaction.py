"""
Pydantic models for purchases and the transactions ledger.
"""

from typing import Optional

from pydantic import BaseModel, Field

from .card import CardRead


class PurchaseResponse(BaseModel):
    message: str = Field("Purchase successful")
    card: CardRead


class TransactionRead(BaseModel):
    """A ledger row joined with the card it refers to.

    ``name`` and ``price`` are read from the card when the ledger is
    listed; both are ``None`` once the card has been deleted.
    """

    id: int
    name: Optional[str] = None
    price: Optional[float] = None
    created_at: Optional[str] = None

    model_config = {
        "from_attributes": True,
    }
