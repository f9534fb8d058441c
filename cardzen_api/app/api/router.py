"""
Top‑level router of the CARDZEN API.

The public paths are unversioned (``/register``, ``/cards``,
``/buy/{card_id}`` ...), so domain routers are included without a
prefix.  When new domains are introduced, include their routers here.
"""

from fastapi import APIRouter

from .endpoints import auth, cards, transactions

router = APIRouter()

router.include_router(auth.router, tags=["auth"])
router.include_router(cards.router, prefix="/cards", tags=["cards"])
# Defines both ``/buy/{card_id}`` and ``/transactions``.
router.include_router(transactions.router, tags=["transactions"])
