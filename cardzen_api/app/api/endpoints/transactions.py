"""
Purchase and transaction ledger endpoints.
"""

from typing import List

from fastapi import APIRouter, Depends, status

from cardzen_api.app.core.db import Database, get_db
from cardzen_api.app.core.security import get_current_user
from cardzen_api.app.schemas.transaction import PurchaseResponse, TransactionRead
from cardzen_api.app.services.transaction_service import TransactionService


router = APIRouter()


@router.post("/buy/{card_id}", response_model=PurchaseResponse, status_code=status.HTTP_201_CREATED)
async def buy_card(
    card_id: int,
    current_user: dict = Depends(get_current_user),
    db: Database = Depends(get_db),
) -> PurchaseResponse:
    """Buy a card at its current price.

    Every call records a new transaction; the response echoes the card
    as it was at the time of purchase.
    """
    card = await TransactionService.buy_card(db, card_id, current_user)
    return PurchaseResponse(message="Purchase successful", card=card)


@router.get("/transactions", response_model=List[TransactionRead])
async def list_transactions(
    current_user: dict = Depends(get_current_user),
    db: Database = Depends(get_db),
) -> List[TransactionRead]:
    return await TransactionService.list_transactions(db, current_user)
