"""
Card endpoints.

Listing and reading cards is public.  Creating requires a bearer
token; updating and deleting additionally require that the caller owns
the card.
"""

from typing import List

from fastapi import APIRouter, Depends, status

from cardzen_api.app.core.db import Database, get_db
from cardzen_api.app.core.security import get_current_user
from cardzen_api.app.schemas.card import CardCreate, CardRead, CardUpdate
from cardzen_api.app.schemas.common import MessageResponse
from cardzen_api.app.services.card_service import CardService


router = APIRouter()


@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def create_card(
    card: CardCreate,
    current_user: dict = Depends(get_current_user),
    db: Database = Depends(get_db),
) -> MessageResponse:
    """Create a card owned by the caller.

    ``name``, ``description`` and ``price`` are required; a price of 0
    is accepted.
    """
    await CardService.create_card(db, card, current_user)
    return MessageResponse(message="Card created successfully")


@router.get("", response_model=List[CardRead])
async def list_cards(db: Database = Depends(get_db)) -> List[CardRead]:
    return await CardService.list_cards(db)


@router.get("/{card_id}", response_model=CardRead)
async def get_card(card_id: int, db: Database = Depends(get_db)) -> CardRead:
    return await CardService.get_card(db, card_id)


@router.put("/{card_id}", response_model=MessageResponse)
async def update_card(
    card_id: int,
    updates: CardUpdate,
    current_user: dict = Depends(get_current_user),
    db: Database = Depends(get_db),
) -> MessageResponse:
    """Update a card (owner only).

    Partial updates are supported; any unspecified fields remain
    unchanged.
    """
    await CardService.update_card(db, card_id, updates, current_user)
    return MessageResponse(message="Card updated successfully")


@router.delete("/{card_id}", response_model=MessageResponse)
async def delete_card(
    card_id: int,
    current_user: dict = Depends(get_current_user),
    db: Database = Depends(get_db),
) -> MessageResponse:
    """Delete a card (owner only).

    Purchases of the card stay in the buyers' transaction lists.
    """
    await CardService.delete_card(db, card_id, current_user)
    return MessageResponse(message="Card deleted successfully")
