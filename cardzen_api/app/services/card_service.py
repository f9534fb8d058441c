"""
Business logic for cards.

Anyone may read cards; creating requires an authenticated caller, and
only the owner of a card may update or delete it.  Price presence is
tested against ``None`` so that a price of ``0`` is accepted on create
and applied on update; prices must be finite and non‑negative.
"""

import logging
import math
import sqlite3
from typing import Any, Dict, List, Optional

from ..core.db import Database
from ..core.exceptions import NotFoundError, OwnershipError, ValidationError
from ..schemas.card import CardCreate, CardRead, CardUpdate


logger = logging.getLogger(__name__)

CARD_COLUMNS = "id, user_id, name, description, price, created_at"


def row_to_card(row: sqlite3.Row) -> CardRead:
    return CardRead(
        id=row["id"],
        user_id=row["user_id"],
        name=row["name"],
        description=row["description"],
        price=row["price"],
        created_at=row["created_at"],
    )


def _check_price(price: float) -> None:
    if not math.isfinite(price):
        raise ValidationError("Price must be a finite number")
    if price < 0:
        raise ValidationError("Price must not be negative")


class CardService:
    """CRUD operations over the ``cards`` table."""

    @classmethod
    async def create_card(
        cls, db: Database, data: CardCreate, current_user: Dict[str, Any]
    ) -> CardRead:
        """Insert a card owned by ``current_user``."""
        if not data.name or not data.description or data.price is None:
            raise ValidationError("All fields are required")
        _check_price(data.price)

        with db.write() as cursor:
            cursor.execute(
                "INSERT INTO cards (user_id, name, description, price) VALUES (?, ?, ?, ?)",
                (current_user["id"], data.name, data.description, data.price),
            )
            row = cursor.execute(
                f"SELECT {CARD_COLUMNS} FROM cards WHERE id = ?", (cursor.lastrowid,)
            ).fetchone()
        card = row_to_card(row)
        logger.info("User %s created card %s '%s'", current_user["id"], card.id, card.name)
        return card

    @classmethod
    async def list_cards(cls, db: Database) -> List[CardRead]:
        with db.cursor() as cursor:
            rows = cursor.execute(f"SELECT {CARD_COLUMNS} FROM cards").fetchall()
        return [row_to_card(row) for row in rows]

    @classmethod
    async def find_card(cls, db: Database, card_id: int) -> Optional[CardRead]:
        with db.cursor() as cursor:
            row = cursor.execute(
                f"SELECT {CARD_COLUMNS} FROM cards WHERE id = ?", (card_id,)
            ).fetchone()
        return row_to_card(row) if row else None

    @classmethod
    async def get_card(cls, db: Database, card_id: int) -> CardRead:
        """Return the card or raise ``NotFoundError``."""
        card = await cls.find_card(db, card_id)
        if card is None:
            raise NotFoundError("Card not found")
        return card

    @classmethod
    def _load_owned(
        cls, cursor: sqlite3.Cursor, card_id: int, current_user: Dict[str, Any]
    ) -> sqlite3.Row:
        row = cursor.execute(
            f"SELECT {CARD_COLUMNS} FROM cards WHERE id = ?", (card_id,)
        ).fetchone()
        if not row:
            raise NotFoundError("Card not found")
        if row["user_id"] != current_user["id"]:
            raise OwnershipError("Not allowed")
        return row

    @classmethod
    async def update_card(
        cls,
        db: Database,
        card_id: int,
        updates: CardUpdate,
        current_user: Dict[str, Any],
    ) -> CardRead:
        """Apply the provided fields to a card owned by the caller.

        Fields that are absent, ``null`` or (for name and description)
        empty keep their stored value.  Raises ``NotFoundError``,
        ``OwnershipError`` or ``ValidationError``.
        """
        with db.write() as cursor:
            row = cls._load_owned(cursor, card_id, current_user)
            if updates.price is not None:
                _check_price(updates.price)
            name = updates.name or row["name"]
            description = updates.description or row["description"]
            price = updates.price if updates.price is not None else row["price"]
            cursor.execute(
                "UPDATE cards SET name = ?, description = ?, price = ? WHERE id = ?",
                (name, description, price, card_id),
            )
        logger.info("User %s updated card %s", current_user["id"], card_id)
        return CardRead(
            id=row["id"],
            user_id=row["user_id"],
            name=name,
            description=description,
            price=price,
            created_at=row["created_at"],
        )

    @classmethod
    async def delete_card(
        cls, db: Database, card_id: int, current_user: Dict[str, Any]
    ) -> None:
        """Delete a card owned by the caller.

        Transactions referring to the card are left in place.
        """
        with db.write() as cursor:
            cls._load_owned(cursor, card_id, current_user)
            cursor.execute("DELETE FROM cards WHERE id = ?", (card_id,))
        logger.info("User %s deleted card %s", current_user["id"], card_id)
