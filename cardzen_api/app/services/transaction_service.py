"""
Business logic for purchases and the transactions ledger.

A purchase records the card's price at that moment as the transaction
amount.  There is no stock, buying one's own card is allowed, and
every call adds a new ledger row.
"""

import logging
from typing import Any, Dict, List

from ..core.db import Database
from ..core.exceptions import NotFoundError
from ..schemas.card import CardRead
from ..schemas.transaction import TransactionRead
from .card_service import CARD_COLUMNS, row_to_card


logger = logging.getLogger(__name__)


class TransactionService:
    """Purchases and per‑buyer ledger queries."""

    @classmethod
    async def buy_card(
        cls, db: Database, card_id: int, current_user: Dict[str, Any]
    ) -> CardRead:
        """Record a purchase of ``card_id`` by the caller.

        The card lookup and the insert share one write transaction so
        the stored amount is the price the returned card shows.
        Raises ``NotFoundError`` if the card does not exist.
        """
        with db.write() as cursor:
            row = cursor.execute(
                f"SELECT {CARD_COLUMNS} FROM cards WHERE id = ?", (card_id,)
            ).fetchone()
            if not row:
                raise NotFoundError("Card not found")
            cursor.execute(
                "INSERT INTO transactions (buyer_id, card_id, amount) VALUES (?, ?, ?)",
                (current_user["id"], row["id"], row["price"]),
            )
            transaction_id = cursor.lastrowid
        logger.info(
            "User %s bought card %s for %s (transaction %s)",
            current_user["id"],
            row["id"],
            row["price"],
            transaction_id,
        )
        return row_to_card(row)

    @classmethod
    async def list_transactions(
        cls, db: Database, current_user: Dict[str, Any]
    ) -> List[TransactionRead]:
        """Return the caller's purchases with the card's current name and price.

        A LEFT JOIN keeps purchases of deleted cards; their ``name`` and
        ``price`` come back as ``None``.
        """
        with db.cursor() as cursor:
            rows = cursor.execute(
                """
                SELECT t.id, c.name, c.price, t.created_at
                FROM transactions t
                LEFT JOIN cards c ON t.card_id = c.id
                WHERE t.buyer_id = ?
                ORDER BY t.id
                """,
                (current_user["id"],),
            ).fetchall()
        return [
            TransactionRead(
                id=row["id"],
                name=row["name"],
                price=row["price"],
                created_at=row["created_at"],
            )
            for row in rows
        ]
