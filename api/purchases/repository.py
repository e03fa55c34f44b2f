"""
Purchase persistence (raw SQL).
"""

from __future__ import annotations

from core import db


async def insert_purchase(*, production_id: int, amount: float, charge_id: str, email: str) -> int:
    row = await db.fetch_one(
        """
        INSERT INTO purchases (production_id, amount, charge_id, email)
        VALUES ($1, $2, $3, $4)
        RETURNING id
        """,
        production_id,
        amount,
        charge_id,
        email,
    )
    if row is None:
        raise RuntimeError("Failed to insert purchase.")
    return int(row["id"])


async def increase_download(*, email: str, production_id: int, charge_id: str) -> bool:
    """
    Count one download against the matching purchase.

    Returns False when no purchase matches the (email, production, charge).
    """
    row = await db.fetch_one(
        """
        UPDATE purchases
        SET downloads = downloads + 1,
            last_download_at = now()
        WHERE lower(email) = lower($1)
          AND production_id = $2
          AND charge_id = $3
        RETURNING id
        """,
        email,
        production_id,
        charge_id,
    )
    return row is not None
