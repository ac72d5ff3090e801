"""Cache of WhatsApp existence checks (whatsapp_number_verification table).

One row per canonical phone number, overwritten on every fresh check.
"""

from dataclasses import dataclass
from datetime import datetime

from psycopg2.extensions import cursor as PgCursor

from leadzap.infra.db import fetchone


@dataclass(frozen=True)
class NumberVerification:
    phone_number: str
    exists_on_whatsapp: bool
    last_verified_at: datetime


def get_verification(cur: PgCursor, phone_number: str) -> NumberVerification | None:
    """Return the cached check for phone_number, if any."""
    row = fetchone(
        cur,
        """
        SELECT exists_on_whatsapp, last_verified_at
        FROM whatsapp_number_verification
        WHERE phone_number = %s
        """,
        (phone_number,),
    )
    if row is None:
        return None
    return NumberVerification(
        phone_number=phone_number,
        exists_on_whatsapp=bool(row[0]),
        last_verified_at=row[1],
    )


def upsert_verification(
    cur: PgCursor,
    *,
    phone_number: str,
    exists_on_whatsapp: bool,
    verified_at: datetime,
) -> None:
    """Insert or refresh the cached check for phone_number."""
    cur.execute(
        """
        INSERT INTO whatsapp_number_verification (
            phone_number, exists_on_whatsapp, last_verified_at
        )
        VALUES (%s, %s, %s)
        ON CONFLICT (phone_number) DO UPDATE
        SET exists_on_whatsapp = EXCLUDED.exists_on_whatsapp,
            last_verified_at = EXCLUDED.last_verified_at
        """,
        (phone_number, exists_on_whatsapp, verified_at),
    )
