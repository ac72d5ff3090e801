"""Communication log repository - append-only audit of outbound messages.

Uses raw SQL with psycopg2 (no ORM). Rows are never updated or deleted here.
"""

import json
from datetime import datetime, timezone
from typing import Any

from psycopg2.extensions import cursor as PgCursor


def insert_entry(
    cur: PgCursor,
    *,
    phone_number: str,
    content: str,
    status: str,
    metadata: dict[str, Any] | None = None,
    channel: str = "whatsapp",
    direction: str = "outbound",
    created_at: datetime | None = None,
) -> int:
    """Insert one communication_log row.

    Args:
        cur: Database cursor (within transaction).
        phone_number: Recipient phone number.
        content: Message body.
        status: "sent" or "failed".
        metadata: JSON metadata (provider, provider result).
        channel: Channel, stored in the type column.
        direction: Message direction.
        created_at: Row timestamp. Defaults to now (UTC).

    Returns:
        The generated row ID.
    """
    cur.execute(
        """
        INSERT INTO communication_log (
            type, direction, phone_number, content,
            status, metadata, created_at
        )
        VALUES (%s, %s, %s, %s, %s, %s::jsonb, %s)
        RETURNING id
        """,
        (
            channel,
            direction,
            phone_number,
            content,
            status,
            json.dumps(metadata or {}, default=str),
            created_at or datetime.now(timezone.utc),
        ),
    )
    return cur.fetchone()[0]
