"""Postgres access for leadzap using psycopg2.

Every call site opens its own short transaction (settings lookup, audit
insert, number-verification cache); nothing holds a connection between
requests.
"""

import os
from contextlib import contextmanager
from typing import Any, Iterator, Sequence

import psycopg2
from psycopg2.extensions import connection as PgConnection, cursor as PgCursor

# Shows up in pg_stat_activity
APPLICATION_NAME = "leadzap"


def get_conn() -> PgConnection:
    """Open a connection to DATABASE_URL.

    Raises:
        RuntimeError: If DATABASE_URL is not set.
        psycopg2.Error: On connection failure.
    """
    dsn = os.environ.get("DATABASE_URL")
    if not dsn:
        raise RuntimeError("DATABASE_URL environment variable not set")
    return psycopg2.connect(dsn, application_name=APPLICATION_NAME)


@contextmanager
def txn(conn: PgConnection | None = None) -> Iterator[PgCursor]:
    """Yield a cursor inside one transaction.

    Commit on clean exit, rollback when the block raises. A connection
    opened here is closed on exit; a borrowed one is left open.

    Example:
        with txn() as cur:
            insert_entry(cur, phone_number=..., content=..., status="sent")
    """
    owns_conn = conn is None
    if owns_conn:
        conn = get_conn()

    try:
        with conn.cursor() as cur:
            yield cur
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        if owns_conn:
            conn.close()


def fetchone(
    cur: PgCursor,
    query: str,
    params: Sequence[Any] | None = None,
) -> tuple[Any, ...] | None:
    """Run query, return the first row or None."""
    cur.execute(query, params)
    return cur.fetchone()


def fetchall(
    cur: PgCursor,
    query: str,
    params: Sequence[Any] | None = None,
) -> list[tuple[Any, ...]]:
    """Run query, return every row."""
    cur.execute(query, params)
    return cur.fetchall()
