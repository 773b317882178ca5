"""
Transaction-scoped advisory locks.

Serializes concurrent lifecycle transactions (a cron tick racing an admin
request) on PostgreSQL via pg_advisory_xact_lock. The lock is released
automatically when the surrounding transaction commits or rolls back.

Dependencies: sqlalchemy, hashlib (stdlib)
System role: Mutual exclusion for check-then-act session writes
"""

import hashlib
import logging

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)


def lock_key(name: str) -> int:
    """
    Derive a stable signed 64-bit advisory lock key from a name.

    Python's hash() is salted per process, so a digest is used instead.

    Args:
        name: Lock name, e.g. "vote-session-lifecycle"

    Returns:
        int: Key in PostgreSQL bigint range
    """
    digest = hashlib.sha256(name.encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "big", signed=True)


async def acquire_xact_lock(session: AsyncSession, name: str) -> bool:
    """
    Block until the named advisory lock is held for the current transaction.

    Dialects without advisory locks are skipped; SQLite already allows a
    single writer at a time.

    Args:
        session: Async database session (a transaction is begun if needed)
        name: Lock name

    Returns:
        bool: True if a lock was taken, False if the dialect has none
    """
    dialect = session.get_bind().dialect.name
    if dialect != "postgresql":
        logger.debug(
            f"{__name__}:acquire_xact_lock - No advisory locks on {dialect}, skipping",
            extra={"lock_name": name},
        )
        return False

    await session.execute(
        text("SELECT pg_advisory_xact_lock(:key)"),
        {"key": lock_key(name)},
    )
    logger.debug(
        f"{__name__}:acquire_xact_lock - Lock held",
        extra={"lock_name": name},
    )
    return True
