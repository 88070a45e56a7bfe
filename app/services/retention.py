# app/services/retention.py
import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.services import action_store

logger = logging.getLogger(__name__)


async def prune(
    session: AsyncSession,
    user_id: int,
    limit: Optional[int] = None,
) -> int:
    """Keep only the user's ``limit`` most recent records; return how many were deleted.

    Runs on the caller's transaction and does not commit.
    """
    if limit is None:
        limit = settings.ACTION_HISTORY_RETENTION_LIMIT
    if limit < 0:
        raise ValueError("retention limit must be >= 0")

    keep_ids = await action_store.recent_ids(session, user_id, limit)
    if len(keep_ids) < limit:
        return 0

    deleted = await action_store.delete_except(session, user_id, keep_ids)
    if deleted:
        logger.info(f"[ActionHistory] pruned {deleted} record(s) for user {user_id}")
    return deleted
