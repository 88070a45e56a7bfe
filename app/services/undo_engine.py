# app/services/undo_engine.py
"""Replays a recorded snapshot onto its target entity.

One call runs Fetch -> Validate -> Dispatch -> Apply -> Commit. Apply and
commit share one transaction: on any failure it is rolled back and the caller
gets a single ``UndoFailed``/``RedoFailed`` with the original error chained.
History records are only read here, never written, so undo and redo do not
add entries of their own.
"""
import asyncio
import logging
from dataclasses import dataclass
from typing import Optional, Type

from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.errors import (
    ActionHistoryError,
    NoAfterSnapshotAvailable,
    NoSnapshotAvailable,
    RedoFailed,
    ReplayFailed,
    UndoFailed,
)
from app.models.action_history import ActionHistory
from app.services import action_store
from app.services.entity_mutators import resolve
from app.services.snapshot_codec import decode_snapshot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReplayDirection:
    name: str
    snapshot_field: str
    missing_error: Type[ActionHistoryError]
    failed_error: Type[ReplayFailed]


UNDO = ReplayDirection("undo", "before_data", NoSnapshotAvailable, UndoFailed)
REDO = ReplayDirection("redo", "after_data", NoAfterSnapshotAvailable, RedoFailed)


async def replay(
    session: AsyncSession,
    action_id: int,
    user_id: int,
    direction: ReplayDirection,
    timeout: Optional[float] = None,
) -> ActionHistory:
    if timeout is None:
        timeout = settings.ACTION_REPLAY_TIMEOUT_SECONDS

    # fetch + validate
    record = await action_store.get(session, action_id, user_id)
    raw_snapshot = getattr(record, direction.snapshot_field)
    if raw_snapshot is None:
        raise direction.missing_error()

    # dispatch; legacy rows may predate record-time type checks
    mutator = resolve(record.item_type)
    item_type, item_id = record.item_type, record.item_id

    try:
        snapshot = decode_snapshot(raw_snapshot)
        await asyncio.wait_for(
            mutator.apply_patch(session, item_id, snapshot),
            timeout=timeout,
        )
        await session.commit()
    except Exception as e:
        await session.rollback()
        logger.exception(
            f"[ActionHistory] {direction.name} of action {action_id} "
            f"({item_type}:{item_id}) failed: {e!r}"
        )
        raise direction.failed_error() from e

    logger.info(f"[ActionHistory] {direction.name} of action {action_id} applied to {item_type}:{item_id}")
    return record


async def undo(session: AsyncSession, action_id: int, user_id: int) -> ActionHistory:
    return await replay(session, action_id, user_id, UNDO)


async def redo(session: AsyncSession, action_id: int, user_id: int) -> ActionHistory:
    return await replay(session, action_id, user_id, REDO)
