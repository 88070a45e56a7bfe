# app/services/action_recorder.py
import logging
from typing import Any, Dict, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import ValidationError
from app.models.action_history import ITEM_TYPES, ActionHistory
from app.services import action_store, retention
from app.services.entity_mutators import resolve
from app.services.snapshot_codec import encode_snapshot

logger = logging.getLogger(__name__)


async def record_action(
    session: AsyncSession,
    *,
    user_id: int,
    action_type: str,
    action_description: str,
    item_type: str,
    item_id: int,
    before_data: Optional[Dict[str, Any]] = None,
    after_data: Optional[Dict[str, Any]] = None,
    workspace_id: Optional[int] = None,
    retention_limit: Optional[int] = None,
) -> ActionHistory:
    """Append one history record for ``user_id`` and trim the user's history.

    Unsupported item types and snapshots that do not fit the item's columns are
    rejected here, so every stored record can be replayed later. Pruning runs
    in a savepoint of the insert transaction; if it fails the insert still
    commits.
    """
    if item_type not in ITEM_TYPES:
        raise ValidationError(
            f"invalid item_type: {item_type}",
            detail={"allowed": list(ITEM_TYPES)},
        )
    mutator = resolve(item_type)

    if before_data is not None:
        mutator.validate(before_data)
    if after_data is not None:
        mutator.validate(after_data)

    row = ActionHistory(
        user_id=user_id,
        action_type=action_type,
        action_description=action_description,
        item_type=item_type,
        item_id=item_id,
        before_data=encode_snapshot(before_data),
        after_data=encode_snapshot(after_data),
        workspace_id=workspace_id,
    )

    try:
        await action_store.append(session, row)

        try:
            async with session.begin_nested():
                await retention.prune(session, user_id, retention_limit)
        except Exception:
            logger.exception(f"[ActionHistory] pruning failed for user {user_id}; keeping new record")

        await session.commit()
    except Exception:
        await session.rollback()
        raise

    await session.refresh(row)
    logger.info(
        f"[ActionHistory] recorded action {row.id} "
        f"({action_type} {item_type}:{item_id}) for user {user_id}"
    )
    return row
