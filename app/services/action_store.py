# app/services/action_store.py
from datetime import timedelta
from typing import List, Optional, Sequence

from sqlalchemy import Row, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import NotFound
from app.models.action_history import ActionHistory
from app.models.user import User
from app.schemas.action_history import ActionHistoryOut
from app.services.snapshot_codec import decode_snapshot


def _most_recent_first(stmt):
    # created_at has second resolution on MySQL; id breaks ties in insert order
    return stmt.order_by(ActionHistory.created_at.desc(), ActionHistory.id.desc())


async def append(session: AsyncSession, record: ActionHistory) -> int:
    session.add(record)
    await session.flush()
    return record.id


async def get(session: AsyncSession, action_id: int, user_id: int) -> ActionHistory:
    """Point lookup scoped to the owner. Other users' records are reported as missing."""
    row = (await session.execute(
        select(ActionHistory).where(
            ActionHistory.id == action_id,
            ActionHistory.user_id == user_id,
        )
    )).scalar_one_or_none()
    if row is None:
        raise NotFound("Action not found", detail={"action_id": action_id})
    return row


async def get_with_owner(session: AsyncSession, action_id: int, user_id: int) -> Row:
    row = (await session.execute(
        select(ActionHistory, User.first_name, User.last_name)
        .outerjoin(User, User.id == ActionHistory.user_id)
        .where(
            ActionHistory.id == action_id,
            ActionHistory.user_id == user_id,
        )
    )).one_or_none()
    if row is None:
        raise NotFound("Action not found", detail={"action_id": action_id})
    return row


async def list_actions(
    session: AsyncSession,
    user_id: int,
    *,
    workspace_id: Optional[int] = None,
    limit: int = 50,
    offset: int = 0,
) -> Sequence[Row]:
    stmt = (
        select(ActionHistory, User.first_name, User.last_name)
        .outerjoin(User, User.id == ActionHistory.user_id)
        .where(ActionHistory.user_id == user_id)
    )
    if workspace_id is not None:
        stmt = stmt.where(ActionHistory.workspace_id == workspace_id)

    stmt = _most_recent_first(stmt).limit(limit).offset(offset)
    return (await session.execute(stmt)).all()


async def recent_ids(session: AsyncSession, user_id: int, limit: int) -> List[int]:
    stmt = _most_recent_first(
        select(ActionHistory.id).where(ActionHistory.user_id == user_id)
    ).limit(limit)
    return list((await session.execute(stmt)).scalars().all())


async def delete_except(session: AsyncSession, user_id: int, keep_ids: List[int]) -> int:
    stmt = delete(ActionHistory).where(ActionHistory.user_id == user_id)
    if keep_ids:
        stmt = stmt.where(ActionHistory.id.notin_(keep_ids))
    result = await session.execute(stmt.execution_options(synchronize_session=False))
    return result.rowcount or 0


async def delete_many(
    session: AsyncSession,
    user_id: int,
    *,
    older_than_days: Optional[int] = None,
) -> int:
    stmt = delete(ActionHistory).where(ActionHistory.user_id == user_id)
    if older_than_days is not None:
        # created_at is stamped by the database clock, so the cutoff is too
        now = (await session.execute(select(func.now()))).scalar_one()
        cutoff = now - timedelta(days=older_than_days)
        stmt = stmt.where(ActionHistory.created_at < cutoff)
    result = await session.execute(stmt.execution_options(synchronize_session=False))
    return result.rowcount or 0


def to_action_out(
    record: ActionHistory,
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
) -> ActionHistoryOut:
    return ActionHistoryOut(
        id=record.id,
        user_id=record.user_id,
        action_type=record.action_type,
        action_description=record.action_description,
        item_type=record.item_type,
        item_id=record.item_id,
        before_data=decode_snapshot(record.before_data),
        after_data=decode_snapshot(record.after_data),
        workspace_id=record.workspace_id,
        created_at=record.created_at,
        first_name=first_name,
        last_name=last_name,
    )
