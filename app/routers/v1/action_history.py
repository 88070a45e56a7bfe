# app/routers/v1/action_history.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.utils.database import get_session
from app.schemas.action_history import (
    ActionHistoryClearResponse,
    ActionHistoryCreate,
    ActionHistoryList,
    ActionHistoryOut,
    ActionReplayResponse,
)
from app.schemas.common import ErrorResponse
from app.services import action_store, undo_engine
from app.services.action_recorder import record_action
from app.routers.auth import get_current_user_id

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/action-history", tags=["action-history"])

_REPLAY_ERRORS = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


# ─────────────────────────────────────────
#  GET /api/action-history
# ─────────────────────────────────────────

@router.get("", response_model=ActionHistoryList, summary="Action history, most recent first")
async def list_action_history(
    session: AsyncSession = Depends(get_session),
    user_id: int = Depends(get_current_user_id),
    limit: int = Query(settings.ACTION_HISTORY_DEFAULT_LIMIT, ge=1, le=settings.ACTION_HISTORY_MAX_LIMIT),
    offset: int = Query(0, ge=0),
    workspace_id: Optional[int] = Query(None, description="Only actions scoped to this workspace"),
):
    rows = await action_store.list_actions(
        session,
        user_id,
        workspace_id=workspace_id,
        limit=limit,
        offset=offset,
    )
    return [action_store.to_action_out(r, first, last) for r, first, last in rows]


# ─────────────────────────────────────────
#  POST /api/action-history
# ─────────────────────────────────────────

@router.post(
    "",
    response_model=ActionHistoryOut,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
    summary="Record an action for undo/redo",
)
async def create_action(
    payload: ActionHistoryCreate,
    session: AsyncSession = Depends(get_session),
    user_id: int = Depends(get_current_user_id),
):
    row = await record_action(
        session,
        user_id=user_id,
        action_type=payload.action_type,
        action_description=payload.action_description,
        item_type=payload.item_type,
        item_id=payload.item_id,
        before_data=payload.before_data,
        after_data=payload.after_data,
        workspace_id=payload.workspace_id,
    )
    record, first, last = await action_store.get_with_owner(session, row.id, user_id)
    return action_store.to_action_out(record, first, last)


# ─────────────────────────────────────────
#  GET /api/action-history/{action_id}
# ─────────────────────────────────────────

@router.get(
    "/{action_id}",
    response_model=ActionHistoryOut,
    responses={404: {"model": ErrorResponse}},
    summary="Single action",
)
async def get_action(
    action_id: int,
    session: AsyncSession = Depends(get_session),
    user_id: int = Depends(get_current_user_id),
):
    record, first, last = await action_store.get_with_owner(session, action_id, user_id)
    return action_store.to_action_out(record, first, last)


# ─────────────────────────────────────────
#  POST /api/action-history/{action_id}/undo|redo
# ─────────────────────────────────────────

@router.post(
    "/{action_id}/undo",
    response_model=ActionReplayResponse,
    responses=_REPLAY_ERRORS,
    summary="Apply the action's before state",
)
async def undo_action(
    action_id: int,
    session: AsyncSession = Depends(get_session),
    user_id: int = Depends(get_current_user_id),
):
    await undo_engine.undo(session, action_id, user_id)
    record, first, last = await action_store.get_with_owner(session, action_id, user_id)
    return ActionReplayResponse(
        message="Action undone successfully",
        action=action_store.to_action_out(record, first, last),
    )


@router.post(
    "/{action_id}/redo",
    response_model=ActionReplayResponse,
    responses=_REPLAY_ERRORS,
    summary="Apply the action's after state",
)
async def redo_action(
    action_id: int,
    session: AsyncSession = Depends(get_session),
    user_id: int = Depends(get_current_user_id),
):
    await undo_engine.redo(session, action_id, user_id)
    record, first, last = await action_store.get_with_owner(session, action_id, user_id)
    return ActionReplayResponse(
        message="Action redone successfully",
        action=action_store.to_action_out(record, first, last),
    )


# ─────────────────────────────────────────
#  DELETE /api/action-history
# ─────────────────────────────────────────

@router.delete("", response_model=ActionHistoryClearResponse, summary="Clear action history")
async def clear_action_history(
    session: AsyncSession = Depends(get_session),
    user_id: int = Depends(get_current_user_id),
    older_than: Optional[int] = Query(None, alias="olderThan", ge=0, description="Only delete actions older than N days"),
):
    deleted = await action_store.delete_many(session, user_id, older_than_days=older_than)
    await session.commit()
    logger.info(f"[ActionHistory] cleared {deleted} record(s) for user {user_id} (olderThan={older_than})")
    return ActionHistoryClearResponse(
        message="Action history cleared successfully",
        deleted=deleted,
    )
