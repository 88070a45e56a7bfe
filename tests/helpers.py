from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.action_history import ActionHistory


async def reload(session: AsyncSession, model, pk):
    """Read a row straight from the database, bypassing stale identity-map state."""
    stmt = select(model).where(model.id == pk).execution_options(populate_existing=True)
    return (await session.execute(stmt)).scalar_one_or_none()


async def history_rows(session: AsyncSession, user_id: int):
    stmt = (
        select(ActionHistory)
        .where(ActionHistory.user_id == user_id)
        .order_by(ActionHistory.id)
        .execution_options(populate_existing=True)
    )
    return list((await session.execute(stmt)).scalars().all())
