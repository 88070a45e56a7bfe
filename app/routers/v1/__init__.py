# app/routers/v1/__init__.py

from app.routers.v1.action_history import router as action_history_router

__all__ = [
    "action_history_router",
]
