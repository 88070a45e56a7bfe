# app/schemas/action_history.py
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ActionHistoryCreate(BaseModel):
    action_type: str = Field(..., min_length=1, max_length=100, examples=["update"])
    action_description: str = Field(..., min_length=1, max_length=255)
    # checked against the dispatch registry by the recorder, not here
    item_type: str = Field(..., examples=["task"])
    item_id: int
    before_data: Optional[Dict[str, Any]] = None
    after_data: Optional[Dict[str, Any]] = None
    workspace_id: Optional[int] = None


class ActionHistoryOut(BaseModel):
    id: int
    user_id: int
    action_type: str
    action_description: str
    item_type: str
    item_id: int
    before_data: Optional[Dict[str, Any]] = None
    after_data: Optional[Dict[str, Any]] = None
    workspace_id: Optional[int] = None
    created_at: datetime
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    model_config = ConfigDict(from_attributes=True)


class ActionReplayResponse(BaseModel):
    message: str
    action: ActionHistoryOut


class ActionHistoryClearResponse(BaseModel):
    message: str
    deleted: int


ActionHistoryList = List[ActionHistoryOut]
