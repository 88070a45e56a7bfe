# app/models/action_history.py
from sqlalchemy import CheckConstraint, Column, Integer, String, Text, DateTime, Index
from sqlalchemy.sql import func
from app.utils.database import Base

ITEM_TYPES = ("task", "project", "note", "workspace", "user")


class ActionHistory(Base):
    __tablename__ = "action_history"
    __table_args__ = (
        Index("idx_action_history_user", "user_id", "created_at"),
        Index("idx_action_history_item", "item_type", "item_id"),
        CheckConstraint(
            "item_type IN (" + ", ".join(f"'{t}'" for t in ITEM_TYPES) + ")",
            name="ck_action_history_item_type",
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, nullable=False)

    action_type = Column(String(100), nullable=False)
    action_description = Column(String(255), nullable=False)
    item_type = Column(String(20), nullable=False)
    item_id = Column(Integer, nullable=False)

    # serialized JSON objects; NULL means "no snapshot", "{}" an empty one
    before_data = Column(Text, nullable=True)
    after_data = Column(Text, nullable=True)

    workspace_id = Column(Integer, nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
