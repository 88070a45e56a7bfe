# app/schemas/snapshots.py
"""Sparse patch schemas for the entity types that support undo/redo.

A snapshot is a partial column map. Only the keys a caller captured are
present, so every field is optional and callers dump with
``exclude_unset=True``. Columns that are NOT NULL in the database accept a
value but reject an explicit ``null``.
"""
from datetime import date
from typing import ClassVar, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SnapshotPatch(BaseModel):
    model_config = ConfigDict(extra="forbid")

    non_nullable_columns: ClassVar[tuple[str, ...]] = ()

    @field_validator("*")
    @classmethod
    def _reject_null_for_required_columns(cls, v, info):
        if v is None and info.field_name in cls.non_nullable_columns:
            raise ValueError(f"{info.field_name} may not be null")
        return v


class TaskPatch(SnapshotPatch):
    non_nullable_columns: ClassVar[tuple[str, ...]] = ("title", "status", "priority", "created_by", "position")

    title: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    due_date: Optional[date] = None
    status: Optional[Literal["todo", "in_progress", "done", "review", "cancelled", "archived"]] = None
    priority: Optional[Literal["low", "medium", "high"]] = None
    created_by: Optional[int] = None
    project_id: Optional[int] = None
    assigned_to: Optional[int] = None
    start_date: Optional[date] = None
    completion_date: Optional[date] = None
    estimated_hours: Optional[float] = Field(None, ge=0)
    actual_hours: Optional[float] = Field(None, ge=0)
    position: Optional[int] = None
    workspace_id: Optional[int] = None


class ProjectPatch(SnapshotPatch):
    non_nullable_columns: ClassVar[tuple[str, ...]] = ("name", "workspace_id", "created_by", "is_archived", "status")

    name: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    workspace_id: Optional[int] = None
    created_by: Optional[int] = None
    is_archived: Optional[bool] = None
    status: Optional[Literal["pending", "active", "completed", "archived"]] = None


class NotePatch(SnapshotPatch):
    non_nullable_columns: ClassVar[tuple[str, ...]] = ("title", "created_by")

    title: Optional[str] = Field(None, max_length=255)
    content: Optional[str] = None
    created_by: Optional[int] = None
    project_id: Optional[int] = None
    task_id: Optional[int] = None
    workspace_id: Optional[int] = None
