# app/services/entity_mutators.py
"""Per-entity adapters that write a snapshot back onto its stored row.

Each adapter owns one table and one patch schema. The dispatch registry maps
an ``item_type`` tag to its adapter; tags without an adapter (``workspace``,
``user``) raise ``UnsupportedType`` instead of being skipped.
"""
from typing import Any, Dict, Type

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import TargetNotFound, UnsupportedType, ValidationError
from app.models.note import Note
from app.models.project import Project
from app.models.task import Task
from app.schemas.snapshots import NotePatch, ProjectPatch, SnapshotPatch, TaskPatch
from app.utils.database import Base


class EntityMutator:
    item_type: str
    model: Type[Base]
    patch_schema: Type[SnapshotPatch]

    def validate(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        """Check a snapshot against the column whitelist and coerce its values."""
        # snapshots may carry the primary key; it is never patched
        payload = {k: v for k, v in fields.items() if k != "id"}
        try:
            patch = self.patch_schema.model_validate(payload)
        except PydanticValidationError as e:
            errors = [
                {"loc": list(err["loc"]), "msg": err["msg"]}
                for err in e.errors(include_url=False)
            ]
            raise ValidationError(
                f"invalid {self.item_type} snapshot",
                detail={"errors": errors},
            ) from e
        return patch.model_dump(exclude_unset=True)

    async def apply_patch(
        self,
        session: AsyncSession,
        item_id: int,
        fields: Dict[str, Any],
    ) -> None:
        values = self.validate(fields)
        pk = self.model.id

        row = (await session.execute(
            select(pk).where(pk == item_id).with_for_update()
        )).scalar_one_or_none()
        if row is None:
            raise TargetNotFound(
                f"{self.item_type} {item_id} not found",
                detail={"item_type": self.item_type, "item_id": item_id},
            )

        if not values:
            return

        await session.execute(
            update(self.model).where(pk == item_id).values(**values)
        )


class TaskMutator(EntityMutator):
    item_type = "task"
    model = Task
    patch_schema = TaskPatch


class ProjectMutator(EntityMutator):
    item_type = "project"
    model = Project
    patch_schema = ProjectPatch


class NoteMutator(EntityMutator):
    item_type = "note"
    model = Note
    patch_schema = NotePatch


REGISTRY: Dict[str, EntityMutator] = {}


def register(mutator: EntityMutator) -> None:
    if mutator.item_type in REGISTRY:
        raise ValueError(f"mutator already registered for {mutator.item_type}")
    REGISTRY[mutator.item_type] = mutator


def resolve(item_type: str) -> EntityMutator:
    mutator = REGISTRY.get(item_type)
    if mutator is None:
        raise UnsupportedType(item_type)
    return mutator


register(TaskMutator())
register(ProjectMutator())
register(NoteMutator())
