"""Repositories for the Assignment aggregate."""

from collections.abc import Mapping
from uuid import UUID

from sqlmodel import select

from src.pipeline_api.models import Assignment, Task
from src.pipeline_api.repositories.base import BaseRepository


class AssignmentRepository(BaseRepository[Assignment]):
    """Repository for Assignment entity, keyed by (srid, assignment_id)."""

    model = Assignment
    filter_columns = {
        "application": Assignment.application,
        "status": Assignment.status,
    }

    async def get_by_assignment_id(self, srid: str, assignment_id: str) -> Assignment | None:
        """Get assignment by natural key within scope."""
        result = await self.session.execute(
            select(Assignment).where(
                Assignment.srid == srid,
                Assignment.assignment_id == assignment_id,
            )
        )
        return result.scalar_one_or_none()

    async def exists_by_assignment_id(self, srid: str, assignment_id: str) -> bool:
        """Check if an assignment with the given natural key exists in scope."""
        return await self.exists_where(
            Assignment.srid == srid, Assignment.assignment_id == assignment_id
        )

    async def list_by_srid(
        self, srid: str, filters: Mapping[str, str | None] | None = None
    ) -> list[Assignment]:
        """List assignments in scope, optionally narrowed by filters."""
        query = select(Assignment).where(Assignment.srid == srid)
        query = self.apply_filters(query, filters or {})
        query = query.order_by(Assignment.created_at, Assignment.id)  # type: ignore[arg-type]
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def replace_tasks(self, assignment: Assignment, tasks: list[Task]) -> None:
        """Swap the assignment's task collection for a fresh one.

        Existing tasks are orphan-deleted and flushed before the new ones are
        attached, so a reused task_id does not collide with its predecessor.
        """
        assignment.tasks.clear()
        await self.session.flush()
        assignment.tasks.extend(tasks)


class TaskRepository(BaseRepository[Task]):
    """Repository for Task entity, keyed by (assignment, task_id)."""

    model = Task

    async def get_by_task_id(self, assignment_pk: UUID, task_id: str) -> Task | None:
        """Get task by natural key within its assignment."""
        result = await self.session.execute(
            select(Task).where(Task.assignment_pk == assignment_pk, Task.task_id == task_id)
        )
        return result.scalar_one_or_none()

    async def exists_by_task_id(self, assignment_pk: UUID, task_id: str) -> bool:
        """Check if a task with the given natural key exists in the assignment."""
        return await self.exists_where(Task.assignment_pk == assignment_pk, Task.task_id == task_id)
