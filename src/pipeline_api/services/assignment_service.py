"""Assignment and task services."""

from sqlalchemy.ext.asyncio import AsyncSession

from src.pipeline_api.core.exceptions import ConflictError, NotFoundError
from src.pipeline_api.core.logging import get_logger
from src.pipeline_api.models import Assignment, Task
from src.pipeline_api.models.base import touch
from src.pipeline_api.repositories import AssignmentRepository, TaskRepository
from src.pipeline_api.schemas.assignment import (
    AssignmentCreate,
    AssignmentFields,
    AssignmentUpdate,
    TaskCreate,
    TaskFields,
    TaskUpdate,
)
from src.pipeline_api.services.common import commit_or_conflict, ensure_unique_keys

logger = get_logger(__name__)


def _build_tasks(payload: list[TaskCreate], assignment_id: str) -> list[Task]:
    ensure_unique_keys((t.task_id for t in payload), "Task", f"assignment {assignment_id}")
    return [Task(**t.model_dump()) for t in payload]


class AssignmentService:
    """Assignment aggregate service - an assignment owns its tasks."""

    def __init__(self, assignment_repo: AssignmentRepository, session: AsyncSession):
        self.assignment_repo = assignment_repo
        self.session = session

    async def list_assignments(
        self,
        srid: str,
        application: str | None = None,
        status: str | None = None,
    ) -> list[Assignment]:
        """List assignments in scope. Blank filters are ignored."""
        return await self.assignment_repo.list_by_srid(
            srid, {"application": application, "status": status}
        )

    async def get_assignment(self, srid: str, assignment_id: str) -> Assignment:
        """Get an assignment by natural key.

        Raises:
            NotFoundError: If no such assignment exists in scope
        """
        assignment = await self.assignment_repo.get_by_assignment_id(srid, assignment_id)
        if assignment is None:
            raise NotFoundError(f"Assignment not found with id: {assignment_id}")
        return assignment

    async def create_assignment(self, srid: str, data: AssignmentCreate) -> Assignment:
        """Create an assignment together with its initial tasks.

        Raises:
            ConflictError: If the assignment_id is taken in scope, or the
                payload repeats a task_id
        """
        if await self.assignment_repo.exists_by_assignment_id(srid, data.assignment_id):
            raise ConflictError(
                f"Assignment with id {data.assignment_id} already exists in srid {srid}"
            )
        tasks = _build_tasks(data.tasks, data.assignment_id)

        assignment = Assignment(**data.model_dump(exclude={"tasks"}), srid=srid, tasks=tasks)
        self.assignment_repo.add(assignment)
        await commit_or_conflict(
            self.session,
            f"Assignment with id {data.assignment_id} already exists in srid {srid}",
        )
        logger.info(
            "Assignment created",
            srid=srid,
            assignment_id=assignment.assignment_id,
            task_count=len(tasks),
        )
        return assignment

    async def update_assignment(
        self, srid: str, assignment_id: str, data: AssignmentUpdate
    ) -> Assignment:
        """Overwrite the mutable fields; replace tasks when a list is supplied.

        Raises:
            NotFoundError: If no such assignment exists in scope
            ConflictError: If the new task list repeats a task_id
        """
        assignment = await self.get_assignment(srid, assignment_id)

        for field in AssignmentFields.model_fields:
            setattr(assignment, field, getattr(data, field))
        touch(assignment)

        if data.tasks is not None:
            tasks = _build_tasks(data.tasks, assignment_id)
            await self.assignment_repo.replace_tasks(assignment, tasks)

        await commit_or_conflict(
            self.session, f"Task ids must be unique within assignment {assignment_id}"
        )
        return assignment

    async def delete_assignment(self, srid: str, assignment_id: str) -> None:
        """Delete an assignment and, by cascade, its tasks.

        Raises:
            NotFoundError: If no such assignment exists in scope
        """
        assignment = await self.get_assignment(srid, assignment_id)
        await self.assignment_repo.delete(assignment)
        await self.session.commit()
        logger.info("Assignment deleted", srid=srid, assignment_id=assignment_id)


class TaskService:
    """Tasks addressed through their parent assignment."""

    def __init__(
        self,
        assignment_repo: AssignmentRepository,
        task_repo: TaskRepository,
        session: AsyncSession,
    ):
        self.assignment_repo = assignment_repo
        self.task_repo = task_repo
        self.session = session

    async def _get_assignment(self, srid: str, assignment_id: str) -> Assignment:
        assignment = await self.assignment_repo.get_by_assignment_id(srid, assignment_id)
        if assignment is None:
            raise NotFoundError(f"Assignment not found with id: {assignment_id}")
        return assignment

    async def _get_task(self, assignment: Assignment, task_id: str) -> Task:
        task = await self.task_repo.get_by_task_id(assignment.id, task_id)
        if task is None:
            raise NotFoundError(f"Task not found with id: {task_id}")
        return task

    async def list_tasks(self, srid: str, assignment_id: str) -> list[Task]:
        # tasks arrive with the assignment, ordered by created_at
        assignment = await self._get_assignment(srid, assignment_id)
        return list(assignment.tasks)

    async def get_task(self, srid: str, assignment_id: str, task_id: str) -> Task:
        """Get a task; a missing assignment is reported before a missing task."""
        assignment = await self._get_assignment(srid, assignment_id)
        return await self._get_task(assignment, task_id)

    async def create_task(self, srid: str, assignment_id: str, data: TaskCreate) -> Task:
        """Attach a new task to an assignment.

        Raises:
            NotFoundError: If the assignment does not exist in scope
            ConflictError: If the task_id is taken within the assignment
        """
        assignment = await self._get_assignment(srid, assignment_id)
        detail = f"Task with id {data.task_id} already exists in assignment {assignment_id}"
        if await self.task_repo.exists_by_task_id(assignment.id, data.task_id):
            raise ConflictError(detail)

        task = Task(**data.model_dump())
        assignment.tasks.append(task)
        await commit_or_conflict(self.session, detail)
        return task

    async def update_task(
        self, srid: str, assignment_id: str, task_id: str, data: TaskUpdate
    ) -> Task:
        """Overwrite a task's mutable fields. The path task_id is authoritative."""
        assignment = await self._get_assignment(srid, assignment_id)
        task = await self._get_task(assignment, task_id)

        for field in TaskFields.model_fields:
            setattr(task, field, getattr(data, field))
        touch(task)

        await self.session.commit()
        return task

    async def delete_task(self, srid: str, assignment_id: str, task_id: str) -> None:
        assignment = await self._get_assignment(srid, assignment_id)
        task = await self._get_task(assignment, task_id)
        await self.task_repo.delete(task)
        await self.session.commit()
