"""Task endpoints."""

from fastapi import APIRouter, status

from app.dependencies import ActingUser, Repository
from app.schemas.tasks import Task, TaskCreate, TaskUpdate

router = APIRouter()


@router.post(
    "/",
    response_model=Task,
    status_code=status.HTTP_201_CREATED,
    summary="Create task",
)
async def create_task(
    data: TaskCreate,
    repository: Repository,
    user_id: ActingUser,
) -> Task:
    """Create a task, optionally linked to a patient."""
    return await repository.create_task(data, user_id)


@router.put(
    "/{task_id}",
    response_model=Task,
    status_code=status.HTTP_200_OK,
    summary="Update task",
)
async def update_task(
    task_id: int,
    data: TaskUpdate,
    repository: Repository,
    user_id: ActingUser,
) -> Task:
    """
    Update a task. Setting status to completed stamps the completion time.

    Raises:
        NotFoundException: If task not found
    """
    return await repository.update_task(task_id, data, user_id)
