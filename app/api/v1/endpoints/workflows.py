"""Workflow template endpoints."""

from fastapi import APIRouter, status

from app.core.exceptions import NotFoundException
from app.dependencies import ActingUser, Repository
from app.schemas.workflows import WorkflowTemplate

router = APIRouter()


@router.get(
    "/",
    response_model=list[WorkflowTemplate],
    status_code=status.HTTP_200_OK,
    summary="List workflow templates",
)
async def list_workflows(repository: Repository) -> list[WorkflowTemplate]:
    """List all workflow templates."""
    return await repository.get_all_workflows()


@router.get(
    "/{workflow_id}",
    response_model=WorkflowTemplate,
    status_code=status.HTTP_200_OK,
    summary="Get workflow template",
)
async def get_workflow(workflow_id: int, repository: Repository) -> WorkflowTemplate:
    """Get a workflow template by ID."""
    return await repository.get_workflow_by_id(workflow_id)


@router.post(
    "/{workflow_id}/use",
    response_model=WorkflowTemplate,
    status_code=status.HTTP_200_OK,
    summary="Record workflow usage",
)
async def use_workflow(
    workflow_id: int,
    repository: Repository,
    user_id: ActingUser,
) -> WorkflowTemplate:
    """
    Count one use of a workflow template.

    Raises:
        NotFoundException: If workflow not found
    """
    workflow = await repository.increment_workflow_usage(workflow_id, user_id)
    if workflow is None:
        raise NotFoundException("Workflow not found")
    return workflow
