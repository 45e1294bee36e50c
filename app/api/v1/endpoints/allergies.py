"""Allergy endpoints."""

from fastapi import APIRouter, status

from app.dependencies import ActingUser, Repository

router = APIRouter()


@router.delete(
    "/{allergy_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove allergy",
)
async def remove_allergy(
    allergy_id: int,
    repository: Repository,
    user_id: ActingUser,
) -> None:
    """
    Remove an allergy from a patient's chart.

    Raises:
        NotFoundException: If allergy not found
    """
    await repository.remove_allergy(allergy_id, user_id)
