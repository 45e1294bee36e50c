"""Clinical note endpoints."""

from fastapi import APIRouter, status

from app.dependencies import ActingUser, Repository
from app.schemas.clinical_notes import ClinicalNote, ClinicalNoteUpdate

router = APIRouter()


@router.put(
    "/{note_id}",
    response_model=ClinicalNote,
    status_code=status.HTTP_200_OK,
    summary="Update clinical note",
)
async def update_note(
    note_id: int,
    data: ClinicalNoteUpdate,
    repository: Repository,
    user_id: ActingUser,
) -> ClinicalNote:
    """
    Edit a clinical note, e.g. finalize, amend or sign it.

    Args:
        note_id: Clinical note ID
        data: Fields to change
        repository: Clinical repository
        user_id: Acting user

    Returns:
        Updated note

    Raises:
        NotFoundException: If clinical note not found
    """
    return await repository.update_clinical_note(note_id, data, user_id)
