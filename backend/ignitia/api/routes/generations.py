import uuid
from typing import Any

from fastapi import APIRouter

from ignitia import crud
from ignitia.api.deps import CurrentUser, SessionDep
from ignitia.core.errors import NotFound
from ignitia.schemas import DeleteResult, GenerationCreate, GenerationPublic

router = APIRouter()


@router.post("", response_model=GenerationPublic)
def create_generation(
    *, session: SessionDep, current_user: CurrentUser, generation_in: GenerationCreate
) -> Any:
    """
    Save a reviewed generation for the current user.
    """
    return crud.create_generation(
        session=session, generation_in=generation_in, owner_id=current_user.id
    )


@router.get("", response_model=list[GenerationPublic])
def read_generations(session: SessionDep, current_user: CurrentUser) -> Any:
    """
    List the current user's generations, newest first.
    """
    return crud.list_generations(session=session, owner_id=current_user.id)


@router.delete("/{id}", response_model=DeleteResult)
def delete_generation(id: uuid.UUID, session: SessionDep, current_user: CurrentUser) -> Any:
    deleted = crud.delete_generation(
        session=session, owner_id=current_user.id, generation_id=id
    )
    if not deleted:
        raise NotFound("Generation not found")
    return DeleteResult(success=True)
