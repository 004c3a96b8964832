from typing import Any

from fastapi import APIRouter

from contentgen.api.deps import CurrentUser, LLMDep, StorageDep
from contentgen.generation import service
from contentgen.models import (
    Acknowledgement,
    ContentGenerate,
    ContentRegenerate,
    ContentUpdate,
    GeneratedContentPublic,
    GenerationResult,
)

router = APIRouter()


@router.get("/project/{project_id}", response_model=list[GeneratedContentPublic])
def read_project_content(project_id: int, storage: StorageDep, current_user: CurrentUser) -> Any:
    return storage.list_project_content(project_id)


@router.get("/{id}", response_model=GeneratedContentPublic | None)
def read_content(id: int, storage: StorageDep, current_user: CurrentUser) -> Any:
    return storage.get_content(id)


@router.post("/generate", response_model=GenerationResult)
async def generate(
    *,
    storage: StorageDep,
    llm: LLMDep,
    current_user: CurrentUser,
    content_in: ContentGenerate
) -> Any:
    """
    Generate text for one of the caller's projects and store it as a new draft.
    """
    _, text = await service.generate_content(
        storage=storage, llm=llm, caller_id=current_user.id, content_in=content_in
    )
    return GenerationResult(success=True, content=text)


@router.patch("/{id}", response_model=Acknowledgement)
def update(
    *,
    id: int,
    storage: StorageDep,
    current_user: CurrentUser,
    content_in: ContentUpdate
) -> Any:
    service.update_content(
        storage=storage, caller_id=current_user.id, content_id=id, content_in=content_in
    )
    return Acknowledgement(success=True)


@router.post("/{id}/regenerate", response_model=GenerationResult)
async def regenerate(
    *,
    id: int,
    storage: StorageDep,
    llm: LLMDep,
    current_user: CurrentUser,
    regen_in: ContentRegenerate
) -> Any:
    """
    Replace the stored text with a fresh generation and bump its version.
    """
    _, text = await service.regenerate_content(
        storage=storage, llm=llm, caller_id=current_user.id, content_id=id, regen_in=regen_in
    )
    return GenerationResult(success=True, content=text)
