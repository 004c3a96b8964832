from typing import Any

from fastapi import APIRouter

from contentgen.api.deps import CurrentUser, StorageDep
from contentgen.generation import service
from contentgen.models import Acknowledgement, ProjectCreate, ProjectPublic

router = APIRouter()


@router.post("/", response_model=Acknowledgement)
def create_new_project(
    *,
    storage: StorageDep,
    current_user: CurrentUser,
    project_in: ProjectCreate
) -> Any:
    service.create_project(storage=storage, owner_id=current_user.id, project_in=project_in)
    return Acknowledgement(success=True)


@router.get("/", response_model=list[ProjectPublic])
def read_projects(storage: StorageDep, current_user: CurrentUser) -> Any:
    return storage.list_user_projects(current_user.id)


@router.get("/{id}", response_model=ProjectPublic | None)
def read_project(id: int, storage: StorageDep, current_user: CurrentUser) -> Any:
    return storage.get_project(id)
