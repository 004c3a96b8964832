from typing import Any

from fastapi import APIRouter

from contentgen.api.deps import StorageDep
from contentgen.models import TemplatePublic

router = APIRouter()


@router.get("/", response_model=list[TemplatePublic])
def read_templates(storage: StorageDep) -> Any:
    return storage.list_templates()


@router.get("/type/{content_type}", response_model=list[TemplatePublic])
def read_templates_by_type(content_type: str, storage: StorageDep) -> Any:
    return storage.list_templates(content_type=content_type)
