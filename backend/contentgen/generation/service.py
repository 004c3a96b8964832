import logging

from fastapi.concurrency import run_in_threadpool

from contentgen.errors import BadRequest, Forbidden, NotFound
from contentgen.generation.llm_client import LLMClient
from contentgen.generation.prompts import build_system_prompt
from contentgen.models import (
    ContentGenerate,
    ContentRegenerate,
    ContentUpdate,
    GeneratedContent,
    Project,
    ProjectCreate,
)
from contentgen.storage import Storage

logger = logging.getLogger(__name__)


def assert_owns_project(*, storage: Storage, caller_id: int, project_id: int) -> Project:
    project = storage.get_project(project_id)
    if not project or project.user_id != caller_id:
        logger.info("User %s denied access to project %s", caller_id, project_id)
        raise Forbidden("Project not found or access denied")
    return project


def assert_owns_content(
    *, storage: Storage, caller_id: int, content_id: int
) -> tuple[GeneratedContent, Project]:
    content = storage.get_content(content_id)
    if not content:
        raise NotFound("Content not found")
    project = storage.get_project(content.project_id)
    if not project or project.user_id != caller_id:
        logger.info("User %s denied access to content %s", caller_id, content_id)
        raise Forbidden("Access denied")
    return content, project


def create_project(*, storage: Storage, owner_id: int, project_in: ProjectCreate) -> Project:
    if not project_in.name or not project_in.content_type:
        raise BadRequest("Project name and content type are required")
    # The owner always comes from the caller's identity
    project_in = ProjectCreate(
        name=project_in.name,
        description=project_in.description or None,
        content_type=project_in.content_type,
    )
    return storage.create_project(project_in, owner_id=owner_id)


async def generate_content(
    *, storage: Storage, llm: LLMClient, caller_id: int, content_in: ContentGenerate
) -> tuple[GeneratedContent, str]:
    # Storage calls are blocking, keep them off the event loop
    project = await run_in_threadpool(
        assert_owns_project,
        storage=storage,
        caller_id=caller_id,
        project_id=content_in.project_id,
    )

    system_prompt = build_system_prompt(
        project.content_type, tone=content_in.tone, length=content_in.length
    )
    generated_text = await llm.complete(system_prompt, content_in.prompt)

    content = await run_in_threadpool(
        storage.create_content,
        project_id=project.id,
        title=content_in.title,
        content=generated_text,
        prompt=content_in.prompt,
        template_id=content_in.template_id,
    )
    return content, generated_text


def update_content(
    *, storage: Storage, caller_id: int, content_id: int, content_in: ContentUpdate
) -> GeneratedContent:
    """
    Apply only the fields present on the request. Omitted fields keep
    their stored values and the version counter is never touched here.
    """
    content, _ = assert_owns_content(storage=storage, caller_id=caller_id, content_id=content_id)
    updates = content_in.model_dump(exclude_unset=True)
    if not updates:
        return content
    updated = storage.update_content(content_id, updates)
    if updated is None:
        raise NotFound("Content not found")
    return updated


async def regenerate_content(
    *,
    storage: Storage,
    llm: LLMClient,
    caller_id: int,
    content_id: int,
    regen_in: ContentRegenerate,
) -> tuple[GeneratedContent, str]:
    content, project = await run_in_threadpool(
        assert_owns_content, storage=storage, caller_id=caller_id, content_id=content_id
    )

    system_prompt = build_system_prompt(
        project.content_type, tone=regen_in.tone, length=regen_in.length
    )
    generated_text = await llm.complete(system_prompt, regen_in.prompt)

    # Read-then-write: concurrent regenerations of one row may lose an increment
    updated = await run_in_threadpool(
        storage.update_content,
        content_id,
        {
            "content": generated_text,
            "prompt": regen_in.prompt,
            "version": content.version + 1,
        },
    )
    if updated is None:
        raise NotFound("Content not found")
    return updated, generated_text
