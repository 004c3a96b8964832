import logging
from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from contentgen import crud
from contentgen.core.db import get_engine
from contentgen.errors import StorageUnavailable
from contentgen.models import (
    GeneratedContent,
    Project,
    ProjectCreate,
    Template,
    User,
    UserUpsert,
)

logger = logging.getLogger(__name__)


class Storage:
    """
    Typed accessor over the users, projects, generated content and templates tables.

    The engine is optional. Reads degrade to ``None`` or ``[]`` when it is missing
    or the database errors; writes raise ``StorageUnavailable``.
    """

    def __init__(self, engine: Engine | None = None):
        self.engine = engine

    @classmethod
    def from_settings(cls) -> "Storage":
        return cls(get_engine())

    @property
    def available(self) -> bool:
        return self.engine is not None

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        if self.engine is None:
            raise StorageUnavailable()
        with Session(self.engine, expire_on_commit=False) as session:
            yield session

    def dispose(self) -> None:
        if self.engine is not None:
            self.engine.dispose()

    def _read(self, label: str, fn, default: Any, **kwargs: Any) -> Any:
        if self.engine is None:
            logger.warning("[Database] Cannot %s: database not available", label)
            return default
        try:
            with self.session() as session:
                return fn(session=session, **kwargs)
        except SQLAlchemyError as exc:
            logger.warning("[Database] Failed to %s: %s", label, exc)
            return default

    def _write(self, label: str, fn, **kwargs: Any) -> Any:
        if self.engine is None:
            logger.warning("[Database] Cannot %s: database not available", label)
            raise StorageUnavailable()
        with self.session() as session:
            try:
                return fn(session=session, **kwargs)
            except SQLAlchemyError as exc:
                session.rollback()
                logger.error("[Database] Failed to %s: %s", label, exc)
                raise StorageUnavailable(f"Failed to {label}") from exc

    # Users

    def upsert_user(self, user_in: UserUpsert) -> User:
        return self._write("upsert user", crud.upsert_user, user_in=user_in)

    def get_user_by_open_id(self, open_id: str) -> User | None:
        return self._read("get user", crud.get_user_by_open_id, None, open_id=open_id)

    def get_user_by_id(self, user_id: int) -> User | None:
        return self._read("get user", crud.get_user_by_id, None, user_id=user_id)

    # Projects

    def list_user_projects(self, user_id: int) -> list[Project]:
        return self._read("list projects", crud.get_user_projects, [], user_id=user_id)

    def get_project(self, project_id: int) -> Project | None:
        return self._read("get project", crud.get_project_by_id, None, project_id=project_id)

    def create_project(self, project_in: ProjectCreate, owner_id: int) -> Project:
        return self._write(
            "create project", crud.create_project, project_in=project_in, owner_id=owner_id
        )

    # Generated content

    def list_project_content(self, project_id: int) -> list[GeneratedContent]:
        return self._read(
            "list content", crud.get_project_content, [], project_id=project_id
        )

    def get_content(self, content_id: int) -> GeneratedContent | None:
        return self._read("get content", crud.get_content_by_id, None, content_id=content_id)

    def create_content(
        self,
        *,
        project_id: int,
        title: str,
        content: str,
        prompt: str,
        template_id: int | None = None,
    ) -> GeneratedContent:
        return self._write(
            "create content",
            crud.create_generated_content,
            project_id=project_id,
            title=title,
            content=content,
            prompt=prompt,
            template_id=template_id,
        )

    def update_content(self, content_id: int, updates: dict[str, Any]) -> GeneratedContent | None:
        return self._write(
            "update content",
            crud.update_generated_content,
            content_id=content_id,
            updates=updates,
        )

    # Templates

    def list_templates(self, content_type: str | None = None) -> list[Template]:
        return self._read("list templates", crud.get_templates, [], content_type=content_type)
