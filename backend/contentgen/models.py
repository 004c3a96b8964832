from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import StrictInt, field_validator
from sqlalchemy import JSON, DateTime, Text
from sqlmodel import Field, SQLModel


def get_datetime_utc() -> datetime:
    return datetime.now(timezone.utc)


class UserRole(str, Enum):
    user = "user"
    admin = "admin"


class ContentStatus(str, Enum):
    draft = "draft"
    published = "published"
    archived = "archived"


# Shared properties
class UserBase(SQLModel):
    open_id: str = Field(unique=True, index=True, max_length=64)
    name: str | None = Field(default=None)
    email: str | None = Field(default=None, max_length=320)
    login_method: str | None = Field(default=None, max_length=64)
    role: UserRole = Field(default=UserRole.user)


# Profile fields taken from a verified session, role only when set explicitly
class UserUpsert(SQLModel):
    open_id: str = Field(min_length=1, max_length=64)
    name: str | None = None
    email: str | None = None
    login_method: str | None = None
    role: UserRole | None = None
    last_signed_in: datetime | None = None


# Database model, database table inferred from class name
class User(UserBase, table=True):
    id: int | None = Field(default=None, primary_key=True)
    created_at: datetime | None = Field(
        default_factory=get_datetime_utc,
        sa_type=DateTime(timezone=True),  # type: ignore
    )
    updated_at: datetime | None = Field(
        default_factory=get_datetime_utc,
        sa_type=DateTime(timezone=True),  # type: ignore
        sa_column_kwargs={"onupdate": get_datetime_utc},
    )
    last_signed_in: datetime | None = Field(
        default_factory=get_datetime_utc,
        sa_type=DateTime(timezone=True),  # type: ignore
    )


# Properties to return via API, id is always required
class UserPublic(UserBase):
    id: int
    created_at: datetime | None = None
    last_signed_in: datetime | None = None


# Generic acknowledgement returned by mutations
class Acknowledgement(SQLModel):
    success: bool = True


class GenerationResult(Acknowledgement):
    content: str


class ProjectBase(SQLModel):
    name: str = Field(min_length=1, max_length=255)
    description: str | None = Field(default=None, sa_type=Text)
    content_type: str = Field(min_length=1, max_length=64)


class ProjectCreate(ProjectBase):
    pass


class Project(ProjectBase, table=True):
    id: int | None = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    created_at: datetime | None = Field(
        default_factory=get_datetime_utc,
        sa_type=DateTime(timezone=True),  # type: ignore
    )
    updated_at: datetime | None = Field(
        default_factory=get_datetime_utc,
        sa_type=DateTime(timezone=True),  # type: ignore
        sa_column_kwargs={"onupdate": get_datetime_utc},
    )


class ProjectPublic(ProjectBase):
    id: int
    user_id: int
    created_at: datetime | None = None
    updated_at: datetime | None = None


class TemplateBase(SQLModel):
    name: str = Field(max_length=255)
    description: str | None = Field(default=None, sa_type=Text)
    content_type: str = Field(max_length=64, index=True)
    system_prompt: str = Field(sa_type=Text)
    placeholders: list[str] = Field(default_factory=list, sa_type=JSON)  # substitution tokens
    is_public: bool = True


class Template(TemplateBase, table=True):
    id: int | None = Field(default=None, primary_key=True)
    created_at: datetime | None = Field(
        default_factory=get_datetime_utc,
        sa_type=DateTime(timezone=True),  # type: ignore
    )
    updated_at: datetime | None = Field(
        default_factory=get_datetime_utc,
        sa_type=DateTime(timezone=True),  # type: ignore
        sa_column_kwargs={"onupdate": get_datetime_utc},
    )


class TemplatePublic(TemplateBase):
    id: int
    created_at: datetime | None = None


class GeneratedContentBase(SQLModel):
    title: str = Field(min_length=1, max_length=255)
    content: str = Field(sa_type=Text)
    prompt: str = Field(sa_type=Text)
    status: ContentStatus = Field(default=ContentStatus.draft)
    version: int = Field(default=1)


class GeneratedContent(GeneratedContentBase, table=True):
    id: int | None = Field(default=None, primary_key=True)
    project_id: int = Field(foreign_key="project.id", nullable=False, index=True)
    template_id: int | None = Field(default=None, foreign_key="template.id")
    created_at: datetime | None = Field(
        default_factory=get_datetime_utc,
        sa_type=DateTime(timezone=True),  # type: ignore
    )
    updated_at: datetime | None = Field(
        default_factory=get_datetime_utc,
        sa_type=DateTime(timezone=True),  # type: ignore
        sa_column_kwargs={"onupdate": get_datetime_utc},
    )


class GeneratedContentPublic(GeneratedContentBase):
    id: int
    project_id: int
    template_id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


def reject_explicit_null(v: Any) -> Any:
    # Optional fields may be omitted, never sent as null
    if v is None:
        raise ValueError("may be omitted but not null")
    return v


# Request bodies for the generation procedures
class ContentGenerate(SQLModel):
    project_id: StrictInt
    title: str = Field(min_length=1, max_length=255)
    prompt: str = Field(min_length=1)
    template_id: StrictInt | None = None
    tone: str | None = None
    length: str | None = None

    @field_validator("template_id", "tone", "length", mode="before")
    @classmethod
    def no_explicit_null(cls, v: Any) -> Any:
        return reject_explicit_null(v)


# Properties to receive on update, all are optional
class ContentUpdate(SQLModel):
    content: str | None = None
    title: str | None = Field(default=None, min_length=1, max_length=255)
    status: ContentStatus | None = None

    @field_validator("content", "title", "status", mode="before")
    @classmethod
    def no_explicit_null(cls, v: Any) -> Any:
        return reject_explicit_null(v)


class ContentRegenerate(SQLModel):
    prompt: str = Field(min_length=1)
    tone: str | None = None
    length: str | None = None

    @field_validator("tone", "length", mode="before")
    @classmethod
    def no_explicit_null(cls, v: Any) -> Any:
        return reject_explicit_null(v)
