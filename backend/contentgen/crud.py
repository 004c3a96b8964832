from typing import Any

from sqlmodel import Session, select

from contentgen.core.config import settings
from contentgen.models import (
    ContentStatus,
    GeneratedContent,
    Project,
    ProjectCreate,
    Template,
    User,
    UserRole,
    UserUpsert,
    get_datetime_utc,
)


def get_user_by_open_id(*, session: Session, open_id: str) -> User | None:
    statement = select(User).where(User.open_id == open_id)
    return session.exec(statement).first()


def get_user_by_id(*, session: Session, user_id: int) -> User | None:
    return session.get(User, user_id)


def upsert_user(*, session: Session, user_in: UserUpsert) -> User:
    """
    Insert a user by external login id or refresh the fields that were supplied.
    Fields left unset on ``user_in`` keep their stored value.
    """
    user_data = user_in.model_dump(exclude_unset=True, exclude={"open_id"})
    if user_in.role is None:
        user_data.pop("role", None)
        if settings.OWNER_OPEN_ID and user_in.open_id == settings.OWNER_OPEN_ID:
            user_data["role"] = UserRole.admin
    if not user_data.get("last_signed_in"):
        user_data["last_signed_in"] = get_datetime_utc()

    db_user = get_user_by_open_id(session=session, open_id=user_in.open_id)
    if db_user:
        db_user.sqlmodel_update(user_data)
    else:
        db_user = User(open_id=user_in.open_id, **user_data)
    session.add(db_user)
    session.commit()
    session.refresh(db_user)
    return db_user


def get_user_projects(*, session: Session, user_id: int) -> list[Project]:
    statement = select(Project).where(Project.user_id == user_id).order_by(Project.id)
    return list(session.exec(statement).all())


def get_project_by_id(*, session: Session, project_id: int) -> Project | None:
    return session.get(Project, project_id)


def create_project(*, session: Session, project_in: ProjectCreate, owner_id: int) -> Project:
    db_project = Project.model_validate(project_in, update={"user_id": owner_id})
    session.add(db_project)
    session.commit()
    session.refresh(db_project)
    return db_project


def get_project_content(*, session: Session, project_id: int) -> list[GeneratedContent]:
    statement = (
        select(GeneratedContent)
        .where(GeneratedContent.project_id == project_id)
        .order_by(GeneratedContent.id)
    )
    return list(session.exec(statement).all())


def create_generated_content(
    *,
    session: Session,
    project_id: int,
    title: str,
    content: str,
    prompt: str,
    template_id: int | None = None,
) -> GeneratedContent:
    db_content = GeneratedContent(
        project_id=project_id,
        template_id=template_id,
        title=title,
        content=content,
        prompt=prompt,
        status=ContentStatus.draft,
        version=1,
    )
    session.add(db_content)
    session.commit()
    session.refresh(db_content)
    return db_content


def get_content_by_id(*, session: Session, content_id: int) -> GeneratedContent | None:
    return session.get(GeneratedContent, content_id)


def update_generated_content(
    *, session: Session, content_id: int, updates: dict[str, Any]
) -> GeneratedContent | None:
    db_content = session.get(GeneratedContent, content_id)
    if not db_content:
        return None
    if not updates:
        return db_content
    db_content.sqlmodel_update(updates)
    session.add(db_content)
    session.commit()
    session.refresh(db_content)
    return db_content


def get_templates(*, session: Session, content_type: str | None = None) -> list[Template]:
    statement = select(Template).where(Template.is_public == True)  # noqa: E712
    if content_type is not None:
        statement = statement.where(Template.content_type == content_type)
    return list(session.exec(statement.order_by(Template.id)).all())
