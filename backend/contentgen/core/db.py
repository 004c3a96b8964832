import logging

from sqlalchemy import Engine
from sqlmodel import Session, SQLModel, create_engine, select

from contentgen.core.config import settings
from contentgen.models import Template

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATES: list[dict] = [
    {
        "name": "Blog Post",
        "description": "Long-form article with an introduction, sections and a conclusion.",
        "content_type": "blog",
        "system_prompt": (
            "You are an experienced blog writer. Write an engaging post about {topic} "
            "titled {title}, with clear sections and a short conclusion."
        ),
        "placeholders": ["title", "topic"],
    },
    {
        "name": "Social Media Post",
        "description": "Short post suited to a social feed.",
        "content_type": "social",
        "system_prompt": (
            "You write concise social media posts. Announce {topic} for {audience} "
            "in at most three sentences."
        ),
        "placeholders": ["topic", "audience"],
    },
    {
        "name": "Product Description",
        "description": "Marketing copy for a product page.",
        "content_type": "product",
        "system_prompt": (
            "You are a copywriter. Describe {product} and its key benefits {benefits} "
            "for an online store listing."
        ),
        "placeholders": ["product", "benefits"],
    },
    {
        "name": "Newsletter",
        "description": "Email newsletter with a headline and short updates.",
        "content_type": "email",
        "system_prompt": (
            "You write friendly email newsletters. Summarize {updates} for {audience} "
            "with a headline and a call to action."
        ),
        "placeholders": ["updates", "audience"],
    },
]


def get_engine(database_uri: str | None = None) -> Engine | None:
    uri = database_uri or settings.SQLALCHEMY_DATABASE_URI
    if not uri:
        return None
    connect_args = {"check_same_thread": False} if uri.startswith("sqlite") else {}
    return create_engine(uri, pool_pre_ping=True, connect_args=connect_args)


def init_db(engine: Engine, *, seed_templates: bool | None = None) -> None:
    # Tables should be created with migrations in production deployments
    SQLModel.metadata.create_all(engine)

    if seed_templates is None:
        seed_templates = settings.SEED_DEFAULT_TEMPLATES
    if not seed_templates:
        return

    with Session(engine) as session:
        existing = session.exec(select(Template)).first()
        if existing:
            return
        for template_in in DEFAULT_TEMPLATES:
            session.add(Template(**template_in))
        session.commit()
        logger.info("Seeded %s default templates", len(DEFAULT_TEMPLATES))
