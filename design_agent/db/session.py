import logging
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase

logger = logging.getLogger(__name__)

DEFAULT_URL = "sqlite:///./design_agent.db"

class Base(DeclarativeBase):
    pass

def normalize_url(url: str | None) -> str:
    url = url or DEFAULT_URL
    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql+psycopg://", 1)
    elif url.startswith("postgresql://"):
        url = url.replace("postgresql://", "postgresql+psycopg://", 1)
    return url

def make_engine(database_url: str | None) -> Engine:
    url = normalize_url(database_url)
    if database_url is None:
        logger.warning("DATABASE_URL not configured - running in demo mode on %s", url)

    connect_args = {}
    if url.startswith("sqlite"):
        connect_args = {"check_same_thread": False}

    return create_engine(
        url,
        connect_args=connect_args,
        pool_pre_ping=True,
        future=True,
    )

def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
        future=True,
    )

def backend_name(engine: Engine) -> str:
    names = {"sqlite": "SQLite", "postgresql": "PostgreSQL", "mysql": "MySQL"}
    return names.get(engine.dialect.name, engine.dialect.name)

def init_db(engine: Engine):
    from design_agent.models import user, project, design, training_data  # noqa: F401
    Base.metadata.create_all(bind=engine)
