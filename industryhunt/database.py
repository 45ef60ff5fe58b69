from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from industryhunt.core import config


def _engine_options(database_url: str) -> dict:
    if database_url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True}


engine = create_engine(
    config.DATABASE_URL,
    echo=config.DATABASE_ECHO,
    **_engine_options(config.DATABASE_URL),
)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

Base = declarative_base()


def create_tables() -> None:
    # Import for side effects: registers every table on Base.metadata.
    from industryhunt.models import (  # noqa: F401
        assessment,
        employer,
        job,
        mentor,
        mentor_expertise,
        project,
        session,
        skill,
        student,
        user,
    )

    Base.metadata.create_all(bind=engine)
