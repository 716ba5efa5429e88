from sqlmodel import SQLModel, create_engine

from ignitia.core.config import settings

connect_args = (
    {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}
)
engine = create_engine(settings.DATABASE_URL, connect_args=connect_args)


def init_db() -> None:
    # Tables should be created with Alembic migrations in a managed deployment.
    # Importing the models registers them on SQLModel.metadata.
    from ignitia import models  # noqa: F401

    SQLModel.metadata.create_all(engine)
