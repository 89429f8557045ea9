from sqlmodel import SQLModel, Session, create_engine

from core.config import settings

connect_args = {}
if settings.DATABASE_URL.startswith("sqlite"):
    # The sync get_session dependency runs in FastAPI's threadpool
    connect_args = {"check_same_thread": False}

engine = create_engine(settings.DATABASE_URL, echo=settings.DATABASE_ECHO, connect_args=connect_args)

def create_db_and_tables(bind=None):
    # Import so the table is registered on SQLModel.metadata
    import models  # noqa: F401

    SQLModel.metadata.create_all(bind or engine)

def get_session():
    with Session(engine) as session:
        yield session
