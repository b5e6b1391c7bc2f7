# samyukta/db/session.py

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from samyukta.core.config import settings


def _engine_kwargs(url: str) -> dict:
    # SQLite connections are used from FastAPI's threadpool
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True}


engine = create_engine(settings.DATABASE_URL, **_engine_kwargs(settings.DATABASE_URL))

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        # Always closed, even if the endpoint raised.
        db.close()
