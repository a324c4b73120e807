from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from catalog.database.engine import engine


def build_session_factory(bind: Engine) -> sessionmaker:
    # Loaded rows are handed across worker threads after commit, so keep them readable.
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        bind=bind,
    )


SessionLocal = build_session_factory(engine)


__all__ = ["SessionLocal", "build_session_factory"]
