from catalog.database.base import Base
from catalog.database.engine import build_engine, engine
from catalog.database.session import SessionLocal, build_session_factory

__all__ = ["Base", "SessionLocal", "build_engine", "build_session_factory", "engine"]
