from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from app.db.base import Base


def make_engine(database_url: str) -> Engine:
    engine = create_engine(database_url, pool_pre_ping=True)
    # tabloları oluştur
    Base.metadata.create_all(bind=engine)
    return engine


def make_session_factory(database_url: str) -> sessionmaker:
    return sessionmaker(bind=make_engine(database_url), autoflush=False, autocommit=False)
