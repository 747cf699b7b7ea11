import logging

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, declarative_base

from schooldir.config import Settings

logger = logging.getLogger(__name__)

Base = declarative_base()


def create_db_engine(settings: Settings) -> Engine:
    """
    Пул соединений создаётся один раз на процесс (lifespan приложения)
    и переиспользуется всеми запросами.
    """
    url = settings.require_database_url()
    connect_args = {}
    if settings.database_sslmode:
        connect_args["sslmode"] = settings.database_sslmode
    return create_engine(url, pool_pre_ping=True, connect_args=connect_args)


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_schema(engine: Engine) -> None:
    # Импорт регистрирует таблицы в Base.metadata
    from schooldir import models  # noqa: F401

    with engine.begin() as conn:
        conn.execute(text("CREATE EXTENSION IF NOT EXISTS postgis"))
    Base.metadata.create_all(bind=engine)
    logger.info("Database schema is ready")


def ping(engine: Engine) -> bool:
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError:
        logger.warning("Database ping failed", exc_info=True)
        return False
    return True


def get_db(request: Request):
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
