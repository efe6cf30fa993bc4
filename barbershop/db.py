# barbershop/db.py

import logging

from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, Session, create_engine

from .config import DATABASE_URL

logger = logging.getLogger(__name__)


def make_engine(url: str = DATABASE_URL) -> Engine:
    connect_args = {}
    if url.startswith("sqlite"):
        # required for SQLite when sessions run in worker threads
        connect_args["check_same_thread"] = False
    return create_engine(url, echo=False, connect_args=connect_args)


# Engine = connection to the database
engine = make_engine()


def init_db(bind: Engine = engine) -> None:
    # importing registers the tables on SQLModel.metadata
    from . import models  # noqa: F401

    SQLModel.metadata.create_all(bind)
    logger.info("Database tables ready at %s", bind.url)


# One session per data-access operation; objects stay usable after commit
def open_session(bind: Engine = engine) -> Session:
    return Session(bind, expire_on_commit=False)
