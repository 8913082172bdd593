from typing import Generator

from sqlalchemy.orm import Session, sessionmaker

from quizapp.database.session import SQLALCHEMY_DATABASE_URL, get_engine
from quizapp.log import get_logger

log = get_logger(__name__)


ENGINE = get_engine(SQLALCHEMY_DATABASE_URL)
SessionLocal = sessionmaker(
    bind=ENGINE,
    autoflush=False,
    expire_on_commit=False,
    future=True,
)


def get_db() -> Generator[Session, None, None]:  # pragma: no cover
    """
    Returns a generator that yields a database session

    Yields:
        Session: A database session object, closed once the request is done.
    """
    log.debug("getting database session")
    db = SessionLocal()
    try:
        yield db
    finally:
        log.debug("closing database session")
        db.close()
