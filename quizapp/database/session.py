from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from quizapp.config import settings


def get_engine(database_url: str, echo=False, **kwargs) -> Engine:
    """
    Creates and returns a SQLAlchemy Engine object for connecting to a database.

    Parameters:
        database_url (str): The URL of the database to connect to.
        echo (bool): Whether or not to enable echoing of SQL statements.
        Defaults to False.

    Returns:
        Engine: A SQLAlchemy Engine object representing the database connection.
    """
    if database_url.startswith("sqlite"):
        # request handlers run in a threadpool
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    else:
        kwargs.setdefault("pool_size", 5)
        kwargs.setdefault("max_overflow", 0)
        kwargs.setdefault("pool_timeout", 30)
        kwargs.setdefault("pool_recycle", 1800)
    return create_engine(database_url, echo=echo, pool_pre_ping=True, future=True, **kwargs)


SQLALCHEMY_DATABASE_URL = settings.DATABASE_URL
