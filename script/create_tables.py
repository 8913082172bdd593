# create_tables.py
from sqlalchemy import inspect

from quizapp.database.base_class import Base
from quizapp.database.db import ENGINE
from quizapp.model import quizzes, results  # noqa: F401  registers the tables


Base.metadata.create_all(bind=ENGINE)
print("Tables created.")

inspector = inspect(ENGINE)
print("Existing tables:", inspector.get_table_names())
