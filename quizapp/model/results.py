from sqlalchemy import Column, String, DateTime, Integer
from quizapp.database.base_class import Base
from datetime import datetime


class Result(Base):
    __tablename__ = "results"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    user = Column(String(64), nullable=False, index=True)

    # copied from the quiz at attempt time
    title = Column(String(255), nullable=False)
    technology = Column(String(100), nullable=False, index=True)
    level = Column(String(50), nullable=False)

    total_questions = Column(Integer, nullable=False)
    correct = Column(Integer, nullable=False, default=0)
    wrong = Column(Integer, nullable=False, default=0)
    score = Column(Integer, nullable=True)
    created_at = Column(DateTime, default=datetime.now, index=True)
