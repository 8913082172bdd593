from sqlalchemy import Column, String, Boolean, DateTime, Integer, JSON
from quizapp.database.base_class import Base
from datetime import datetime


class Quiz(Base):
    __tablename__ = "quizzes"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    # opaque caller identity, no FK: users live with the token issuer
    created_by = Column(String(64), nullable=True)

    # attributes
    title = Column(String(255), nullable=False)
    technology = Column(String(100), nullable=False, index=True)
    level = Column(String(50), nullable=False, index=True)
    # embedded question documents: id, question, options, correctAnswer, explanation
    questions = Column(JSON, nullable=False, default=list)
    is_active = Column(Boolean, nullable=False, default=True, index=True)
    total_attempts = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=datetime.now, index=True)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)
