from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime


class ResultCreate(BaseModel):
    title: Optional[str] = None
    technology: Optional[str] = None
    level: Optional[str] = None
    totalQuestions: Optional[int] = None
    correct: Optional[int] = None
    wrong: Optional[int] = None


class ResultOut(BaseModel):
    id: int
    user: str
    title: str
    technology: str
    level: str
    totalQuestions: int
    correct: int
    wrong: int
    score: Optional[int] = None
    createdAt: Optional[datetime] = None


class ResultResponse(BaseModel):
    success: bool = True
    message: str
    result: ResultOut


class ResultsResponse(BaseModel):
    success: bool = True
    results: List[ResultOut]
