from pydantic import BaseModel
from typing import Any, Optional, List, Union
from datetime import datetime


################
### Question ###
################
class QuestionIn(BaseModel):
    # presence is checked by the quiz logic so the error names the question
    id: Optional[str] = None
    question: Optional[str] = None
    options: Optional[List[str]] = None
    correctAnswer: Optional[str] = None
    explanation: Optional[str] = None


class QuestionSummary(BaseModel):
    """Question as shown to quiz takers."""
    id: str
    question: str
    options: List[str]


class QuestionOut(QuestionSummary):
    correctAnswer: str
    explanation: Optional[str] = None


############
### Quiz ###
############
class QuizCreate(BaseModel):
    title: Optional[str] = None
    technology: Optional[str] = None
    level: Optional[str] = None
    questions: Optional[List[QuestionIn]] = None


class QuizUpdate(BaseModel):
    title: Optional[str] = None
    technology: Optional[str] = None
    level: Optional[str] = None
    questions: Optional[List[QuestionIn]] = None
    isActive: Optional[bool] = None
    totalAttempts: Optional[int] = None


class QuizSummaryOut(BaseModel):
    id: int
    title: str
    technology: str
    level: str
    questions: List[QuestionSummary]
    createdBy: Optional[str] = None
    isActive: bool
    totalAttempts: int
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None


class QuizOut(QuizSummaryOut):
    questions: List[QuestionOut]


class QuizResponse(BaseModel):
    success: bool = True
    message: str
    quiz: QuizOut


class QuizSummaryResponse(BaseModel):
    success: bool = True
    quiz: QuizSummaryOut


class QuizzesResponse(BaseModel):
    success: bool = True
    count: int
    quizzes: List[QuizSummaryOut]


class MessageResponse(BaseModel):
    success: bool = True
    message: str


##################
### Submission ###
##################
class AnswerIn(BaseModel):
    questionId: Union[str, int]
    # any JSON value; only an exact string match is graded correct
    selectedAnswer: Any = None


class QuizSubmission(BaseModel):
    answers: Optional[List[AnswerIn]] = None
    userId: Optional[str] = None


class QuestionResult(BaseModel):
    questionId: str
    question: str
    userAnswer: Any
    correctAnswer: str
    isCorrect: bool
    explanation: Optional[str] = None


class SubmissionOut(BaseModel):
    quizTitle: str
    technology: str
    level: str
    totalQuestions: int
    correct: int
    wrong: int
    score: int
    detailedResults: List[QuestionResult]


class SubmissionResponse(BaseModel):
    success: bool = True
    results: SubmissionOut
