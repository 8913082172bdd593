from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from quizapp.database import get_db
from quizapp.router.dependencies import get_optional_user_id
from quizapp.router.api.logics.quiz_logic import (
    create_quiz_logic, delete_quiz_logic, get_quiz_logic, list_quizzes_logic,
    submit_quiz_logic, update_quiz_logic,
)
from quizapp.schema.quiz_schema import (
    MessageResponse, QuizCreate, QuizResponse, QuizSubmission, QuizSummaryResponse,
    QuizUpdate, QuizzesResponse, SubmissionResponse,
)

router = APIRouter()


@router.post("", response_model=QuizResponse, status_code=status.HTTP_201_CREATED)
async def create_quiz(
    request: QuizCreate,
    db: Session = Depends(get_db),
    user_id: Optional[str] = Depends(get_optional_user_id),
):
    """Create a quiz. The caller, if signed in, is recorded as its creator.

    Args:
        request (QuizCreate): title, technology, level and the questions
        db (Session, optional): Database session. Defaults to Depends(get_db).
        user_id (Optional[str], optional): Caller identity. Defaults to Depends(get_optional_user_id).

    Returns:
        QuizResponse: the created quiz, correct answers included
    """
    quiz = create_quiz_logic(db, request, user_id)
    return QuizResponse(message="Quiz created successfully", quiz=quiz)


@router.get("", response_model=QuizzesResponse, status_code=status.HTTP_200_OK)
async def get_all_quizzes(
    technology: Optional[str] = None,
    level: Optional[str] = None,
    db: Session = Depends(get_db),
):
    """List active quizzes, newest first. Answers are never included."""
    quizzes = list_quizzes_logic(db, technology, level)
    return QuizzesResponse(count=len(quizzes), quizzes=quizzes)


@router.get("/{quiz_id}", response_model=QuizSummaryResponse, status_code=status.HTTP_200_OK)
async def get_quiz(quiz_id: int, db: Session = Depends(get_db)):
    return QuizSummaryResponse(quiz=get_quiz_logic(db, quiz_id))


@router.post("/{quiz_id}/submit", response_model=SubmissionResponse, status_code=status.HTTP_200_OK)
async def submit_quiz(
    quiz_id: int,
    submission: QuizSubmission,
    db: Session = Depends(get_db),
    user_id: Optional[str] = Depends(get_optional_user_id),
):
    """Grade the submitted answers and return the breakdown.

    The quiz's attempt counter goes up on every call. When the caller is
    known (token or `userId` in the body) the outcome is also saved to
    their results.
    """
    return SubmissionResponse(results=submit_quiz_logic(db, quiz_id, submission, user_id))


@router.put("/{quiz_id}", response_model=QuizResponse, status_code=status.HTTP_200_OK)
async def update_quiz(quiz_id: int, request: QuizUpdate, db: Session = Depends(get_db)):
    quiz = update_quiz_logic(db, quiz_id, request)
    return QuizResponse(message="Quiz updated successfully", quiz=quiz)


@router.delete("/{quiz_id}", response_model=MessageResponse, status_code=status.HTTP_200_OK)
async def delete_quiz(quiz_id: int, db: Session = Depends(get_db)):
    delete_quiz_logic(db, quiz_id)
    return MessageResponse(message="Quiz deleted successfully")
