from typing import List, Optional

from sqlalchemy import desc
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from quizapp.exceptions import StoreError, UnauthorizedError, ValidationError
from quizapp.log import get_logger
from quizapp.model.results import Result
from quizapp.schema.result_schema import ResultCreate, ResultOut

log = get_logger(__name__)

ALL_TECHNOLOGIES = "all"


def result_to_out(result: Result) -> ResultOut:
    return ResultOut(
        id=result.id,
        user=result.user,
        title=result.title,
        technology=result.technology,
        level=result.level,
        totalQuestions=result.total_questions,
        correct=result.correct,
        wrong=result.wrong,
        score=result.score,
        createdAt=result.created_at,
    )


def create_result_logic(db: Session, request: ResultCreate, user_id: Optional[str]) -> ResultOut:
    """Record a finished attempt for the caller.

    Args:
        db (Session): Database session
        request (ResultCreate): Attempt totals and the quiz fields to copy
        user_id (Optional[str]): Caller identity

    Raises:
        UnauthorizedError: When there is no caller
        ValidationError: When a required field is missing or the title is blank
        StoreError: When the insert fails

    Returns:
        ResultOut: The stored result
    """
    if not user_id:
        raise UnauthorizedError()

    if (
        not request.technology
        or not request.level
        or request.totalQuestions is None
        or request.correct is None
    ):
        raise ValidationError("Missing fields")

    title = (request.title or "").strip()
    if not title:
        raise ValidationError("Missing title")

    if request.wrong is not None:
        wrong = request.wrong
    else:
        wrong = max(0, request.totalQuestions - request.correct)

    result = Result(
        user=user_id,
        title=title,
        technology=request.technology,
        level=request.level,
        total_questions=request.totalQuestions,
        correct=request.correct,
        wrong=wrong,
    )
    try:
        db.add(result)
        db.commit()
        db.refresh(result)
    except SQLAlchemyError as e:
        db.rollback()
        log.error("Create result error: %s", e)
        raise StoreError("Server Error", str(e)) from e
    return result_to_out(result)


def list_results_logic(
    db: Session, user_id: Optional[str], technology: Optional[str] = None
) -> List[ResultOut]:
    """The caller's results, newest first.

    `technology` narrows the list unless it is empty or "all" in any case.
    """
    if not user_id:
        raise UnauthorizedError()

    try:
        query = db.query(Result).filter(Result.user == user_id)
        if technology and technology.lower() != ALL_TECHNOLOGIES:
            query = query.filter(Result.technology == technology)
        items = query.order_by(desc(Result.created_at), desc(Result.id)).all()
    except SQLAlchemyError as e:
        log.error("List results error: %s", e)
        raise StoreError("Server Error", str(e)) from e
    return [result_to_out(r) for r in items]
