from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from quizapp.database import get_db
from quizapp.router.dependencies import get_optional_user_id
from quizapp.router.api.logics.result_logic import create_result_logic, list_results_logic
from quizapp.schema.result_schema import ResultCreate, ResultResponse, ResultsResponse

router = APIRouter()


@router.post("", response_model=ResultResponse, status_code=status.HTTP_201_CREATED)
async def create_result(
    request: ResultCreate,
    db: Session = Depends(get_db),
    user_id: Optional[str] = Depends(get_optional_user_id),
):
    """Save a finished attempt for the signed-in user.

    Args:
        request (ResultCreate): quiz title, technology, level and the totals
        db (Session, optional): Database session. Defaults to Depends(get_db).
        user_id (Optional[str], optional): Caller identity. Defaults to Depends(get_optional_user_id).

    Returns:
        ResultResponse: the stored result
    """
    result = create_result_logic(db, request, user_id)
    return ResultResponse(message="Result Created", result=result)


@router.get("", response_model=ResultsResponse, status_code=status.HTTP_200_OK)
async def list_results(
    technology: Optional[str] = None,
    db: Session = Depends(get_db),
    user_id: Optional[str] = Depends(get_optional_user_id),
):
    """The signed-in user's results, newest first. `technology=all` lists everything."""
    return ResultsResponse(results=list_results_logic(db, user_id, technology))
