import math
from typing import Any, Dict, List, Optional, Tuple
from uuid import uuid4

from sqlalchemy import desc
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from quizapp.exceptions import NotFoundError, StoreError, ValidationError
from quizapp.log import get_logger
from quizapp.model.quizzes import Quiz
from quizapp.model.results import Result
from quizapp.schema.quiz_schema import (
    AnswerIn, QuestionIn, QuestionOut, QuestionResult, QuestionSummary,
    QuizCreate, QuizOut, QuizSubmission, QuizSummaryOut, QuizUpdate,
    SubmissionOut,
)

log = get_logger(__name__)

NOT_ANSWERED = "Not answered"


###############
### Helpers ###
###############
def validate_questions(questions: List[QuestionIn]) -> None:
    """Reject the first question missing its text, its options or its answer.

    Raises:
        ValidationError: naming the 1-based position of the bad question
    """
    for i, q in enumerate(questions):
        if not q.question or not q.options or len(q.options) < 2 or not q.correctAnswer:
            raise ValidationError(
                f"Question {i + 1} is invalid. Each question must have a question text, "
                "at least 2 options, and a correct answer"
            )


def build_question_documents(questions: List[QuestionIn]) -> List[Dict[str, Any]]:
    """Turn validated input questions into the embedded documents we store.

    Incoming ids are kept so answers keep matching across edits; missing or
    repeated ids get a fresh one.
    """
    documents = []
    seen = set()
    for q in questions:
        question_id = q.id if q.id and q.id not in seen else uuid4().hex
        seen.add(question_id)
        documents.append({
            "id": question_id,
            "question": q.question,
            "options": list(q.options),
            "correctAnswer": q.correctAnswer,
            "explanation": q.explanation,
        })
    return documents


def quiz_to_out(quiz: Quiz) -> QuizOut:
    return QuizOut(
        id=quiz.id,
        title=quiz.title,
        technology=quiz.technology,
        level=quiz.level,
        questions=[QuestionOut(**q) for q in quiz.questions or []],
        createdBy=quiz.created_by,
        isActive=quiz.is_active,
        totalAttempts=quiz.total_attempts,
        createdAt=quiz.created_at,
        updatedAt=quiz.updated_at,
    )


def quiz_to_summary(quiz: Quiz) -> QuizSummaryOut:
    """Same as quiz_to_out, minus the answers and explanations."""
    return QuizSummaryOut(
        id=quiz.id,
        title=quiz.title,
        technology=quiz.technology,
        level=quiz.level,
        questions=[
            QuestionSummary(id=q["id"], question=q["question"], options=q["options"])
            for q in quiz.questions or []
        ],
        createdBy=quiz.created_by,
        isActive=quiz.is_active,
        totalAttempts=quiz.total_attempts,
        createdAt=quiz.created_at,
        updatedAt=quiz.updated_at,
    )


def compute_score(correct: int, total_questions: int) -> int:
    """Percentage of correct answers, rounded half up. An empty quiz scores 0."""
    if total_questions <= 0:
        return 0
    return int(math.floor(correct / total_questions * 100 + 0.5))


def grade_answers(
    questions: List[Dict[str, Any]], answers: List[AnswerIn]
) -> Tuple[int, int, List[QuestionResult]]:
    """Grade answers against the stored questions, in quiz order.

    Answers are matched by question id; the first answer for an id wins.
    A question counts as correct only on an exact, case-sensitive match.

    Returns:
        Tuple[int, int, List[QuestionResult]]: correct count, wrong count and
        the per-question breakdown
    """
    by_question: Dict[str, AnswerIn] = {}
    for a in answers:
        by_question.setdefault(str(a.questionId), a)

    correct = 0
    wrong = 0
    details = []
    for q in questions:
        answer = by_question.get(str(q["id"]))
        is_correct = answer is not None and answer.selectedAnswer == q["correctAnswer"]
        if is_correct:
            correct += 1
        else:
            wrong += 1

        details.append(QuestionResult(
            questionId=str(q["id"]),
            question=q["question"],
            userAnswer=(answer.selectedAnswer if answer and answer.selectedAnswer else NOT_ANSWERED),
            correctAnswer=q["correctAnswer"],
            isCorrect=is_correct,
            explanation=q.get("explanation"),
        ))
    return correct, wrong, details


def _get_quiz_or_404(db: Session, quiz_id: int) -> Quiz:
    quiz = db.query(Quiz).filter(Quiz.id == quiz_id).first()
    if not quiz:
        raise NotFoundError("Quiz not found")
    return quiz


####################
### Quiz actions ###
####################
def create_quiz_logic(db: Session, request: QuizCreate, user_id: Optional[str]) -> QuizOut:
    """Validate and store a new quiz.

    Args:
        db (Session): Database session
        request (QuizCreate): Quiz fields and its questions
        user_id (Optional[str]): Caller identity, recorded as the creator if present

    Raises:
        ValidationError: When a required field or a question is missing or malformed
        StoreError: When the insert fails

    Returns:
        QuizOut: The created quiz, answers included
    """
    if not request.title or not request.technology or not request.level or not request.questions:
        raise ValidationError(
            "Please provide all required fields: title, technology, level, and questions"
        )
    validate_questions(request.questions)

    quiz = Quiz(
        title=request.title,
        technology=request.technology,
        level=request.level,
        questions=build_question_documents(request.questions),
        created_by=user_id,
        is_active=True,
        total_attempts=0,
    )
    try:
        db.add(quiz)
        db.commit()
        db.refresh(quiz)
    except SQLAlchemyError as e:
        db.rollback()
        log.error("Create quiz error: %s", e)
        raise StoreError("Error creating quiz", str(e)) from e

    log.info("Created quiz %s (%s/%s) with %d questions",
             quiz.id, quiz.technology, quiz.level, len(quiz.questions))
    return quiz_to_out(quiz)


def list_quizzes_logic(
    db: Session, technology: Optional[str] = None, level: Optional[str] = None
) -> List[QuizSummaryOut]:
    """Active quizzes, newest first, without answers."""
    try:
        query = db.query(Quiz).filter(Quiz.is_active == True)  # noqa: E712
        if technology:
            query = query.filter(Quiz.technology == technology)
        if level:
            query = query.filter(Quiz.level == level)
        quizzes = query.order_by(desc(Quiz.created_at), desc(Quiz.id)).all()
    except SQLAlchemyError as e:
        log.error("Get quizzes error: %s", e)
        raise StoreError("Error fetching quizzes", str(e)) from e
    return [quiz_to_summary(q) for q in quizzes]


def get_quiz_logic(db: Session, quiz_id: int) -> QuizSummaryOut:
    try:
        quiz = _get_quiz_or_404(db, quiz_id)
    except SQLAlchemyError as e:
        log.error("Get quiz error: %s", e)
        raise StoreError("Error fetching quiz", str(e)) from e
    return quiz_to_summary(quiz)


def update_quiz_logic(db: Session, quiz_id: int, request: QuizUpdate) -> QuizOut:
    """Apply a partial update to a quiz.

    Only fields present in the request body are touched. Each of them is held
    to the same constraints as on creation.

    Args:
        db (Session): Database session
        quiz_id (int): Quiz to update
        request (QuizUpdate): The fields to change

    Raises:
        ValidationError: When a supplied field breaks its constraint
        NotFoundError: When no quiz has this id
        StoreError: When the update fails

    Returns:
        QuizOut: The updated quiz, answers included
    """
    try:
        quiz = _get_quiz_or_404(db, quiz_id)
    except SQLAlchemyError as e:
        log.error("Update quiz error: %s", e)
        raise StoreError("Error updating quiz", str(e)) from e

    fields = request.model_fields_set

    for name in ("title", "technology", "level"):
        if name in fields and not getattr(request, name):
            raise ValidationError(f"{name} cannot be empty")
    if "questions" in fields:
        if not request.questions:
            raise ValidationError("A quiz needs at least one question")
        validate_questions(request.questions)
    if "isActive" in fields and request.isActive is None:
        raise ValidationError("isActive must be true or false")
    if "totalAttempts" in fields and (request.totalAttempts is None or request.totalAttempts < 0):
        raise ValidationError("totalAttempts must be a non-negative integer")

    try:
        for name in ("title", "technology", "level"):
            if name in fields:
                setattr(quiz, name, getattr(request, name))
        if "questions" in fields:
            quiz.questions = build_question_documents(request.questions)
        if "isActive" in fields:
            quiz.is_active = request.isActive
        if "totalAttempts" in fields:
            quiz.total_attempts = request.totalAttempts

        db.commit()
        db.refresh(quiz)
    except SQLAlchemyError as e:
        db.rollback()
        log.error("Update quiz error: %s", e)
        raise StoreError("Error updating quiz", str(e)) from e
    return quiz_to_out(quiz)


def delete_quiz_logic(db: Session, quiz_id: int) -> None:
    """Hard-delete a quiz. Stored results keep their copied quiz fields."""
    try:
        quiz = _get_quiz_or_404(db, quiz_id)
        db.delete(quiz)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        log.error("Delete quiz error: %s", e)
        raise StoreError("Error deleting quiz", str(e)) from e
    log.info("Deleted quiz %s", quiz_id)


def save_result_best_effort(db: Session, result: Result) -> bool:
    """Store a graded attempt. Failures are logged and dropped.

    Returns:
        bool: True if the result was stored
    """
    try:
        db.add(result)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        log.error("Error saving result: %s", e)
        return False
    return True


def submit_quiz_logic(
    db: Session, quiz_id: int, submission: QuizSubmission, user_id: Optional[str]
) -> SubmissionOut:
    """Grade a set of answers for a quiz.

    The attempt counter is committed on its own before grading, and the
    result row is a second, separate write. Neither is rolled back if the
    other fails.

    Args:
        db (Session): Database session
        quiz_id (int): Quiz being answered
        submission (QuizSubmission): Answers, plus an optional userId
        user_id (Optional[str]): Authenticated caller, preferred over the body's userId

    Raises:
        NotFoundError: When no quiz has this id
        StoreError: When loading the quiz or bumping its counter fails

    Returns:
        SubmissionOut: Totals, score and the per-question breakdown
    """
    try:
        # counted in the store so concurrent submissions never overwrite each other
        bumped = (
            db.query(Quiz)
            .filter(Quiz.id == quiz_id)
            .update({Quiz.total_attempts: Quiz.total_attempts + 1}, synchronize_session=False)
        )
        if not bumped:
            raise NotFoundError("Quiz not found")
        db.commit()
        quiz = _get_quiz_or_404(db, quiz_id)
    except SQLAlchemyError as e:
        db.rollback()
        log.error("Submit quiz error: %s", e)
        raise StoreError("Error submitting quiz", str(e)) from e

    questions = quiz.questions or []
    correct, wrong, details = grade_answers(questions, submission.answers or [])
    total_questions = len(questions)
    score = compute_score(correct, total_questions)
    log.debug("Quiz %s graded: %d/%d (%d%%)", quiz.id, correct, total_questions, score)

    outcome = SubmissionOut(
        quizTitle=quiz.title,
        technology=quiz.technology,
        level=quiz.level,
        totalQuestions=total_questions,
        correct=correct,
        wrong=wrong,
        score=score,
        detailedResults=details,
    )

    owner = user_id or submission.userId
    if owner:
        save_result_best_effort(db, Result(
            user=owner,
            title=quiz.title,
            technology=quiz.technology,
            level=quiz.level,
            total_questions=total_questions,
            correct=correct,
            wrong=wrong,
            score=score,
        ))
    return outcome
