"""
Tests for quiz submission: grading, the attempt counter and result saving.
"""

import pytest

from quizapp.exceptions import NotFoundError
from quizapp.model.quizzes import Quiz
from quizapp.model.results import Result
from quizapp.router.api.logics.quiz_logic import submit_quiz_logic
from quizapp.schema.quiz_schema import QuizSubmission


def _answers(quiz, *selected):
    return [
        {"questionId": q["id"], "selectedAnswer": s}
        for q, s in zip(quiz["questions"], selected)
    ]


def _attempts(client, quiz_id):
    return client.get(f"/api/quiz/{quiz_id}").json()["quiz"]["totalAttempts"]


class TestSubmitScoring:

    def test_two_question_scenario(self, client, create_quiz):
        """Q1 answered right, Q2 answered wrong: half marks."""
        quiz = create_quiz(questions=[
            {"question": "Q1", "options": ["A", "B"], "correctAnswer": "A", "explanation": "A it is"},
            {"question": "Q2", "options": ["B", "C"], "correctAnswer": "B"},
        ])

        response = client.post(f"/api/quiz/{quiz['id']}/submit",
                               json={"answers": _answers(quiz, "A", "C")})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        results = body["results"]
        assert results["quizTitle"] == quiz["title"]
        assert results["technology"] == quiz["technology"]
        assert results["level"] == quiz["level"]
        assert results["totalQuestions"] == 2
        assert results["correct"] == 1
        assert results["wrong"] == 1
        assert results["score"] == 50
        q1, q2 = results["detailedResults"]
        assert q1["isCorrect"] is True
        assert q1["explanation"] == "A it is"
        assert q2["isCorrect"] is False
        assert q2["userAnswer"] == "C"
        assert q2["correctAnswer"] == "B"
        assert q2["questionId"] == quiz["questions"][1]["id"]

    def test_all_correct_scores_100(self, client, create_quiz):
        quiz = create_quiz()
        results = client.post(f"/api/quiz/{quiz['id']}/submit",
                              json={"answers": _answers(quiz, "def", "2")}).json()["results"]
        assert results["score"] == 100

    def test_none_correct_scores_0(self, client, create_quiz):
        quiz = create_quiz()
        results = client.post(f"/api/quiz/{quiz['id']}/submit",
                              json={"answers": _answers(quiz, "fn", "3")}).json()["results"]
        assert results["score"] == 0
        assert results["wrong"] == 2

    def test_three_of_four_scores_75(self, client, create_quiz):
        questions = [
            {"question": f"Q{i}", "options": ["x", "y"], "correctAnswer": "x"}
            for i in range(4)
        ]
        quiz = create_quiz(questions=questions)

        results = client.post(f"/api/quiz/{quiz['id']}/submit",
                              json={"answers": _answers(quiz, "x", "x", "x", "y")}).json()["results"]

        assert results["score"] == 75

    def test_missing_answers_marked_not_answered(self, client, create_quiz):
        quiz = create_quiz()

        results = client.post(f"/api/quiz/{quiz['id']}/submit", json={}).json()["results"]

        assert results["correct"] == 0
        assert results["wrong"] == 2
        assert [d["userAnswer"] for d in results["detailedResults"]] == ["Not answered"] * 2

    def test_zero_question_quiz_scores_zero(self, client, db):
        quiz = Quiz(title="Empty", technology="python", level="basic", questions=[])
        db.add(quiz)
        db.commit()

        results = client.post(f"/api/quiz/{quiz.id}/submit", json={"answers": []}).json()["results"]

        assert results["totalQuestions"] == 0
        assert results["score"] == 0

    def test_non_string_answer_graded_wrong(self, client, create_quiz):
        quiz = create_quiz()
        answers = [{"questionId": quiz["questions"][0]["id"], "selectedAnswer": "def"},
                   {"questionId": quiz["questions"][1]["id"], "selectedAnswer": 2}]

        response = client.post(f"/api/quiz/{quiz['id']}/submit", json={"answers": answers})

        assert response.status_code == 200
        results = response.json()["results"]
        assert (results["correct"], results["wrong"]) == (1, 1)
        second = results["detailedResults"][1]
        assert second["isCorrect"] is False
        assert second["userAnswer"] == 2
        assert _attempts(client, quiz["id"]) == 1

    def test_null_answers_treated_as_none_given(self, client, create_quiz):
        quiz = create_quiz()

        response = client.post(f"/api/quiz/{quiz['id']}/submit", json={"answers": None})

        assert response.status_code == 200
        results = response.json()["results"]
        assert results["wrong"] == 2
        assert [d["userAnswer"] for d in results["detailedResults"]] == ["Not answered"] * 2
        assert _attempts(client, quiz["id"]) == 1

    def test_missing_quiz(self, client):
        response = client.post("/api/quiz/999/submit", json={"answers": []})
        assert response.status_code == 404
        assert response.json()["message"] == "Quiz not found"


class TestAttemptCounter:

    def test_each_submission_counts_once(self, client, create_quiz):
        quiz = create_quiz()

        for expected in (1, 2, 3):
            client.post(f"/api/quiz/{quiz['id']}/submit", json={"answers": []})
            assert _attempts(client, quiz["id"]) == expected

    def test_stale_session_does_not_lose_an_attempt(self, client, create_quiz, db):
        """A session holding an old copy of the quiz still adds to the stored count."""
        quiz = create_quiz()
        stale = db.query(Quiz).filter(Quiz.id == quiz["id"]).one()
        assert stale.total_attempts == 0

        client.post(f"/api/quiz/{quiz['id']}/submit", json={"answers": []})
        submit_quiz_logic(db, quiz["id"], QuizSubmission(), None)

        assert _attempts(client, quiz["id"]) == 2

    def test_missing_quiz_counts_nothing(self, db):
        with pytest.raises(NotFoundError):
            submit_quiz_logic(db, 999, QuizSubmission(), None)

    def test_counts_even_when_result_save_fails(self, client, create_quiz, engine):
        quiz = create_quiz()
        Result.__table__.drop(engine)

        response = client.post(f"/api/quiz/{quiz['id']}/submit",
                               json={"answers": _answers(quiz, "def", "2"), "userId": "u1"})

        assert response.status_code == 200
        assert response.json()["results"]["score"] == 100
        assert _attempts(client, quiz["id"]) == 1


class TestResultSaving:

    def test_anonymous_submission_saves_nothing(self, client, create_quiz, db):
        quiz = create_quiz()
        client.post(f"/api/quiz/{quiz['id']}/submit", json={"answers": _answers(quiz, "def", "2")})
        assert db.query(Result).count() == 0

    def test_authenticated_submission_saves_result(self, client, create_quiz, auth_headers, db):
        quiz = create_quiz()

        client.post(f"/api/quiz/{quiz['id']}/submit",
                    json={"answers": _answers(quiz, "def", "3")},
                    headers=auth_headers("user-7"))

        result = db.query(Result).one()
        assert result.user == "user-7"
        assert result.title == quiz["title"]
        assert result.technology == "python"
        assert result.level == "basic"
        assert (result.total_questions, result.correct, result.wrong) == (2, 1, 1)
        assert result.score == 50

    def test_body_user_id_used_without_token(self, client, create_quiz, db):
        quiz = create_quiz()
        client.post(f"/api/quiz/{quiz['id']}/submit", json={"answers": [], "userId": "body-user"})
        assert db.query(Result).one().user == "body-user"

    def test_token_wins_over_body_user_id(self, client, create_quiz, auth_headers, db):
        quiz = create_quiz()
        client.post(f"/api/quiz/{quiz['id']}/submit",
                    json={"answers": [], "userId": "body-user"},
                    headers=auth_headers("token-user"))
        assert db.query(Result).one().user == "token-user"

    def test_saved_result_listed_for_user(self, client, create_quiz, auth_headers):
        quiz = create_quiz()
        headers = auth_headers("user-3")
        client.post(f"/api/quiz/{quiz['id']}/submit",
                    json={"answers": _answers(quiz, "def", "2")}, headers=headers)

        results = client.get("/api/results", headers=headers).json()["results"]

        assert len(results) == 1
        assert results[0]["score"] == 100
