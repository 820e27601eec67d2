from datetime import timedelta

import pytest

from app.services.activity_recorder import ActivityRecorder, get_activity_recorder
from app.main import app

from conftest import DAY_1

SUBMISSION = {
    "classValue": "10",
    "board": "CBSE",
    "subject": "Mathematics",
    "topic": "Quadratic Equations",
    "testType": "test",
    "totalQuestions": 20,
    "correctAnswers": 15,
    "timeTaken": 420,
}


class TestAuth:
    @pytest.mark.parametrize(
        "method,path",
        [
            ("get", "/api/stats"),
            ("post", "/api/stats"),
            ("post", "/api/tests/submit"),
            ("get", "/api/leaderboard"),
        ],
    )
    def test_requires_token(self, client, method, path):
        response = getattr(client, method)(path)
        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_rejects_bad_token(self, client):
        response = client.get("/api/stats", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid or expired token"


class TestStatsEndpoints:
    def test_first_visit_returns_zeros(self, client, auth_headers):
        response = client.get("/api/stats", headers=auth_headers("u1"))

        assert response.status_code == 200
        assert response.json() == {
            "total_xp": 0,
            "current_streak": 0,
            "longest_streak": 0,
            "games_played_today": 0,
            "tests_completed": 0,
            "quizzes_completed": 0,
            "total_test_score": 0,
            "total_quiz_score": 0,
        }

    def test_game_play_flow(self, client, auth_headers, clock):
        headers = auth_headers("u1")

        response = client.post("/api/stats", json={"gameId": "quick-5"}, headers=headers)
        assert response.json() == {"success": True, "applied": True}
        client.post("/api/stats", json={"gameId": "word-sprint"}, headers=headers)

        body = client.get("/api/stats", headers=headers).json()
        assert (body["current_streak"], body["longest_streak"], body["games_played_today"]) == (1, 1, 2)

        clock.day = DAY_1 + timedelta(days=1)
        assert client.get("/api/stats", headers=headers).json()["games_played_today"] == 0

        client.post("/api/stats", json={"gameId": "quick-5"}, headers=headers)
        body = client.get("/api/stats", headers=headers).json()
        assert (body["current_streak"], body["games_played_today"]) == (2, 1)

    def test_replayed_game_not_applied(self, client, auth_headers):
        headers = auth_headers("u1")
        client.post("/api/stats", json={"gameId": "quick-5"}, headers=headers)

        response = client.post("/api/stats", json={"gameId": "quick-5"}, headers=headers)

        assert response.status_code == 200
        assert response.json() == {"success": True, "applied": False}
        assert client.get("/api/stats", headers=headers).json()["games_played_today"] == 1

    def test_bare_score(self, client, auth_headers):
        headers = auth_headers("u1")

        response = client.post("/api/stats", json={"testResult": {"type": "quiz", "score": 70}}, headers=headers)

        assert response.status_code == 200
        body = client.get("/api/stats", headers=headers).json()
        assert (body["quizzes_completed"], body["total_quiz_score"], body["total_xp"]) == (1, 70, 70)
        assert body["current_streak"] == 0

    def test_empty_body_rejected(self, client, auth_headers):
        response = client.post("/api/stats", json={}, headers=auth_headers("u1"))
        assert response.status_code == 400

    def test_bad_test_result_type_rejected(self, client, auth_headers):
        response = client.post(
            "/api/stats", json={"testResult": {"type": "exam", "score": 70}}, headers=auth_headers("u1")
        )
        assert response.status_code == 400

    @pytest.mark.parametrize("literal", ["NaN", "Infinity", "-Infinity"])
    def test_non_finite_score_rejected(self, client, auth_headers, literal):
        headers = auth_headers("u1")

        response = client.post(
            "/api/stats",
            content='{"testResult":{"type":"test","score":%s}}' % literal,
            headers={**headers, "Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert client.get("/api/stats", headers=headers).json()["total_xp"] == 0

    def test_daily_cap(self, client, auth_headers):
        app.dependency_overrides[get_activity_recorder] = lambda: ActivityRecorder(
            max_games_per_day=1, dedupe_game_plays=True
        )
        headers = auth_headers("u1")
        client.post("/api/stats", json={"gameId": "quick-5"}, headers=headers)

        response = client.post("/api/stats", json={"gameId": "match-pairs"}, headers=headers)

        assert response.status_code == 429
        assert "Daily limit reached" in response.json()["detail"]


class TestSubmitEndpoint:
    def test_submit(self, client, auth_headers):
        headers = auth_headers("u1")

        response = client.post("/api/tests/submit", json=SUBMISSION, headers=headers)

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert (body["score"], body["xpEarned"]) == (75, 150)
        assert body["resultId"]

        stats = client.get("/api/stats", headers=headers).json()
        assert (stats["tests_completed"], stats["total_test_score"], stats["total_xp"]) == (1, 75, 150)

    def test_topic_and_time_optional(self, client, auth_headers):
        payload = {k: v for k, v in SUBMISSION.items() if k not in ("topic", "timeTaken")}
        payload["testType"] = "quiz"

        response = client.post("/api/tests/submit", json=payload, headers=auth_headers("u1"))

        assert response.status_code == 200
        assert response.json()["xpEarned"] == 75

    @pytest.mark.parametrize("missing", ["classValue", "board", "subject", "testType", "totalQuestions", "correctAnswers"])
    def test_missing_field(self, client, auth_headers, missing):
        payload = {k: v for k, v in SUBMISSION.items() if k != missing}

        response = client.post("/api/tests/submit", json=payload, headers=auth_headers("u1"))

        assert response.status_code == 400
        assert missing in response.json()["fields"]

    def test_zero_questions(self, client, auth_headers):
        response = client.post(
            "/api/tests/submit", json={**SUBMISSION, "totalQuestions": 0, "correctAnswers": 0},
            headers=auth_headers("u1"),
        )
        assert response.status_code == 400


class TestLeaderboardEndpoint:
    def test_overall(self, client, auth_headers):
        client.post("/api/tests/submit", json={**SUBMISSION, "correctAnswers": 16}, headers=auth_headers("alice"))
        client.post("/api/tests/submit", json={**SUBMISSION, "correctAnswers": 12}, headers=auth_headers("bob"))

        response = client.get("/api/leaderboard", headers=auth_headers("bob"))

        assert response.status_code == 200
        body = response.json()
        assert body["type"] == "overall"
        assert body["userRank"] == 2
        assert [(e["user_id"], e["rank"], e["total_points"]) for e in body["leaderboard"]] == [
            ("alice", 1, 80),
            ("bob", 2, 60),
        ]

    def test_tests_type_and_new_user_rank(self, client, auth_headers):
        client.post("/api/tests/submit", json=SUBMISSION, headers=auth_headers("alice"))
        client.get("/api/stats", headers=auth_headers("newbie"))

        body = client.get("/api/leaderboard?type=tests", headers=auth_headers("newbie")).json()

        assert body["type"] == "tests"
        assert [e["user_id"] for e in body["leaderboard"]] == ["alice"]
        assert "total_points" not in body["leaderboard"][0]
        assert body["userRank"] == 2

    def test_unknown_user_rank_is_null(self, client, auth_headers):
        body = client.get("/api/leaderboard", headers=auth_headers("ghost")).json()
        assert body == {"leaderboard": [], "userRank": None, "type": "overall"}

    def test_unknown_type(self, client, auth_headers):
        response = client.get("/api/leaderboard?type=streaks", headers=auth_headers("u1"))
        assert response.status_code == 400
