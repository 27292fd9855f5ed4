"""API tests for the LearnHub routers using FastAPI's TestClient."""

import asyncio

import pytest
from unittest.mock import AsyncMock
from fastapi.testclient import TestClient

import api
from common.auth import JWTAuth
from learnhub.database.collections import USER_COURSE_PROGRESS
from learnhub.dependencies import get_progress_service, init_all_services
from learnhub.repositories import CrudServiceError
from learnhub.services.progress import UserProgressService

SECRET = "router-test-secret"
BASE = "/api/v1"


@pytest.fixture
def client(repository):
    init_all_services(repository=repository, jwt_secret=SECRET, frontend_url="https://learn.example.com")
    api.app.dependency_overrides.clear()
    yield TestClient(api.app)
    api.app.dependency_overrides.clear()


@pytest.fixture
def token_for():
    auth = JWTAuth(secret=SECRET)

    def _token_for(member_id, **claims):
        return {"Authorization": f"Bearer {auth.create_token(member_id, **claims)}"}
    return _token_for


@pytest.fixture
def learner(token_for, sample_user_id):
    return token_for(sample_user_id, nickname="Sam")


@pytest.fixture
def admin(token_for):
    return token_for("admin-1", roles=["admin"])


# ─────────────────────────────────────────────────────────────────
# Health and auth
# ─────────────────────────────────────────────────────────────────


class TestHealthAndAuth:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["data"]["status"] == "ok"

    def test_missing_token(self, client):
        response = client.get(f"{BASE}/courses")
        assert response.status_code == 401
        assert response.json()["detail"]["code"] == "UNAUTHORIZED"

    def test_bad_token(self, client):
        response = client.get(f"{BASE}/courses", headers={"Authorization": "Bearer nope"})
        assert response.status_code == 401
        assert response.json()["detail"]["code"] == "INVALID_TOKEN"


# ─────────────────────────────────────────────────────────────────
# Courses
# ─────────────────────────────────────────────────────────────────


class TestCoursesRouter:
    def test_list_with_filters_and_language(self, client, learner):
        response = client.get(f"{BASE}/courses", params={"category": "Data Science", "lang": "es"}, headers=learner)

        data = response.json()["data"]
        assert response.status_code == 200
        assert [c["_id"] for c in data["courses"]] == ["course-dataviz"]
        assert data["courses"][0]["title"] == "Visualización de Datos Avanzada"
        assert data["facets"]["categories"] == ["Data Science", "AI", "Design"]

    def test_unsupported_language_falls_back(self, client, learner):
        response = client.get(f"{BASE}/courses", params={"lang": "fr", "search": "visual"}, headers=learner)
        assert response.json()["data"]["courses"][0]["title"] == "Advanced Data Visualization"

    def test_detail(self, client, learner):
        response = client.get(f"{BASE}/courses/course-dataviz", headers=learner)

        data = response.json()["data"]
        assert data["course"]["_id"] == "course-dataviz"
        assert [lesson["_id"] for lesson in data["lessons"]] == ["lesson-1", "lesson-2", "lesson-3"]

    def test_detail_not_found(self, client, learner):
        response = client.get(f"{BASE}/courses/missing", headers=learner)
        assert response.status_code == 404
        assert response.json()["detail"]["code"] == "COURSE_NOT_FOUND"

    def test_notes_download(self, client, learner):
        response = client.get(f"{BASE}/courses/course-dataviz/lessons/lesson-1/notes", headers=learner)

        assert response.status_code == 200
        assert response.headers["content-disposition"] == 'attachment; filename="visualization-principles-notes.txt"'
        assert response.text.startswith("Advanced Data Visualization\nVisualization Principles\n")
        assert "1. Pick the right chart" in response.text


# ─────────────────────────────────────────────────────────────────
# Progress
# ─────────────────────────────────────────────────────────────────


class TestProgressRouter:
    def test_dashboard_initializes_progress(self, client, learner):
        response = client.get(f"{BASE}/progress/dashboard", headers=learner)

        data = response.json()["data"]
        assert data["stats"]["coursesEnrolled"] == 0
        assert data["enrolledCourses"] == []
        assert data["member"]["displayName"] == "Sam"

    def test_dashboard_is_idempotent(self, client, learner, repository, sample_user_id):
        client.get(f"{BASE}/progress/dashboard", headers=learner)
        client.get(f"{BASE}/progress/dashboard", headers=learner)

        rows = asyncio.run(repository.get_all(USER_COURSE_PROGRESS, {"userId": sample_user_id}))
        assert len(rows) == 3

    def test_update_clamps_and_completes(self, client, learner):
        response = client.put(f"{BASE}/progress/courses/course-ai", json={"completionPercentage": 150}, headers=learner)

        data = response.json()["data"]
        assert response.status_code == 200
        assert data["completionPercentage"] == 100
        assert data["isCompleted"] is True

        dashboard = client.get(f"{BASE}/progress/dashboard", headers=learner).json()["data"]
        assert [c["_id"] for c in dashboard["completedCourses"]] == ["course-ai"]
        assert dashboard["stats"]["certificatesEarned"] == 1

    def test_update_unknown_course(self, client, learner):
        response = client.put(f"{BASE}/progress/courses/missing", json={"completionPercentage": 10}, headers=learner)
        assert response.status_code == 404

    def test_course_progress_not_found(self, client, learner):
        response = client.get(f"{BASE}/progress/courses/course-ux", headers=learner)
        assert response.status_code == 404
        assert response.json()["detail"]["code"] == "PROGRESS_NOT_FOUND"

    def test_storage_failure_is_503(self, client, learner):
        failing = AsyncMock()
        failing.get_all.side_effect = CrudServiceError("down", USER_COURSE_PROGRESS)
        api.app.dependency_overrides[get_progress_service] = lambda: UserProgressService(failing)

        response = client.get(f"{BASE}/progress/courses", headers=learner)

        assert response.status_code == 503
        assert response.json() == {
            "success": False,
            "error": {"message": "Record store unavailable, please retry", "code": "SERVICE_UNAVAILABLE"},
        }


# ─────────────────────────────────────────────────────────────────
# Player
# ─────────────────────────────────────────────────────────────────


class TestPlayerRouter:
    def test_view_and_scroll(self, client, learner):
        view = client.get(f"{BASE}/player/course-dataviz", headers=learner).json()["data"]
        assert view["state"] == "BROWSING"

        response = client.post(f"{BASE}/player/course-dataviz/scroll", json={"fraction": 1.0}, headers=learner)

        data = response.json()["data"]
        assert data["events"] == [{"type": "lesson_complete", "lessonId": "lesson-1"}]
        assert data["progressPercent"] == pytest.approx(33.33)

    def test_invalid_action_is_409(self, client, learner):
        response = client.post(f"{BASE}/player/course-dataviz/activity/submit", json={"answers": {}}, headers=learner)

        body = response.json()
        assert response.status_code == 409
        assert body["error"]["code"] == "INVALID_PLAYER_ACTION"
        assert body["error"]["details"] == {"action": "submit activity", "state": "BROWSING"}

    def test_select_and_navigation(self, client, learner):
        client.post(f"{BASE}/player/course-dataviz/select", json={"index": 7}, headers=learner)
        view = client.post(f"{BASE}/player/course-dataviz/previous", headers=learner).json()["data"]
        assert view["currentIndex"] == 1

        view = client.post(f"{BASE}/player/course-dataviz/next", headers=learner).json()["data"]
        assert view["currentIndex"] == 2

    def test_complete_course(self, client, learner):
        for _ in range(3):
            data = client.post(f"{BASE}/player/course-dataviz/advance", headers=learner).json()["data"]

        assert data["state"] == "COURSE_COMPLETE"
        progress = client.get(f"{BASE}/progress/courses/course-dataviz", headers=learner).json()["data"]
        assert progress["isCompleted"] is True

    def test_rejects_non_finite_fraction(self, client, learner):
        response = client.post(
            f"{BASE}/player/course-dataviz/scroll",
            content='{"fraction": NaN}',
            headers={**learner, "Content-Type": "application/json"},
        )
        assert response.status_code == 422


# ─────────────────────────────────────────────────────────────────
# Certificates
# ─────────────────────────────────────────────────────────────────


class TestCertificatesRouter:
    def test_list_and_verify(self, client, learner):
        client.put(f"{BASE}/progress/courses/course-ux", json={"completionPercentage": 100}, headers=learner)

        listed = client.get(f"{BASE}/certificates", headers=learner).json()
        assert listed["count"] == 1
        cert_id = listed["data"][0]["certificateId"]

        verified = client.get(f"{BASE}/certificates/verify/{cert_id}")
        assert verified.status_code == 200
        assert verified.json()["data"]["course"]["_id"] == "course-ux"
        assert verified.json()["data"]["learnerName"] is None

    def test_verify_unknown(self, client):
        response = client.get(f"{BASE}/certificates/verify/CERT-NOPE-00000")
        assert response.status_code == 404
        assert response.json()["detail"]["code"] == "CERTIFICATE_NOT_FOUND"


# ─────────────────────────────────────────────────────────────────
# Admin
# ─────────────────────────────────────────────────────────────────


class TestAdminRouter:
    def test_requires_admin(self, client, learner):
        response = client.get(f"{BASE}/admin/courses", headers=learner)
        assert response.status_code == 403
        assert response.json()["detail"]["code"] == "ADMIN_REQUIRED"

    def test_course_crud(self, client, admin):
        created = client.post(f"{BASE}/admin/courses", json={"titleEn": "Statistics 101"}, headers=admin)
        assert created.status_code == 201
        course_id = created.json()["data"]["_id"]

        updated = client.put(f"{BASE}/admin/courses/{course_id}", json={"category": "Math"}, headers=admin)
        assert updated.json()["data"]["titleEn"] == "Statistics 101"
        assert updated.json()["data"]["category"] == "Math"

        assert client.delete(f"{BASE}/admin/courses/{course_id}", headers=admin).status_code == 200
        assert client.delete(f"{BASE}/admin/courses/{course_id}", headers=admin).status_code == 404

    def test_create_course_requires_title(self, client, admin):
        response = client.post(f"{BASE}/admin/courses", json={"category": "Math"}, headers=admin)
        assert response.status_code == 422

    def test_content_crud(self, client, admin):
        bad = client.post(f"{BASE}/admin/content", json={"title": "Podcast", "contentType": "audio"}, headers=admin)
        assert bad.status_code == 422
        assert bad.json()["detail"]["code"] == "INVALID_CONTENT_TYPE"

        created = client.post(
            f"{BASE}/admin/content",
            json={"title": "Recap", "contentType": "text", "courseId": "course-ai", "orderIndex": 2},
            headers=admin,
        )
        assert created.status_code == 201

        listed = client.get(f"{BASE}/admin/content", params={"courseId": "course-ai"}, headers=admin).json()
        assert listed["count"] == 2

    def test_export(self, client, admin):
        response = client.get(f"{BASE}/admin/export", headers=admin)

        body = response.json()
        assert response.status_code == 200
        assert response.headers["content-disposition"].startswith('attachment; filename="learnhub-data-')
        assert len(body["courses"]) == 3
        assert len(body["courseContent"]) == 4
        assert "filename" not in body
