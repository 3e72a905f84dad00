"""
Integration tests for the health analysis API

Exercises every response path of POST /api/v1/health/analyze plus the
service endpoints, middleware headers and error envelopes.
"""
import pytest
from fastapi.testclient import TestClient

import main
import routers.health as health_router
from main import app
from models import HealthRecord
from services.health_records import SaveResult
from services.health_validator import AGE_INVALID, GENDER_INVALID, HEIGHT_INVALID, WEIGHT_INVALID

ANALYZE_URL = "/api/v1/health/analyze"


class TestAnalyzeSuccess:

    def test_reference_input(self, client, valid_payload, db_session):
        response = client.post(ANALYZE_URL, json=valid_payload)

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Health analysis completed"

        data = body["data"]
        assert data["userInfo"] == valid_payload
        assert data["analysis"]["bmi"] == 22.5
        assert data["analysis"]["categoryKey"] == "normal"
        assert data["analysis"]["category"] == "Normal"
        assert data["analysis"]["range"] == "18.5 - 25"
        assert data["idealWeight"] == {"min": 53.5, "max": 72.0}
        assert data["recommendations"]["specific"][0] == "Watch your protein intake to maintain muscle mass"
        assert isinstance(data["recordId"], int)
        assert data["timestamp"].endswith("Z")

    def test_record_is_persisted(self, client, valid_payload, db_session):
        response = client.post(ANALYZE_URL, json={**valid_payload, "name": "  Budi  "})
        record_id = response.json()["data"]["recordId"]

        stored = db_session.get(HealthRecord, record_id)
        assert stored is not None
        assert stored.name == "Budi"
        assert stored.bmi == 22.5
        assert stored.bmi_category == "Normal"

    def test_user_info_keeps_number_types(self, client, valid_payload):
        response = client.post(ANALYZE_URL, json={**valid_payload, "weight": 65.5})
        user_info = response.json()["data"]["userInfo"]

        assert user_info["height"] == 170
        assert isinstance(user_info["height"], int)
        assert user_info["weight"] == 65.5
        assert isinstance(user_info["weight"], float)

    def test_unknown_fields_are_ignored(self, client, valid_payload):
        response = client.post(ANALYZE_URL, json={**valid_payload, "email": "budi@example.com"})
        assert response.status_code == 200
        assert "email" not in response.json()["data"]["userInfo"]

    def test_overweight_female_senior(self, client):
        payload = {"name": "Siti", "age": 70, "gender": "female", "height": 160, "weight": 70}
        response = client.post(ANALYZE_URL, json=payload)

        data = response.json()["data"]
        # 70 / 2.56 = 27.34
        assert data["analysis"]["bmi"] == 27.3
        assert data["analysis"]["categoryKey"] == "overweight"
        assert data["recommendations"]["specific"] == [
            "Consider the special nutritional needs of older adults",
            "Make sure you get enough calcium and iron",
            "Do at least 150 minutes of cardio exercise per week",
            "Cut down on foods high in sugar and saturated fat",
        ]


class TestAnalyzeValidation:

    def test_invalid_fields(self, client, valid_payload, db_session):
        payload = {**valid_payload, "age": 0, "gender": "other"}
        response = client.post(ANALYZE_URL, json=payload)

        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "message": "Invalid data",
            "errors": [AGE_INVALID, GENDER_INVALID],
        }
        assert db_session.query(HealthRecord).count() == 0

    @pytest.mark.parametrize("field,message", [
        ("age", AGE_INVALID),
        ("height", HEIGHT_INVALID),
        ("weight", WEIGHT_INVALID),
    ])
    def test_integer_beyond_float_range(self, client, valid_payload, db_session, field, message):
        payload = {**valid_payload, field: int("9" * 400)}
        response = client.post(ANALYZE_URL, json=payload)

        assert response.status_code == 400
        assert response.json()["errors"] == [message]
        assert db_session.query(HealthRecord).count() == 0

    def test_empty_body(self, client):
        response = client.post(ANALYZE_URL)

        assert response.status_code == 400
        assert len(response.json()["errors"]) == 5

    def test_array_body(self, client):
        response = client.post(ANALYZE_URL, json=[1, 2, 3])
        assert response.status_code == 400
        assert len(response.json()["errors"]) == 5

    def test_malformed_json(self, client):
        response = client.post(
            ANALYZE_URL,
            content=b'{"name": "Budi",',
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Invalid data"
        assert body["errors"]


class TestAnalyzeFailures:

    def test_persistence_failure_discards_analysis(self, client, valid_payload, monkeypatch):
        monkeypatch.setattr(
            health_router,
            "save_health_record",
            lambda db, record: SaveResult(success=False, error="connection refused"),
        )

        response = client.post(ANALYZE_URL, json=valid_payload)

        assert response.status_code == 500
        assert response.json() == {
            "success": False,
            "message": "Failed to save data to database",
            "error": "connection refused",
        }

    def test_unexpected_error(self, db_session, valid_payload, monkeypatch):
        def boom(health_input):
            raise RuntimeError("boom")

        monkeypatch.setattr(health_router, "format_health_analysis", boom)
        client = TestClient(app, raise_server_exceptions=False)

        response = client.post(ANALYZE_URL, json=valid_payload)

        assert response.status_code == 500
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Internal server error"
        assert body["error"] == "boom"

    def test_unexpected_error_hides_details_in_production(self, db_session, valid_payload, monkeypatch):
        def boom(health_input):
            raise RuntimeError("secret detail")

        monkeypatch.setattr(health_router, "format_health_analysis", boom)
        monkeypatch.setattr(main.settings, "ENVIRONMENT", "production")
        client = TestClient(app, raise_server_exceptions=False)

        response = client.post(ANALYZE_URL, json=valid_payload)

        assert response.status_code == 500
        assert response.json() == {"success": False, "message": "Internal server error"}


class TestServiceEndpoints:

    def test_liveness(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["version"] == main.settings.APP_VERSION
        assert body["timestamp"].endswith("Z")

    def test_readiness(self, client):
        response = client.get("/health/detailed")

        assert response.status_code == 200
        assert response.json()["checks"]["database"]["status"] == "healthy"

    def test_readiness_database_down(self, client, monkeypatch):
        monkeypatch.setattr(main, "check_db_connection", lambda: False)

        response = client.get("/health/detailed")

        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"

    def test_root_describes_api(self, client):
        body = client.get("/").json()

        assert body["endpoints"]["analyze_health"] == "POST /api/v1/health/analyze"
        assert set(body["usage"]["body"]) == {"name", "age", "gender", "height", "weight"}

    def test_unknown_route(self, client):
        response = client.get("/api/v1/unknown")

        assert response.status_code == 404
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Endpoint not found"
        assert body["path"] == "/api/v1/unknown"
        assert body["method"] == "GET"

    def test_wrong_method(self, client):
        response = client.get(ANALYZE_URL)

        assert response.status_code == 405
        assert response.json()["success"] is False


class TestMiddleware:

    def test_security_headers(self, client):
        response = client.get("/health")

        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
        assert response.headers["Cross-Origin-Resource-Policy"] == "cross-origin"

    def test_process_time_header(self, client):
        response = client.get("/health")
        assert float(response.headers["X-Process-Time"]) >= 0

    @pytest.mark.parametrize("origin", ["http://localhost:5500", "http://127.0.0.1:5500"])
    def test_cors_allows_local_frontend(self, client, origin):
        response = client.options(
            ANALYZE_URL,
            headers={"Origin": origin, "Access-Control-Request-Method": "POST"},
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == origin
