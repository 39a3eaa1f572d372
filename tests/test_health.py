from fastapi.testclient import TestClient
from app.main import app


def test_health_ok():
    """Test health check endpoint"""
    client = TestClient(app)
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


def test_root_describes_register_route():
    """Root lists the validated fields and each field's rule codes"""
    client = TestClient(app)
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Registration Service"
    assert data["register"]["path"] == "/register"
    assert data["register"]["validated_fields"] == ["username", "email", "password", "dob", "file"]
    assert "role" not in data["register"]["validated_fields"]
    assert data["rules"]["dob"] == ["required", "date", "min_age"]
    assert set(data["rules"]) == {"username", "email", "password", "dob", "role", "file", "fileSize"}
