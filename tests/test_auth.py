from fastapi.testclient import TestClient

from checkin.main import app
from checkin.services.auth_service import AuthService

from .conftest import ADMIN_PASSWORD


def test_session_is_false_without_cookie(client):
    assert client.get("/api/auth/session").json() == {"is_admin": False}


def test_wrong_password_is_rejected(client):
    res = client.post("/api/auth/login", json={"password": "wrong"})

    assert res.status_code == 401
    assert res.json()["detail"] == "비밀번호가 올바르지 않습니다."
    assert client.get("/api/auth/session").json()["is_admin"] is False


def test_login_sets_http_only_cookie(client):
    res = client.post("/api/auth/login", json={"password": ADMIN_PASSWORD})

    assert res.status_code == 200
    assert "httponly" in res.headers["set-cookie"].lower()
    assert client.get("/api/auth/session").json()["is_admin"] is True


def test_admin_endpoints_require_login(client):
    for path in ("/api/admin/summary", "/api/admin/logs", "/api/admin/attendees",
                 "/api/admin/rankings", "/api/admin/settings", "/api/admin/qr"):
        assert client.get(path).status_code == 401, path
    assert client.delete("/api/admin/logs").status_code == 401


def test_forged_cookie_is_rejected():
    with TestClient(app, cookies={"admin_auth": "true"}) as c:
        assert c.get("/api/admin/summary").status_code == 401


def test_logout_ends_session(admin_client):
    assert admin_client.get("/api/admin/summary").status_code == 200

    admin_client.post("/api/auth/logout")

    assert admin_client.get("/api/admin/summary").status_code == 401


def test_password_change_invalidates_tokens():
    token = AuthService("old").login("old")

    assert AuthService("old").check_session(token) is True
    assert AuthService("new").check_session(token) is False


def test_malformed_token_is_not_a_session():
    service = AuthService("pw")
    assert service.check_session("zz-not-hex") is False
    assert service.check_session("") is False
    assert service.check_session(None) is False
