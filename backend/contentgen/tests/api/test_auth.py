from datetime import timedelta
from unittest.mock import patch

from fastapi.testclient import TestClient

from contentgen.core.config import settings
from contentgen.core.security import create_session_token
from contentgen.storage import Storage
from contentgen.tests.utils import auth_headers

API = settings.API_V1_STR


def test_me_without_session_is_null(client: TestClient) -> None:
    r = client.get(f"{API}/auth/me")
    assert r.status_code == 200
    assert r.json() is None


def test_me_with_invalid_token_is_null(client: TestClient) -> None:
    r = client.get(f"{API}/auth/me", headers={"Authorization": "Bearer not-a-token"})
    assert r.status_code == 200
    assert r.json() is None


def test_me_creates_user_on_first_login(
    client: TestClient, storage: Storage, user_headers: dict[str, str]
) -> None:
    r = client.get(f"{API}/auth/me", headers=user_headers)
    assert r.status_code == 200
    body = r.json()
    assert body["open_id"] == "test-user-1"
    assert body["name"] == "Test User 1"
    assert body["email"] == "test1@example.com"
    assert body["role"] == "user"

    # Second request reuses the same row
    r = client.get(f"{API}/auth/me", headers=user_headers)
    assert r.json()["id"] == body["id"]
    assert storage.get_user_by_open_id("test-user-1").id == body["id"]


def test_me_reads_session_cookie(client: TestClient) -> None:
    client.cookies.set(settings.SESSION_COOKIE_NAME, create_session_token("cookie-user"))
    r = client.get(f"{API}/auth/me")
    assert r.json()["open_id"] == "cookie-user"


def test_owner_identity_is_admin(client: TestClient) -> None:
    with patch("contentgen.crud.settings.OWNER_OPEN_ID", "the-owner"):
        r = client.get(f"{API}/auth/me", headers=auth_headers("the-owner"))
    assert r.json()["role"] == "admin"


def test_expired_token_is_rejected(client: TestClient) -> None:
    token = create_session_token("test-user-1", expires_delta=timedelta(minutes=-1))
    r = client.get(f"{API}/projects/", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 401
    assert r.json()["code"] == "UNAUTHORIZED"


def test_logout_clears_session_cookie(client: TestClient, user_headers: dict[str, str]) -> None:
    r = client.post(f"{API}/auth/logout", headers=user_headers)
    assert r.status_code == 200
    assert r.json() == {"success": True}
    set_cookie = r.headers["set-cookie"]
    assert set_cookie.startswith(f"{settings.SESSION_COOKIE_NAME}=")
    assert "Max-Age=0" in set_cookie


def test_logout_requires_identity(client: TestClient) -> None:
    r = client.post(f"{API}/auth/logout")
    assert r.status_code == 401
    assert r.json()["code"] == "UNAUTHORIZED"


def test_health_check_is_public(client: TestClient) -> None:
    assert client.get(f"{API}/utils/health-check/").json() is True
    assert client.get(f"{API}/utils/storage-check/").json() is True
