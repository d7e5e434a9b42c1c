"""
Google 로그인 / 토큰 검증 / 로그아웃 테스트
"""
from urllib.parse import parse_qs, urlparse

import httpx
import jwt
import pytest
from asgi_lifespan import LifespanManager

from backend.app.core.config import settings
from backend.app.core.security import TokenError, create_access_token, decode_token
from backend.app.main import app
from backend.app.schemas.user import GoogleUser
from backend.app.services import auth as auth_service

USER = GoogleUser(id="109876543210", email="visitor@example.com", name="방문자", picture="https://example.com/p.png")


async def _request(method: str, url: str, **kwargs) -> httpx.Response:
    async with LifespanManager(app):
        async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://testserver") as client:
            response = await client.request(method, url, **kwargs)
            await response.aread()
            return response


def test_token_carries_profile_claims():
    token = auth_service.issue_token(USER)
    payload = decode_token(token)
    assert payload["sub"] == USER.id
    assert payload["email"] == USER.email
    assert payload["name"] == "방문자"
    assert payload["picture"] == USER.picture
    assert payload["jti"]
    assert payload["exp"] - payload["iat"] == settings.access_token_expire_minutes * 60


def test_decode_rejects_tampered_token():
    token, _ = create_access_token("someone")
    forged = jwt.encode(jwt.decode(token, options={"verify_signature": False}), "other-secret", algorithm="HS256")
    with pytest.raises(TokenError):
        decode_token(forged)


def test_google_auth_url_parameters(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(settings, "google_client_id", "client-123")
    url = urlparse(auth_service.build_google_auth_url())
    query = parse_qs(url.query)
    assert url.netloc == "accounts.google.com"
    assert query["client_id"] == ["client-123"]
    assert query["response_type"] == ["code"]
    assert query["redirect_uri"] == [settings.google_redirect_uri]


@pytest.mark.asyncio
async def test_verify_then_logout_revokes_token():
    token = auth_service.issue_token(USER)
    headers = {"Authorization": f"Bearer {token}"}

    verified = await _request("GET", "/api/auth/verify", headers=headers)
    assert verified.status_code == 200
    assert verified.json()["user"]["email"] == "visitor@example.com"

    logout = await _request("POST", "/api/auth/logout", headers=headers)
    assert logout.status_code == 200

    after = await _request("GET", "/api/auth/verify", headers=headers)
    assert after.status_code == 401


@pytest.mark.asyncio
async def test_verify_without_token_is_401():
    response = await _request("GET", "/api/auth/verify")
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_callback_upserts_user_and_redirects_with_token(db, monkeypatch: pytest.MonkeyPatch):
    async def fake_fetch(code: str) -> GoogleUser:
        assert code == "auth-code"
        return USER

    monkeypatch.setattr(auth_service, "fetch_google_user", fake_fetch)

    response = await _request("GET", "/api/auth/google/callback", params={"code": "auth-code"})
    assert response.status_code == 307
    location = urlparse(response.headers["location"])
    assert location.path == "/auth/success"
    token = parse_qs(location.query)["token"][0]
    assert decode_token(token)["sub"] == USER.id

    stored = await db["users"].find_one({"_id": USER.id})
    assert stored["email"] == "visitor@example.com"
    assert stored["provider"] == "google"


@pytest.mark.asyncio
async def test_callback_error_redirects_to_error_page():
    response = await _request("GET", "/api/auth/google/callback", params={"error": "access_denied"})
    assert response.status_code == 307
    location = urlparse(response.headers["location"])
    assert location.path == "/auth/error"
    assert parse_qs(location.query)["message"] == ["access_denied"]
