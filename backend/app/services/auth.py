"""Google OAuth 로그인과 토큰 폐기 처리"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any
from urllib.parse import urlencode

import httpx
from fastapi import HTTPException, status
from motor.motor_asyncio import AsyncIOMotorDatabase
from redis.asyncio import Redis

from ..core.config import settings
from ..core.security import create_access_token, seconds_until_expiry
from ..schemas.user import GoogleUser

logger = logging.getLogger(__name__)

GOOGLE_AUTH_URL = "https://accounts.google.com/o/oauth2/v2/auth"
GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"
GOOGLE_USERINFO_URL = "https://www.googleapis.com/oauth2/v2/userinfo"

REVOKED_PREFIX = "auth:revoked:"
USERS_COL = "users"


def build_google_auth_url(state: str | None = None) -> str:
    if not settings.google_client_id:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Google OAuth가 설정되지 않았습니다.")
    params = {
        "client_id": settings.google_client_id,
        "redirect_uri": settings.google_redirect_uri,
        "response_type": "code",
        "scope": "openid profile email",
        "access_type": "offline",
        "prompt": "select_account",
    }
    if state:
        params["state"] = state
    return f"{GOOGLE_AUTH_URL}?{urlencode(params)}"


async def fetch_google_user(code: str) -> GoogleUser:
    """인가 코드를 액세스 토큰으로 교환한 뒤 사용자 정보를 조회"""
    try:
        async with httpx.AsyncClient(timeout=10.0) as client:
            token_response = await client.post(
                GOOGLE_TOKEN_URL,
                data={
                    "code": code,
                    "client_id": settings.google_client_id,
                    "client_secret": settings.google_client_secret,
                    "redirect_uri": settings.google_redirect_uri,
                    "grant_type": "authorization_code",
                },
            )
            token_response.raise_for_status()
            access_token = token_response.json().get("access_token")
            if not access_token:
                raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Google 액세스 토큰을 받지 못했습니다.")

            userinfo_response = await client.get(
                GOOGLE_USERINFO_URL,
                headers={"Authorization": f"Bearer {access_token}"},
            )
            userinfo_response.raise_for_status()
            info = userinfo_response.json()
    except httpx.HTTPError as exc:
        logger.error("Google OAuth 호출 실패: %s", exc)
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Google 인증에 실패했습니다.") from exc

    return GoogleUser(
        id=str(info["id"]),
        email=info.get("email"),
        name=info.get("name") or (info.get("email") or "사용자").split("@")[0],
        picture=info.get("picture"),
    )


async def upsert_user(db: AsyncIOMotorDatabase, user: GoogleUser) -> None:
    now = datetime.now(timezone.utc)
    await db[USERS_COL].update_one(
        {"_id": user.id},
        {
            "$set": {
                "email": user.email,
                "name": user.name,
                "picture": user.picture,
                "provider": "google",
                "updated_at": now,
            },
            "$setOnInsert": {"level": "Lv.1", "created_at": now},
        },
        upsert=True,
    )


def issue_token(user: GoogleUser) -> str:
    token, _ = create_access_token(
        user.id,
        extra={"id": user.id, "email": user.email, "name": user.name, "picture": user.picture},
    )
    return token


async def revoke_token(redis: Redis, payload: dict[str, Any]) -> None:
    """토큰 만료 시각까지 jti를 폐기 목록에 둔다"""
    jti = payload.get("jti")
    if not jti:
        return
    await redis.set(f"{REVOKED_PREFIX}{jti}", payload["sub"], ex=seconds_until_expiry(payload))


async def is_revoked(redis: Redis, jti: str | None) -> bool:
    if not jti:
        return False
    return bool(await redis.exists(f"{REVOKED_PREFIX}{jti}"))
