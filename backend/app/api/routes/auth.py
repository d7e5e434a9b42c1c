from urllib.parse import urlencode

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import RedirectResponse
from motor.motor_asyncio import AsyncIOMotorDatabase
from redis.asyncio import Redis

from ...core.auth import get_current_token, get_current_user
from ...core.config import settings
from ...dependencies import get_mongo_db, get_redis
from ...schemas.auth import AuthUrlResponse, LogoutResponse, VerifyResponse
from ...schemas.user import GoogleUser
from ...services import auth as auth_service

router = APIRouter()


def _frontend_redirect(path: str, **params: str) -> RedirectResponse:
    return RedirectResponse(f"{settings.frontend_base_url}{path}?{urlencode(params)}")


@router.get("/google", response_model=AuthUrlResponse, summary="Google 로그인 URL")
async def google_login(state: str | None = None) -> AuthUrlResponse:
    return AuthUrlResponse(auth_url=auth_service.build_google_auth_url(state))


@router.get("/google/callback", include_in_schema=False)
async def google_callback(
    code: str | None = None,
    error: str | None = None,
    db: AsyncIOMotorDatabase = Depends(get_mongo_db),
) -> RedirectResponse:
    if error or not code:
        return _frontend_redirect("/auth/error", message=error or "인가 코드가 없습니다.")
    try:
        user = await auth_service.fetch_google_user(code)
        await auth_service.upsert_user(db, user)
    except HTTPException as exc:
        return _frontend_redirect("/auth/error", message=str(exc.detail))
    return _frontend_redirect("/auth/success", token=auth_service.issue_token(user))


@router.get("/verify", response_model=VerifyResponse)
async def verify(user: GoogleUser = Depends(get_current_user)) -> VerifyResponse:
    return VerifyResponse(user=user)


@router.post("/logout", response_model=LogoutResponse)
async def logout(
    payload: dict = Depends(get_current_token),
    redis: Redis = Depends(get_redis),
) -> LogoutResponse:
    await auth_service.revoke_token(redis, payload)
    return LogoutResponse()
