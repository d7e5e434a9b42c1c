from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from redis.asyncio import Redis

from ..dependencies import get_redis
from ..schemas.user import GoogleUser
from ..services import auth as auth_service
from .security import TokenError, decode_token

http_bearer = HTTPBearer(auto_error=False)


async def get_current_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(http_bearer),
    redis: Redis = Depends(get_redis),
) -> dict:
    if credentials is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="인증 정보가 필요합니다.")

    payload = decode_token(credentials.credentials)
    if await auth_service.is_revoked(redis, payload.get("jti")):
        raise TokenError(detail="로그아웃된 토큰입니다.")
    return payload


async def get_current_user(payload: dict = Depends(get_current_token)) -> GoogleUser:
    return GoogleUser(
        id=payload.get("id") or payload["sub"],
        email=payload.get("email"),
        name=payload.get("name") or "사용자",
        picture=payload.get("picture"),
    )
