from fastapi import APIRouter

from ...db.mongo import MongoConnectionManager
from ...db.redis import RedisConnectionManager

router = APIRouter()


@router.get("/health", summary="애플리케이션 헬스체크")
async def healthcheck() -> dict[str, str]:
    database = "connected" if await MongoConnectionManager.ping() else "disconnected"
    cache = "connected" if await RedisConnectionManager.ping() else "disconnected"
    return {"status": "ok", "database": database, "redis": cache}
