from fastapi import APIRouter

from ...core.config import settings
from ...services.landmark_data import PALACE_BOUNDS

router = APIRouter()

# 지도 초기 중심: 경복궁 근정전 앞
MAP_CENTER = {"latitude": 37.5788, "longitude": 126.9770}


@router.get("/maps", summary="프런트에서 사용할 Kakao 지도 설정")
async def maps_config() -> dict:
    return {
        "kakaoMapAppKey": settings.kakao_map_app_key,
        "center": MAP_CENTER,
        "palaceBounds": dict(PALACE_BOUNDS),
    }
