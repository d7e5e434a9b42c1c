from fastapi import APIRouter, Depends, Query
from motor.motor_asyncio import AsyncIOMotorDatabase
from redis.asyncio import Redis

from ...dependencies import get_mongo_db, get_redis
from ...schemas.tourism import ImportResult, TouristSpotDetail, TouristSpotList, TouristSpotStats
from ...services import tourism as tourism_service

router = APIRouter()

# 기본 기준점: 경복궁
DEFAULT_LAT = 37.5788
DEFAULT_LON = 126.9770


@router.get("/nearby", response_model=TouristSpotList, summary="주변 관광지")
async def nearby_spots(
    latitude: float = Query(..., ge=-90, le=90),
    longitude: float = Query(..., ge=-180, le=180),
    limit: int = Query(default=3, ge=1, le=20),
    db: AsyncIOMotorDatabase = Depends(get_mongo_db),
    redis: Redis = Depends(get_redis),
) -> TouristSpotList:
    spots = await tourism_service.get_nearby_spots(db, latitude, longitude, limit=limit, redis_client=redis)
    return TouristSpotList(message=f"주변 관광지 {len(spots)}개를 찾았습니다.", data=spots, count=len(spots))


@router.get("/stats", response_model=TouristSpotStats, summary="저장된 관광지 수")
async def spot_stats(db: AsyncIOMotorDatabase = Depends(get_mongo_db)) -> TouristSpotStats:
    return TouristSpotStats(total_count=await tourism_service.count_spots(db))


@router.get("/category/{category_type}", response_model=TouristSpotList, summary="카테고리별 관광지")
async def spots_by_category(
    category_type: str,
    latitude: float = Query(default=DEFAULT_LAT, ge=-90, le=90),
    longitude: float = Query(default=DEFAULT_LON, ge=-180, le=180),
    radius: float = Query(default=10_000, gt=0),
    limit: int = Query(default=50, ge=1, le=100),
    db: AsyncIOMotorDatabase = Depends(get_mongo_db),
) -> TouristSpotList:
    spots = await tourism_service.get_spots_by_category(
        db, category_type, latitude, longitude, radius_m=radius, limit=limit
    )
    return TouristSpotList(message=f"{tourism_service.CATEGORY_MAP[category_type]} {len(spots)}개", data=spots, count=len(spots))


@router.get("/unesco", response_model=TouristSpotList, summary="유네스코 세계유산")
async def unesco_spots(
    latitude: float = Query(default=DEFAULT_LAT, ge=-90, le=90),
    longitude: float = Query(default=DEFAULT_LON, ge=-180, le=180),
    limit: int = Query(default=50, ge=1, le=100),
    db: AsyncIOMotorDatabase = Depends(get_mongo_db),
) -> TouristSpotList:
    spots = await tourism_service.get_unesco_spots(db, latitude, longitude, limit=limit)
    return TouristSpotList(message=f"유네스코 세계유산 {len(spots)}개", data=spots, count=len(spots))


@router.post("/init", response_model=ImportResult, summary="서울 관광지 데이터 가져오기")
async def import_spots(db: AsyncIOMotorDatabase = Depends(get_mongo_db)) -> ImportResult:
    return ImportResult(**await tourism_service.import_area_spots(db))


@router.get("/{content_id}", response_model=TouristSpotDetail, summary="관광지 상세")
async def spot_detail(content_id: str, db: AsyncIOMotorDatabase = Depends(get_mongo_db)) -> TouristSpotDetail:
    return TouristSpotDetail(data=await tourism_service.get_spot(db, content_id))
