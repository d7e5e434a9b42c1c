import logging

from fastapi import APIRouter, Depends, Query
from motor.motor_asyncio import AsyncIOMotorDatabase

from ...dependencies import get_mongo_db
from ...schemas.stamp import StampCardList
from ...services import stamps as stamp_service
from ...services import tourism as tourism_service
from .tourist_spots import DEFAULT_LAT, DEFAULT_LON

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/experience-centers", response_model=StampCardList, summary="찍고갈래 체험관")
async def experience_centers(
    latitude: float = Query(..., ge=-90, le=90),
    longitude: float = Query(..., ge=-180, le=180),
    limit: int = Query(default=30, ge=1, le=100),
    db: AsyncIOMotorDatabase = Depends(get_mongo_db),
) -> StampCardList:
    spots = await tourism_service.get_experience_centers(db, latitude, longitude, limit=limit)
    cards = stamp_service.to_stamp_cards(spots, default_description="체험관 정보", default_category="체험관")
    logger.info("찍고갈래 체험관 조회: %.5f, %.5f -> %d개", latitude, longitude, len(cards))
    return StampCardList(message="찍고갈래 체험관 데이터 조회 완료", data=cards, count=len(cards))


@router.get("/unesco-sites", response_model=StampCardList, summary="찍고갈래 유네스코 세계유산")
async def unesco_sites(
    latitude: float = Query(..., ge=-90, le=90),
    longitude: float = Query(..., ge=-180, le=180),
    limit: int = Query(default=50, ge=1, le=100),
    db: AsyncIOMotorDatabase = Depends(get_mongo_db),
) -> StampCardList:
    spots = await tourism_service.get_unesco_spots(db, latitude, longitude, limit=limit)
    cards = stamp_service.to_stamp_cards(
        spots, unesco=True, default_description="유네스코 세계유산", default_category="유네스코 세계유산"
    )
    return StampCardList(message="찍고갈래 유네스코 데이터 조회 완료", data=cards, count=len(cards))


@router.get("/tourist-spots", response_model=StampCardList, summary="찍고갈래 관광지")
async def stamp_tourist_spots(
    latitude: float = Query(..., ge=-90, le=90),
    longitude: float = Query(..., ge=-180, le=180),
    limit: int = Query(default=50, ge=1, le=100),
    category: str | None = Query(default=None, description="culturalHeritage, touristSpot, experienceCenter"),
    db: AsyncIOMotorDatabase = Depends(get_mongo_db),
) -> StampCardList:
    spots = await tourism_service.get_stamp_spots(db, latitude, longitude, category_type=category, limit=limit)
    cards = stamp_service.to_stamp_cards(spots)
    return StampCardList(
        message=f"찍고갈래 {category or '전체'} 데이터 조회 완료",
        data=cards,
        count=len(cards),
        category=category or "all",
    )


@router.get("/unesco-spots", response_model=StampCardList, summary="유네스코 세계유산 (거리순)")
async def unesco_spots(
    latitude: float = Query(default=DEFAULT_LAT, ge=-90, le=90),
    longitude: float = Query(default=DEFAULT_LON, ge=-180, le=180),
    limit: int = Query(default=50, ge=1, le=100),
    db: AsyncIOMotorDatabase = Depends(get_mongo_db),
) -> StampCardList:
    spots = await tourism_service.get_unesco_spots(db, latitude, longitude, limit=limit)
    cards = stamp_service.to_stamp_cards(spots, unesco=True, default_description="UNESCO 세계유산", default_category="문화재")
    return StampCardList(message="UNESCO 세계유산 데이터 조회 완료", data=cards, count=len(cards))
