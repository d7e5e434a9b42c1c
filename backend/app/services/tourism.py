"""한국관광공사 TourAPI 연동 및 관광지 저장소"""
from __future__ import annotations

import json
import logging
import re
from datetime import datetime, timezone
from typing import Any

import httpx
from fastapi import HTTPException, status
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import UpdateOne

from ..core.config import settings
from ..schemas.tourism import TouristSpot
from .geolocation import haversine_distance

logger = logging.getLogger(__name__)

SPOTS_COLLECTION = "tourist_spots"

SEOUL_AREA_CODE = 1
TOURIST_SPOT_CONTENT_TYPE = 12
CULTURAL_FACILITY_CONTENT_TYPE = 14
IMPORT_CONTENT_TYPES = (TOURIST_SPOT_CONTENT_TYPE, CULTURAL_FACILITY_CONTENT_TYPE)
# 관광지(12) 중 중분류 역사관광지
HISTORIC_SITE_CAT2 = "A0201"

NEARBY_MAX_DISTANCE_M = 20_000
STAMP_MAX_DISTANCE_M = 50_000
UNESCO_MAX_DISTANCE_M = 20_000_000

CATEGORY_MAP = {
    "culturalHeritage": "문화재",
    "touristSpot": "관광지",
    "experienceCenter": "문화시설",
}

AREA_NAMES = {1: "서울", 2: "인천", 31: "경기", 35: "경북", 36: "경남"}

EXPERIENCE_KEYWORDS = ("체험관", "박물관", "전시관", "문화센터", "교육시설")

# 공백과 괄호 설명을 제거한 TourAPI 제목 기준
UNESCO_TITLES = frozenset(
    {
        "종묘",
        "창덕궁",
        "창덕궁과후원",
        "수원화성",
        "남한산성",
        "서울선릉과정릉",
        "서울헌릉과인릉",
        "서울태릉과강릉",
        "서울의릉",
        "구리동구릉",
        "불국사",
        "석굴암",
        "해인사",
        "합천해인사",
        "안동하회마을",
        "경주양동마을",
        "경주역사유적지구",
        "강화고인돌유적",
        "부석사",
        "통도사",
        "도산서원",
    }
)


def _common_params() -> dict[str, Any]:
    return {
        "serviceKey": settings.tour_api_key,
        "MobileOS": "ETC",
        "MobileApp": "PalaceTour",
        "_type": "json",
    }


def extract_items(data: dict[str, Any]) -> list[dict[str, Any]]:
    """TourAPI 응답에서 item 목록을 꺼낸다. item이 하나면 dict로 오므로 리스트로 맞춘다."""
    response = data.get("response")
    if not isinstance(response, dict):
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="TourAPI 응답 구조가 예상과 다릅니다.")

    header = response.get("header") or {}
    if header.get("resultCode") not in (None, "0000"):
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"TourAPI 오류: {header.get('resultMsg', '알 수 없는 오류')}",
        )

    items = (response.get("body") or {}).get("items") or {}
    if not isinstance(items, dict):
        # 결과가 없으면 items가 빈 문자열로 내려온다
        return []
    item = items.get("item") or []
    return item if isinstance(item, list) else [item]


def _to_float(value: Any) -> float | None:
    try:
        return float(value) if value not in (None, "") else None
    except (TypeError, ValueError):
        return None


def classify_spot(item: dict[str, Any]) -> str | None:
    """콘텐츠 타입과 분류 코드로 spot_category 결정"""
    content_type = str(item.get("contenttypeid") or "")
    if content_type == str(CULTURAL_FACILITY_CONTENT_TYPE):
        return CATEGORY_MAP["experienceCenter"]
    if content_type == str(TOURIST_SPOT_CONTENT_TYPE):
        if item.get("cat2") == HISTORIC_SITE_CAT2:
            return CATEGORY_MAP["culturalHeritage"]
        return CATEGORY_MAP["touristSpot"]
    return None


def is_unesco_site(title: str) -> bool:
    if "유네스코" in title:
        return True
    normalized = re.sub(r"\[[^\]]*\]|\([^)]*\)|\s+", "", title)
    return normalized in UNESCO_TITLES


def item_to_spot(item: dict[str, Any]) -> dict[str, Any]:
    """TourAPI item을 tourist_spots 문서 형태로 변환"""
    latitude = _to_float(item.get("mapy"))
    longitude = _to_float(item.get("mapx"))
    area_code = int(item["areacode"]) if str(item.get("areacode") or "").isdigit() else None
    address = " ".join(part for part in (item.get("addr1"), item.get("addr2")) if part) or None
    doc: dict[str, Any] = {
        "content_id": str(item.get("contentid")),
        "title": item.get("title", ""),
        "address": address,
        "latitude": latitude,
        "longitude": longitude,
        "image_url": item.get("firstimage") or None,
        "area_code": area_code,
        "area_name": AREA_NAMES.get(area_code) if area_code else None,
        "spot_category": classify_spot(item),
        "unesco": is_unesco_site(item.get("title", "")),
        "tel": item.get("tel") or None,
        "zipcode": item.get("zipcode") or None,
    }
    if latitude is not None and longitude is not None:
        doc["location"] = {"type": "Point", "coordinates": [longitude, latitude]}
    return doc


async def _get_json(path: str, params: dict[str, Any]) -> dict[str, Any]:
    if not settings.tour_api_key:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="TOUR_API_KEY가 설정되지 않았습니다.")
    try:
        async with httpx.AsyncClient(timeout=10.0, headers={"User-Agent": "PalaceTour/1.0"}) as client:
            response = await client.get(f"{settings.tour_api_base_url}/{path}", params={**_common_params(), **params})
            response.raise_for_status()
            return response.json()
    except (httpx.HTTPError, ValueError) as exc:
        logger.error("TourAPI 호출 실패 (%s): %s", path, exc)
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=f"TourAPI 호출 실패: {exc}") from exc


async def fetch_location_based_list(
    lat: float,
    lon: float,
    *,
    radius_m: int = 10_000,
    limit: int = 10,
    redis_client=None,
) -> list[dict[str, Any]]:
    """좌표 기준 거리순 관광지 목록 (TourAPI locationBasedList). 실패하면 빈 목록."""
    cache_key = f"tourapi:location:{lat:.4f}:{lon:.4f}:{radius_m}:{limit}"
    if redis_client:
        try:
            cached = await redis_client.get(cache_key)
            if cached:
                return json.loads(cached)
        except Exception as e:
            logger.warning(f"Redis 캐시 조회 실패: {e}")

    try:
        data = await _get_json(
            "locationBasedList2",
            {
                "numOfRows": limit,
                "pageNo": 1,
                "arrange": "E",
                "mapX": lon,
                "mapY": lat,
                "radius": radius_m,
                "contentTypeId": TOURIST_SPOT_CONTENT_TYPE,
            },
        )
        items = extract_items(data)
    except HTTPException as exc:
        logger.warning("TourAPI 위치기반 조회 실패: %s", exc.detail)
        return []

    if redis_client and items:
        try:
            await redis_client.set(cache_key, json.dumps(items, ensure_ascii=False), ex=settings.tour_api_cache_ttl)
        except Exception as e:
            logger.warning(f"Redis 캐싱 실패: {e}")
    return items


async def fetch_area_based_list(
    area_code: int = SEOUL_AREA_CODE,
    *,
    content_type_id: int = TOURIST_SPOT_CONTENT_TYPE,
    rows: int = 100,
    page: int = 1,
) -> list[dict[str, Any]]:
    data = await _get_json(
        "areaBasedList2",
        {
            "numOfRows": rows,
            "pageNo": page,
            "arrange": "A",
            "contentTypeId": content_type_id,
            "areaCode": area_code,
        },
    )
    return extract_items(data)


async def import_area_spots(db: AsyncIOMotorDatabase, area_code: int = SEOUL_AREA_CODE) -> dict[str, int]:
    """지역 관광지(관광지, 문화시설)를 content_id 기준으로 upsert"""
    items: list[dict[str, Any]] = []
    seen: set[str] = set()
    for content_type_id in IMPORT_CONTENT_TYPES:
        for item in await fetch_area_based_list(area_code, content_type_id=content_type_id):
            content_id = str(item.get("contentid") or "")
            if not content_id or content_id in seen:
                continue
            seen.add(content_id)
            items.append(item)

    now = datetime.now(timezone.utc)
    operations = []
    for item in items:
        doc = item_to_spot(item)
        operations.append(
            UpdateOne(
                {"content_id": doc["content_id"]},
                {"$set": {**doc, "updated_at": now}, "$setOnInsert": {"created_at": now}},
                upsert=True,
            )
        )
    if not operations:
        return {"saved": 0, "updated": 0, "total": len(items)}

    result = await db[SPOTS_COLLECTION].bulk_write(operations, ordered=False)
    logger.info("관광지 저장 완료: 신규 %d개, 업데이트 %d개", result.upserted_count, result.matched_count)
    return {"saved": result.upserted_count, "updated": result.matched_count, "total": len(items)}


def _near_query(lat: float, lon: float, max_distance_m: float) -> dict[str, Any]:
    return {
        "location": {
            "$near": {
                "$geometry": {"type": "Point", "coordinates": [lon, lat]},
                "$maxDistance": max_distance_m,
            }
        }
    }


async def _find_spots(db: AsyncIOMotorDatabase, query: dict[str, Any], lat: float, lon: float, limit: int) -> list[TouristSpot]:
    cursor = db[SPOTS_COLLECTION].find(query).limit(limit)
    spots: list[TouristSpot] = []
    async for doc in cursor:
        distance = None
        if doc.get("latitude") is not None and doc.get("longitude") is not None:
            distance = round(haversine_distance(lat, lon, doc["latitude"], doc["longitude"]), 1)
        spots.append(TouristSpot.from_mongo(doc, distance=distance))
    return spots


async def get_nearby_spots(
    db: AsyncIOMotorDatabase,
    lat: float,
    lon: float,
    *,
    limit: int = 3,
    redis_client=None,
) -> list[TouristSpot]:
    """
    저장된 관광지 중 가까운 곳을 조회
    저장소에 결과가 없으면 TourAPI 위치기반 조회로 대체
    """
    spots = await _find_spots(db, _near_query(lat, lon, NEARBY_MAX_DISTANCE_M), lat, lon, limit)
    if spots:
        return spots

    logger.info("저장된 주변 관광지 없음, TourAPI로 대체: %.5f, %.5f", lat, lon)
    items = await fetch_location_based_list(lat, lon, radius_m=NEARBY_MAX_DISTANCE_M, limit=limit, redis_client=redis_client)
    results: list[TouristSpot] = []
    for item in items:
        doc = item_to_spot(item)
        distance = _to_float(item.get("dist"))
        if distance is None and doc["latitude"] is not None and doc["longitude"] is not None:
            distance = haversine_distance(lat, lon, doc["latitude"], doc["longitude"])
        results.append(TouristSpot.from_mongo(doc, distance=distance).model_copy(update={"source": "tourapi"}))
    return results


async def get_spot(db: AsyncIOMotorDatabase, content_id: str) -> TouristSpot:
    doc = await db[SPOTS_COLLECTION].find_one({"content_id": content_id})
    if not doc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="관광지를 찾을 수 없습니다.")
    return TouristSpot.from_mongo(doc)


async def count_spots(db: AsyncIOMotorDatabase) -> int:
    return await db[SPOTS_COLLECTION].count_documents({})


async def get_spots_by_category(
    db: AsyncIOMotorDatabase,
    category_type: str,
    lat: float,
    lon: float,
    *,
    radius_m: float = 10_000,
    limit: int = 50,
) -> list[TouristSpot]:
    spot_category = CATEGORY_MAP.get(category_type)
    if spot_category is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="잘못된 카테고리입니다.")
    query = {**_near_query(lat, lon, radius_m), "spot_category": spot_category}
    return await _find_spots(db, query, lat, lon, limit)


async def get_unesco_spots(db: AsyncIOMotorDatabase, lat: float, lon: float, *, limit: int = 50) -> list[TouristSpot]:
    query = {**_near_query(lat, lon, UNESCO_MAX_DISTANCE_M), "unesco": True}
    return await _find_spots(db, query, lat, lon, limit)


async def get_experience_centers(db: AsyncIOMotorDatabase, lat: float, lon: float, *, limit: int = 30) -> list[TouristSpot]:
    """문화시설이거나 분류/이름에 체험관·박물관 등 키워드가 들어간 곳"""
    pattern = "|".join(EXPERIENCE_KEYWORDS)
    query = {
        **_near_query(lat, lon, STAMP_MAX_DISTANCE_M),
        "$or": [
            {"spot_category": CATEGORY_MAP["experienceCenter"]},
            {"spot_category": {"$regex": pattern}},
            {"title": {"$regex": pattern}},
        ],
    }
    return await _find_spots(db, query, lat, lon, limit)


async def get_stamp_spots(
    db: AsyncIOMotorDatabase,
    lat: float,
    lon: float,
    *,
    category_type: str | None = None,
    limit: int = 50,
) -> list[TouristSpot]:
    if category_type:
        return await get_spots_by_category(
            db, category_type, lat, lon, radius_m=STAMP_MAX_DISTANCE_M, limit=limit
        )
    return await _find_spots(db, _near_query(lat, lon, STAMP_MAX_DISTANCE_M), lat, lon, limit)
