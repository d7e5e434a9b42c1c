"""
TourAPI 연동/관광지 저장소 테스트 (외부 호출은 monkeypatch)
"""
from typing import Any

import pytest
from fastapi import HTTPException

from backend.app.services import tourism as tourism_service
from backend.app.services.geolocation import haversine_distance

GYEONGBOKGUNG_ITEM = {
    "contentid": "126508",
    "contenttypeid": "12",
    "title": "경복궁",
    "addr1": "서울특별시 종로구 사직로 161",
    "addr2": "",
    "areacode": "1",
    "firstimage": "http://tong.visitkorea.or.kr/cms/resource/gyeongbokgung.jpg",
    "mapx": "126.9767375783",
    "mapy": "37.5760836609",
    "tel": "02-3700-3900",
    "zipcode": "03045",
}

DEOKSUGUNG_ITEM = {
    "contentid": "126509",
    "contenttypeid": "12",
    "title": "덕수궁",
    "addr1": "서울특별시 중구 세종대로 99",
    "areacode": "1",
    "mapx": "126.9751",
    "mapy": "37.5658",
    "dist": "1250.3",
}


def _envelope(items: Any, result_code: str = "0000") -> dict[str, Any]:
    return {
        "response": {
            "header": {"resultCode": result_code, "resultMsg": "OK" if result_code == "0000" else "SERVICE_KEY_IS_NOT_REGISTERED_ERROR"},
            "body": {"items": items, "numOfRows": 10, "pageNo": 1, "totalCount": 2},
        }
    }


def test_extract_items_normalizes_single_item():
    assert tourism_service.extract_items(_envelope({"item": GYEONGBOKGUNG_ITEM})) == [GYEONGBOKGUNG_ITEM]
    assert tourism_service.extract_items(_envelope({"item": [GYEONGBOKGUNG_ITEM, DEOKSUGUNG_ITEM]})) == [
        GYEONGBOKGUNG_ITEM,
        DEOKSUGUNG_ITEM,
    ]
    # 결과가 없으면 items가 빈 문자열
    assert tourism_service.extract_items(_envelope("")) == []


def test_extract_items_rejects_error_result_code():
    with pytest.raises(HTTPException) as exc:
        tourism_service.extract_items(_envelope({"item": []}, result_code="30"))
    assert exc.value.status_code == 502


def test_item_to_spot_builds_geojson_location():
    spot = tourism_service.item_to_spot(GYEONGBOKGUNG_ITEM)
    assert spot["content_id"] == "126508"
    assert spot["address"] == "서울특별시 종로구 사직로 161"
    assert spot["area_name"] == "서울"
    assert spot["spot_category"] == "관광지"
    assert spot["location"] == {"type": "Point", "coordinates": [126.9767375783, 37.5760836609]}


def test_item_without_coordinates_has_no_location():
    spot = tourism_service.item_to_spot({"contentid": "1", "title": "좌표 없음", "mapx": "", "mapy": None})
    assert spot["latitude"] is None
    assert "location" not in spot


@pytest.mark.asyncio
async def test_import_upserts_by_content_id(db, monkeypatch: pytest.MonkeyPatch):
    async def fake_area_list(area_code: int = 1, **_kwargs: Any) -> list[dict[str, Any]]:
        assert area_code == 1
        return [GYEONGBOKGUNG_ITEM, DEOKSUGUNG_ITEM]

    monkeypatch.setattr(tourism_service, "fetch_area_based_list", fake_area_list)

    first = await tourism_service.import_area_spots(db)
    assert first == {"saved": 2, "updated": 0, "total": 2}

    second = await tourism_service.import_area_spots(db)
    assert second == {"saved": 0, "updated": 2, "total": 2}
    assert await tourism_service.count_spots(db) == 2

    spot = await tourism_service.get_spot(db, "126508")
    assert spot.title == "경복궁"
    assert spot.unesco is False


@pytest.mark.asyncio
async def test_get_spot_missing_is_404(db):
    with pytest.raises(HTTPException) as exc:
        await tourism_service.get_spot(db, "does-not-exist")
    assert exc.value.status_code == 404


@pytest.mark.asyncio
async def test_unknown_category_is_400(db):
    with pytest.raises(HTTPException) as exc:
        await tourism_service.get_spots_by_category(db, "restaurant", 37.5788, 126.977)
    assert exc.value.status_code == 400


@pytest.mark.asyncio
async def test_location_list_is_cached(monkeypatch: pytest.MonkeyPatch, redis_client):
    calls: list[dict[str, Any]] = []

    async def fake_get_json(path: str, params: dict[str, Any]) -> dict[str, Any]:
        calls.append({"path": path, **params})
        return _envelope({"item": DEOKSUGUNG_ITEM})

    monkeypatch.setattr(tourism_service, "_get_json", fake_get_json)

    items = await tourism_service.fetch_location_based_list(37.5788, 126.977, redis_client=redis_client)
    assert items == [DEOKSUGUNG_ITEM]
    cached = await tourism_service.fetch_location_based_list(37.5788, 126.977, redis_client=redis_client)
    assert cached == [DEOKSUGUNG_ITEM]

    assert len(calls) == 1
    assert calls[0]["path"] == "locationBasedList2"
    assert calls[0]["arrange"] == "E"
    assert calls[0]["contentTypeId"] == 12
    assert calls[0]["mapX"] == 126.977
    assert calls[0]["mapY"] == 37.5788


@pytest.mark.asyncio
async def test_location_list_failure_returns_empty(monkeypatch: pytest.MonkeyPatch):
    async def failing_get_json(path: str, params: dict[str, Any]) -> dict[str, Any]:
        raise HTTPException(status_code=502, detail="TourAPI 호출 실패")

    monkeypatch.setattr(tourism_service, "_get_json", failing_get_json)
    assert await tourism_service.fetch_location_based_list(37.5788, 126.977) == []


@pytest.mark.asyncio
async def test_nearby_falls_back_to_tourapi(db, monkeypatch: pytest.MonkeyPatch):
    async def no_stored_spots(*_args: Any) -> list:
        return []

    async def fake_location_list(lat: float, lon: float, **kwargs: Any) -> list[dict[str, Any]]:
        assert kwargs["radius_m"] == tourism_service.NEARBY_MAX_DISTANCE_M
        return [DEOKSUGUNG_ITEM]

    monkeypatch.setattr(tourism_service, "_find_spots", no_stored_spots)
    monkeypatch.setattr(tourism_service, "fetch_location_based_list", fake_location_list)

    spots = await tourism_service.get_nearby_spots(db, 37.5788, 126.977)
    assert len(spots) == 1
    assert spots[0].title == "덕수궁"
    assert spots[0].distance == pytest.approx(1250.3)
    assert spots[0].source == "tourapi"


# ---- 분류 / 유네스코 ----

@pytest.mark.parametrize(
    "item, expected",
    [
        ({"contenttypeid": "12", "cat2": "A0201"}, "문화재"),
        ({"contenttypeid": "12", "cat2": "A0101"}, "관광지"),
        ({"contenttypeid": "12"}, "관광지"),
        ({"contenttypeid": "14", "cat2": "A0206"}, "문화시설"),
        ({"contenttypeid": "39"}, None),
    ],
)
def test_classify_spot_by_content_type(item: dict[str, Any], expected: str | None):
    assert tourism_service.classify_spot(item) == expected


@pytest.mark.parametrize(
    "title, expected",
    [
        ("종묘", True),
        ("창덕궁과 후원", True),
        ("서울 선릉과 정릉 [유네스코 세계유산]", True),
        ("남한산성 (경기 광주)", True),
        ("경복궁", False),
        ("정릉동 먹자골목", False),
    ],
)
def test_is_unesco_site(title: str, expected: bool):
    assert tourism_service.is_unesco_site(title) is expected


@pytest.mark.asyncio
async def test_import_fetches_tourist_spots_and_cultural_facilities(db, monkeypatch: pytest.MonkeyPatch):
    jongmyo = {**GYEONGBOKGUNG_ITEM, "contentid": "126510", "title": "종묘", "cat2": "A0201"}
    museum = {
        "contentid": "129703",
        "contenttypeid": "14",
        "title": "국립고궁박물관",
        "areacode": "1",
        "mapx": "126.9752",
        "mapy": "37.5765",
    }
    requested: list[int] = []

    async def fake_area_list(area_code: int = 1, *, content_type_id: int = 12, **_kwargs: Any) -> list[dict[str, Any]]:
        requested.append(content_type_id)
        if content_type_id == 14:
            return [museum, jongmyo]
        return [GYEONGBOKGUNG_ITEM, jongmyo]

    monkeypatch.setattr(tourism_service, "fetch_area_based_list", fake_area_list)

    result = await tourism_service.import_area_spots(db)
    assert requested == [12, 14]
    assert result == {"saved": 3, "updated": 0, "total": 3}

    assert (await tourism_service.get_spot(db, "129703")).spot_category == "문화시설"
    heritage = await tourism_service.get_spot(db, "126510")
    assert heritage.spot_category == "문화재"
    assert heritage.unesco is True
    assert (await tourism_service.get_spot(db, "126508")).unesco is False


# ---- $near 질의 문서 ----

class _RecordingCursor:
    def __init__(self, docs: list[dict[str, Any]]) -> None:
        self._docs = docs
        self.limit_value: int | None = None

    def limit(self, value: int) -> "_RecordingCursor":
        self.limit_value = value
        return self

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        for doc in self._docs[: self.limit_value]:
            yield doc


class _RecordingCollection:
    """find()에 전달된 질의를 기록 (mongomock은 $near를 지원하지 않음)"""

    def __init__(self, docs: list[dict[str, Any]] | None = None) -> None:
        self.docs = docs or []
        self.queries: list[dict[str, Any]] = []
        self.cursors: list[_RecordingCursor] = []

    def find(self, query: dict[str, Any]) -> _RecordingCursor:
        self.queries.append(query)
        cursor = _RecordingCursor(self.docs)
        self.cursors.append(cursor)
        return cursor


def _recording_db(docs: list[dict[str, Any]] | None = None) -> tuple[dict[str, _RecordingCollection], _RecordingCollection]:
    collection = _RecordingCollection(docs)
    return {tourism_service.SPOTS_COLLECTION: collection}, collection


def _near(lat: float, lon: float, max_distance: float) -> dict[str, Any]:
    return {
        "$near": {
            "$geometry": {"type": "Point", "coordinates": [lon, lat]},
            "$maxDistance": max_distance,
        }
    }


STORED_DEOKSUGUNG = {**tourism_service.item_to_spot(DEOKSUGUNG_ITEM), "_id": "stored-1"}


@pytest.mark.asyncio
async def test_category_query_filters_by_category_near_point():
    db, collection = _recording_db([STORED_DEOKSUGUNG])

    spots = await tourism_service.get_spots_by_category(db, "culturalHeritage", 37.5788, 126.977, radius_m=5000, limit=7)

    assert collection.queries == [{"location": _near(37.5788, 126.977, 5000), "spot_category": "문화재"}]
    assert collection.cursors[0].limit_value == 7
    assert [spot.content_id for spot in spots] == ["126509"]
    assert spots[0].distance == round(haversine_distance(37.5788, 126.977, 37.5658, 126.9751), 1)


@pytest.mark.asyncio
async def test_unesco_query_requires_flag():
    db, collection = _recording_db()

    assert await tourism_service.get_unesco_spots(db, 37.5788, 126.977, limit=5) == []
    assert collection.queries == [
        {"location": _near(37.5788, 126.977, tourism_service.UNESCO_MAX_DISTANCE_M), "unesco": True}
    ]
    assert collection.cursors[0].limit_value == 5


@pytest.mark.asyncio
async def test_nearby_uses_stored_spots_before_tourapi(monkeypatch: pytest.MonkeyPatch):
    db, collection = _recording_db([STORED_DEOKSUGUNG])

    async def unexpected_location_list(*_args: Any, **_kwargs: Any) -> list:
        raise AssertionError("저장된 관광지가 있으면 TourAPI를 호출하지 않는다")

    monkeypatch.setattr(tourism_service, "fetch_location_based_list", unexpected_location_list)

    spots = await tourism_service.get_nearby_spots(db, 37.5788, 126.977, limit=3)
    assert collection.queries == [{"location": _near(37.5788, 126.977, tourism_service.NEARBY_MAX_DISTANCE_M)}]
    assert collection.cursors[0].limit_value == 3
    assert len(spots) == 1
    assert spots[0].title == "덕수궁"
    assert spots[0].source == "db"
    assert spots[0].distance is not None


@pytest.mark.asyncio
async def test_experience_center_query_matches_keywords():
    db, collection = _recording_db()

    await tourism_service.get_experience_centers(db, 37.5788, 126.977, limit=30)

    query = collection.queries[0]
    assert query["location"] == _near(37.5788, 126.977, tourism_service.STAMP_MAX_DISTANCE_M)
    assert {"spot_category": "문화시설"} in query["$or"]
    pattern = query["$or"][1]["spot_category"]["$regex"]
    for keyword in ("체험관", "박물관", "전시관", "문화센터", "교육시설"):
        assert keyword in pattern.split("|")
    assert query["$or"][2] == {"title": {"$regex": pattern}}


@pytest.mark.asyncio
async def test_stamp_spots_with_and_without_category():
    db, collection = _recording_db()

    await tourism_service.get_stamp_spots(db, 37.5788, 126.977)
    await tourism_service.get_stamp_spots(db, 37.5788, 126.977, category_type="touristSpot", limit=10)

    radius = tourism_service.STAMP_MAX_DISTANCE_M
    assert collection.queries == [
        {"location": _near(37.5788, 126.977, radius)},
        {"location": _near(37.5788, 126.977, radius), "spot_category": "관광지"},
    ]

    with pytest.raises(HTTPException) as exc:
        await tourism_service.get_stamp_spots(db, 37.5788, 126.977, category_type="restaurant")
    assert exc.value.status_code == 400
