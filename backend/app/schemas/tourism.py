from typing import Any

from pydantic import BaseModel, Field


class TouristSpot(BaseModel):
    content_id: str
    title: str
    address: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    image_url: str | None = None
    area_code: int | None = None
    area_name: str | None = None
    spot_category: str | None = None
    tel: str | None = None
    zipcode: str | None = None
    homepage: str | None = None
    overview: str | None = None
    info_center: str | None = None
    rest_date: str | None = None
    use_time: str | None = None
    parking: str | None = None
    unesco: bool = False
    distance: float | None = Field(default=None, description="요청 좌표로부터의 거리 (미터)")
    source: str = "db"

    @classmethod
    def from_mongo(cls, doc: dict[str, Any], distance: float | None = None) -> "TouristSpot":
        data = {key: value for key, value in doc.items() if key in cls.model_fields and key != "distance"}
        data["content_id"] = str(doc["content_id"])
        return cls(**data, distance=distance)


class TouristSpotList(BaseModel):
    success: bool = True
    message: str
    data: list[TouristSpot]
    count: int


class TouristSpotDetail(BaseModel):
    success: bool = True
    data: TouristSpot


class TouristSpotStats(BaseModel):
    success: bool = True
    total_count: int


class ImportResult(BaseModel):
    success: bool = True
    saved: int
    updated: int
    total: int
