from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

LatLon = tuple[float, float]


class Footprint(BaseModel):
    """건물 외곽을 북서/남동 꼭짓점 두 개로 표현한 사각 영역"""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    name_en: str | None = None
    northwest: LatLon
    southeast: LatLon

    @model_validator(mode="after")
    def _check_corners(self) -> "Footprint":
        if not (self.northwest[0] > self.southeast[0] and self.northwest[1] < self.southeast[1]):
            raise ValueError(f"{self.id}: 북서 꼭짓점은 남동 꼭짓점보다 북쪽·서쪽이어야 합니다.")
        return self

    @property
    def midpoint(self) -> LatLon:
        return (
            (self.northwest[0] + self.southeast[0]) / 2,
            (self.northwest[1] + self.southeast[1]) / 2,
        )


class LandmarkInfo(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    id: str
    name: str
    name_en: str | None = None
    center: LatLon
    radius_m: float | None = None
    description: str = ""
    detailed_description: str = ""
    build_year: str = ""
    cultural_property: str = ""
    features: tuple[str, ...] = ()
    images: tuple[str, ...] = ()
    synthesized: bool = False

    @classmethod
    def from_footprint(cls, footprint: Footprint, landmark_id: str | None = None) -> "LandmarkInfo":
        """상세 데이터가 없는 폴리곤 건물의 최소 정보를 만든다."""
        return cls(
            id=landmark_id or footprint.id,
            name=footprint.name,
            name_en=footprint.name_en,
            center=footprint.midpoint,
            description=f"{footprint.name}은 경복궁의 중요한 건물 중 하나입니다.",
            detailed_description=f"{footprint.name}은 조선시대의 건축 양식을 잘 보여주는 문화재입니다.",
            build_year="조선시대",
            cultural_property="문화재",
            features=("전통 건축", "경복궁 건물"),
            synthesized=True,
        )


class ResolvedLandmark(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    matched_by_footprint: bool
    distance_meters: float | None
    landmark: LandmarkInfo


class CoordinatesIn(BaseModel):
    latitude: float = Field(..., description="위도", allow_inf_nan=False)
    longitude: float = Field(..., description="경도", allow_inf_nan=False)


class LocateResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    matched: bool
    id: str | None = None
    name: str | None = None
    matched_by_footprint: bool = False
    distance_meters: float | None = None

    @classmethod
    def from_resolved(cls, resolved: ResolvedLandmark | None) -> "LocateResponse":
        if resolved is None:
            return cls(matched=False)
        return cls(
            matched=True,
            id=resolved.id,
            name=resolved.name,
            matched_by_footprint=resolved.matched_by_footprint,
            distance_meters=resolved.distance_meters,
        )


class BuildingBrief(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    name: str
    name_en: str | None = None
    distance: float | None = None


class LocationCheckResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = True
    message: str
    in_palace: bool
    near_building: bool
    building: BuildingBrief | None = None


class BuildingSummary(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    name: str
    name_en: str | None = None
    description: str
    latitude: float
    longitude: float
    cultural_property: str


class BuildingListResponse(BaseModel):
    success: bool = True
    buildings: list[BuildingSummary]
    total: int


class BuildingDetailResponse(BaseModel):
    success: bool = True
    building: LandmarkInfo


class PhotoAnalysisResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool
    message: str
    photo_url: str
    in_palace: bool
    building: LandmarkInfo | None = None
    distance_to_building: float | None = None
    matched_by_footprint: bool = False
    address: str | None = None
    captured_at: str | None = None
