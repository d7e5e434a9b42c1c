import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status

from ...dependencies import get_resolver
from ...schemas.landmarks import (
    BuildingBrief,
    BuildingDetailResponse,
    BuildingListResponse,
    BuildingSummary,
    CoordinatesIn,
    LocateResponse,
    LocationCheckResponse,
    PhotoAnalysisResponse,
)
from ...schemas.philosophy import LocationInfo, PhilosophyRequest, PhilosophyResponse
from ...services import llm as llm_service
from ...services import uploads as upload_service
from ...services.landmark_data import PALACE_ADDRESS
from ...services.landmarks import LandmarkResolver, is_in_palace

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/gps", response_model=LocateResponse, summary="GPS 좌표로 건물 식별")
async def locate(
    payload: CoordinatesIn,
    resolver: LandmarkResolver = Depends(get_resolver),
) -> LocateResponse:
    return LocateResponse.from_resolved(resolver.resolve(payload.latitude, payload.longitude))


@router.post("/check-location", response_model=LocationCheckResponse, summary="촬영 위치 확인")
async def check_location(
    payload: CoordinatesIn,
    resolver: LandmarkResolver = Depends(get_resolver),
) -> LocationCheckResponse:
    in_palace = is_in_palace(payload.latitude, payload.longitude)
    resolved = resolver.resolve(payload.latitude, payload.longitude)
    if resolved is None:
        return LocationCheckResponse(message="위치를 확인할 수 없습니다.", in_palace=in_palace, near_building=False)

    distance = round(resolved.distance_meters or 0)
    suffix = "촬영 가능" if in_palace else "경복궁 밖에서 촬영"
    return LocationCheckResponse(
        message=f"📍 {resolved.name} ({distance}m) - {suffix}",
        in_palace=in_palace,
        near_building=True,
        building=BuildingBrief(
            id=resolved.id,
            name=resolved.name,
            name_en=resolved.landmark.name_en,
            distance=distance,
        ),
    )


@router.get("/buildings", response_model=BuildingListResponse, summary="건물 목록")
async def list_buildings(resolver: LandmarkResolver = Depends(get_resolver)) -> BuildingListResponse:
    buildings = [
        BuildingSummary(
            id=landmark.id,
            name=landmark.name,
            name_en=landmark.name_en,
            description=landmark.description,
            latitude=landmark.center[0],
            longitude=landmark.center[1],
            cultural_property=landmark.cultural_property,
        )
        for landmark in resolver.list_landmarks()
    ]
    return BuildingListResponse(buildings=buildings, total=len(buildings))


@router.get("/building/{building_id}", response_model=BuildingDetailResponse, summary="건물 상세")
async def get_building(
    building_id: str,
    resolver: LandmarkResolver = Depends(get_resolver),
) -> BuildingDetailResponse:
    landmark = resolver.get_landmark(building_id)
    if landmark is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="건물 정보를 찾을 수 없습니다.")
    return BuildingDetailResponse(building=landmark)


@router.post("/analyze-photo", response_model=PhotoAnalysisResponse, summary="사진 촬영 위치 분석")
async def analyze_photo(
    photo: UploadFile = File(...),
    latitude: float = Form(..., allow_inf_nan=False),
    longitude: float = Form(..., allow_inf_nan=False),
    resolver: LandmarkResolver = Depends(get_resolver),
) -> PhotoAnalysisResponse:
    photo_url, _ = await upload_service.save_image(photo)
    logger.info("사진 분석 요청: %s, 위치: %.6f, %.6f", photo_url, latitude, longitude)

    in_palace = is_in_palace(latitude, longitude)
    resolved = resolver.resolve(latitude, longitude)
    if resolved is None:
        return PhotoAnalysisResponse(
            success=False,
            message="건물을 식별할 수 없습니다.",
            photo_url=photo_url,
            in_palace=in_palace,
        )

    return PhotoAnalysisResponse(
        success=True,
        message=f"{resolved.name}을(를) 식별했습니다!",
        photo_url=photo_url,
        in_palace=in_palace,
        building=resolved.landmark,
        distance_to_building=resolved.distance_meters,
        matched_by_footprint=resolved.matched_by_footprint,
        address=PALACE_ADDRESS if in_palace else f"현재 위치 ({resolved.name} 인근)",
        captured_at=datetime.now(timezone.utc).isoformat(),
    )


@router.post("/philosophy/{building_id}", response_model=PhilosophyResponse, summary="건물 철학 해설 생성")
async def building_philosophy(
    building_id: str,
    payload: PhilosophyRequest | None = None,
    resolver: LandmarkResolver = Depends(get_resolver),
) -> PhilosophyResponse:
    payload = payload or PhilosophyRequest()
    building = resolver.find_or_synthesize(building_id)
    if building is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="건물 정보를 찾을 수 없습니다.")

    defaults = LocationInfo(
        address=PALACE_ADDRESS,
        latitude=building.center[0],
        longitude=building.center[1],
        distance_to_building=0,
    )
    location = defaults.model_copy(update=payload.location_info.model_dump(exclude_none=True))
    return await llm_service.generate_building_philosophy(building, location, payload.user_context)
