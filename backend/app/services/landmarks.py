"""
GPS 좌표로 건물(랜드마크)을 식별하는 리졸버

1. 건물 폴리곤(북서/남동 사각형)에 GPS 오차 버퍼를 더해 포함 여부를 확인하고,
   선언 순서상 먼저 포함되는 폴리곤을 채택합니다.
2. 어떤 폴리곤에도 속하지 않으면 각 랜드마크 중심까지의 거리를 계산해
   100m 미만인 가장 가까운 랜드마크를 반환합니다.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping, Sequence
from functools import lru_cache

from ..schemas.landmarks import Footprint, LandmarkInfo, ResolvedLandmark
from .geolocation import is_within_radius
from .landmark_data import FOOTPRINT_TO_LANDMARK, FOOTPRINTS, LANDMARKS, PALACE_BOUNDS

logger = logging.getLogger(__name__)

# 약 5m 의 GPS 오차 허용 (고정값, 적응형 아님)
FOOTPRINT_BUFFER_DEG = 0.00005
FALLBACK_RADIUS_M = 100.0


def contains(footprint: Footprint, lat: float, lon: float, buffer: float = FOOTPRINT_BUFFER_DEG) -> bool:
    north = footprint.northwest[0] + buffer
    west = footprint.northwest[1] - buffer
    south = footprint.southeast[0] - buffer
    east = footprint.southeast[1] + buffer
    return south <= lat <= north and west <= lon <= east


def is_in_palace(lat: float, lon: float) -> bool:
    return (
        PALACE_BOUNDS["south"] <= lat <= PALACE_BOUNDS["north"]
        and PALACE_BOUNDS["west"] <= lon <= PALACE_BOUNDS["east"]
    )


class LandmarkResolver:
    def __init__(
        self,
        footprints: Sequence[Footprint],
        landmarks: Sequence[LandmarkInfo],
        id_map: Mapping[str, str] | None = None,
        *,
        buffer: float = FOOTPRINT_BUFFER_DEG,
        max_radius_m: float = FALLBACK_RADIUS_M,
    ) -> None:
        self.footprints = tuple(footprints)
        self.landmarks = tuple(landmarks)
        self._landmarks_by_id = {landmark.id: landmark for landmark in self.landmarks}
        self._footprints_by_id = {footprint.id: footprint for footprint in self.footprints}
        self._id_map = dict(id_map or {})
        self.buffer = buffer
        self.max_radius_m = max_radius_m

    def landmark_id_for(self, footprint_id: str) -> str:
        return self._id_map.get(footprint_id, footprint_id)

    def get_landmark(self, landmark_id: str) -> LandmarkInfo | None:
        return self._landmarks_by_id.get(landmark_id)

    def list_landmarks(self) -> tuple[LandmarkInfo, ...]:
        return self.landmarks

    def find_or_synthesize(self, landmark_id: str) -> LandmarkInfo | None:
        """메타데이터를 우선 조회하고, 없으면 같은 ID의 폴리곤으로 최소 정보를 만든다."""
        landmark = self.get_landmark(landmark_id)
        if landmark is not None:
            return landmark
        footprint = self._footprints_by_id.get(landmark_id)
        if footprint is None:
            return None
        return LandmarkInfo.from_footprint(footprint)

    def match_footprint(self, lat: float, lon: float) -> Footprint | None:
        for footprint in self.footprints:
            if contains(footprint, lat, lon, self.buffer):
                return footprint
        return None

    def nearest_landmark(self, lat: float, lon: float) -> tuple[LandmarkInfo, float] | None:
        best: tuple[LandmarkInfo, float] | None = None
        for landmark in self.landmarks:
            within, distance = is_within_radius(
                lat, lon, landmark.center[0], landmark.center[1], self.max_radius_m
            )
            if not within:
                continue
            if best is None or distance < best[1]:
                best = (landmark, distance)
        return best

    def resolve(self, lat: float, lon: float) -> ResolvedLandmark | None:
        if not (math.isfinite(lat) and math.isfinite(lon)):
            logger.debug("유효하지 않은 좌표: %r, %r", lat, lon)
            return None
        footprint = self.match_footprint(lat, lon)
        if footprint is not None:
            landmark_id = self.landmark_id_for(footprint.id)
            landmark = self.get_landmark(landmark_id)
            if landmark is None:
                landmark = LandmarkInfo.from_footprint(footprint, landmark_id)
            logger.debug("폴리곤 매칭: %s -> %s", footprint.id, landmark.id)
            return ResolvedLandmark(
                id=landmark.id,
                name=landmark.name,
                matched_by_footprint=True,
                distance_meters=0.0,
                landmark=landmark,
            )

        nearest = self.nearest_landmark(lat, lon)
        if nearest is None:
            logger.debug("매칭되는 건물 없음: %.6f, %.6f", lat, lon)
            return None
        landmark, distance = nearest
        return ResolvedLandmark(
            id=landmark.id,
            name=landmark.name,
            matched_by_footprint=False,
            distance_meters=distance,
            landmark=landmark,
        )


@lru_cache
def get_landmark_resolver() -> LandmarkResolver:
    return LandmarkResolver(FOOTPRINTS, LANDMARKS, FOOTPRINT_TO_LANDMARK)
