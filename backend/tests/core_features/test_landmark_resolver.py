"""
GPS 좌표 → 건물 식별 테스트
"""
import math

import pytest
from pydantic import ValidationError

from backend.app.schemas.landmarks import Footprint, LandmarkInfo
from backend.app.services.geolocation import haversine_distance
from backend.app.services.landmark_data import FOOTPRINTS, LANDMARKS
from backend.app.services.landmarks import (
    FALLBACK_RADIUS_M,
    FOOTPRINT_BUFFER_DEG,
    LandmarkResolver,
    contains,
    get_landmark_resolver,
    is_in_palace,
)

SAJEONGJEON = next(footprint for footprint in FOOTPRINTS if footprint.id == "sajeongjeon")


@pytest.fixture
def resolver() -> LandmarkResolver:
    return get_landmark_resolver()


def _single(footprint: Footprint) -> LandmarkResolver:
    return LandmarkResolver([footprint], [])


def test_constants_are_preserved():
    assert FOOTPRINT_BUFFER_DEG == 0.00005
    assert FALLBACK_RADIUS_M == 100


@pytest.mark.parametrize("footprint", FOOTPRINTS, ids=lambda footprint: footprint.id)
def test_point_inside_footprint_resolves_to_remapped_id(resolver: LandmarkResolver, footprint: Footprint):
    lat, lon = footprint.midpoint
    result = resolver.resolve(lat, lon)
    assert result is not None
    assert result.matched_by_footprint is True
    assert result.id == resolver.landmark_id_for(footprint.id)
    assert result.distance_meters == 0.0


def test_remapped_footprint_uses_landmark_metadata(resolver: LandmarkResolver):
    geungjeongjeon = next(footprint for footprint in FOOTPRINTS if footprint.id == "geungjeongjeon")
    result = resolver.resolve(*geungjeongjeon.midpoint)
    assert result is not None
    assert result.id == "geunjeongjeon"
    assert result.name == "근정전"
    assert result.landmark.synthesized is False


def test_sajeongjeon_scenario(resolver: LandmarkResolver):
    result = resolver.resolve(37.5790, 126.9770)
    assert result is not None
    assert result.id == "sajeongjeon"
    assert result.matched_by_footprint is True


def test_palace_center_resolves_to_a_landmark(resolver: LandmarkResolver):
    result = resolver.resolve(37.5788, 126.9770)
    assert result is not None
    assert result.id == "geunjeongjeon"


def test_far_away_point_has_no_match(resolver: LandmarkResolver):
    assert resolver.resolve(0.0, 0.0) is None


@pytest.mark.parametrize(
    "lat_offset, lon_offset",
    [
        (FOOTPRINT_BUFFER_DEG, 0),
        (-FOOTPRINT_BUFFER_DEG, 0),
        (0, FOOTPRINT_BUFFER_DEG),
        (0, -FOOTPRINT_BUFFER_DEG),
    ],
)
def test_buffer_edge_still_matches(lat_offset: float, lon_offset: float):
    mid_lat, mid_lon = SAJEONGJEON.midpoint
    if lat_offset > 0:
        point = (SAJEONGJEON.northwest[0] + lat_offset, mid_lon)
    elif lat_offset < 0:
        point = (SAJEONGJEON.southeast[0] + lat_offset, mid_lon)
    elif lon_offset > 0:
        point = (mid_lat, SAJEONGJEON.southeast[1] + lon_offset)
    else:
        point = (mid_lat, SAJEONGJEON.northwest[1] + lon_offset)

    assert contains(SAJEONGJEON, *point)
    result = _single(SAJEONGJEON).resolve(*point)
    assert result is not None and result.matched_by_footprint


@pytest.mark.parametrize(
    "point",
    [
        (SAJEONGJEON.northwest[0] + 0.00006, SAJEONGJEON.midpoint[1]),
        (SAJEONGJEON.southeast[0] - 0.00006, SAJEONGJEON.midpoint[1]),
        (SAJEONGJEON.midpoint[0], SAJEONGJEON.southeast[1] + 0.00006),
        (SAJEONGJEON.midpoint[0], SAJEONGJEON.northwest[1] - 0.00006),
    ],
)
def test_beyond_buffer_does_not_match(point: tuple[float, float]):
    assert not contains(SAJEONGJEON, *point)
    assert _single(SAJEONGJEON).resolve(*point) is None


def test_overlapping_footprints_first_declared_wins():
    first = Footprint(id="first", name="첫째", northwest=(37.5010, 127.0000), southeast=(37.5000, 127.0010))
    second = Footprint(id="second", name="둘째", northwest=(37.5015, 127.0005), southeast=(37.5005, 127.0015))
    point = (37.5007, 127.0007)

    assert LandmarkResolver([first, second], []).resolve(*point).id == "first"
    assert LandmarkResolver([second, first], []).resolve(*point).id == "second"


def test_fallback_returns_nearest_landmark_with_distance(resolver: LandmarkResolver):
    lat, lon = 37.5660, 126.9751
    result = resolver.resolve(lat, lon)
    assert result is not None
    assert result.id == "deoksugung"
    assert result.matched_by_footprint is False
    expected = haversine_distance(lat, lon, 37.5658, 126.9751)
    assert result.distance_meters == pytest.approx(expected, abs=0.5)
    assert result.distance_meters == pytest.approx(22.2, abs=0.5)


def test_fallback_excludes_landmarks_at_or_beyond_radius():
    landmark = LandmarkInfo(id="solo", name="단독", center=(37.5000, 127.0000))
    resolver = LandmarkResolver([], [landmark])
    # 위도 0.001도 ≈ 111m
    assert resolver.resolve(37.5010, 127.0000) is None
    assert resolver.resolve(37.5008, 127.0000).id == "solo"


def test_missing_metadata_is_synthesized_from_footprint(resolver: LandmarkResolver):
    eungjidang = next(footprint for footprint in FOOTPRINTS if footprint.id == "eungjidang")
    result = resolver.resolve(*eungjidang.midpoint)
    assert result is not None
    assert result.landmark.synthesized is True
    assert result.landmark.name == "응지당"
    assert result.landmark.center == eungjidang.midpoint
    assert result.landmark.build_year == "조선시대"


def test_synthesized_record_keeps_remapped_id():
    footprint = Footprint(id="fp", name="가상전", northwest=(37.5010, 127.0000), southeast=(37.5000, 127.0010))
    resolver = LandmarkResolver([footprint], [], {"fp": "virtual-hall"})
    result = resolver.resolve(*footprint.midpoint)
    assert result.id == "virtual-hall"
    assert result.landmark.id == "virtual-hall"
    assert result.landmark.synthesized is True


def test_id_map_defaults_to_identity(resolver: LandmarkResolver):
    assert resolver.landmark_id_for("gyeongseongjeon") == "gyeongseungjeon"
    assert resolver.landmark_id_for("sajeongjeon") == "sajeongjeon"


def test_find_or_synthesize(resolver: LandmarkResolver):
    assert resolver.find_or_synthesize("gyeonghoeru").synthesized is False
    assert resolver.find_or_synthesize("heumgyeonggak").synthesized is True
    assert resolver.find_or_synthesize("unknown-building") is None


def test_list_landmarks_keeps_declaration_order(resolver: LandmarkResolver):
    assert [landmark.id for landmark in resolver.list_landmarks()] == [landmark.id for landmark in LANDMARKS]


def test_footprint_rejects_inverted_corners():
    with pytest.raises(ValidationError):
        Footprint(id="bad", name="잘못", northwest=(37.5000, 127.0010), southeast=(37.5010, 127.0000))


def test_palace_bounds():
    assert is_in_palace(37.5790, 126.9770)
    assert not is_in_palace(37.5658, 126.9751)


@pytest.mark.parametrize(
    "lat, lon",
    [
        (math.nan, math.nan),
        (math.nan, 126.9770),
        (37.5788, math.nan),
        (math.inf, 126.9770),
        (37.5788, -math.inf),
        (float("1e999"), float("1e999")),
    ],
)
def test_non_finite_coordinates_have_no_match(resolver: LandmarkResolver, lat: float, lon: float):
    assert resolver.resolve(lat, lon) is None


def test_nearest_landmark_skips_nan_distances():
    landmark = LandmarkInfo(id="solo", name="단독", center=(37.5000, 127.0000))
    resolver = LandmarkResolver([], [landmark])
    assert resolver.nearest_landmark(math.nan, math.nan) is None


def test_huge_finite_coordinates_do_not_raise(resolver: LandmarkResolver):
    assert resolver.resolve(1e300, -1e300) is None


def test_landmark_info_serializes_in_camel_case(resolver: LandmarkResolver):
    payload = resolver.get_landmark("geunjeongjeon").model_dump(by_alias=True)
    assert "nameEn" in payload
    assert "detailedDescription" in payload
    assert "culturalProperty" in payload
    assert "name_en" not in payload
