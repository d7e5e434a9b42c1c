"""
위치 계산 유틸리티 함수
Haversine 공식을 사용하여 두 좌표 간의 거리를 계산합니다.
"""

import math

EARTH_RADIUS_M = 6371000


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Haversine 공식을 사용하여 두 지점 간의 거리를 계산합니다.

    Args:
        lat1: 첫 번째 지점의 위도
        lon1: 첫 번째 지점의 경도
        lat2: 두 번째 지점의 위도
        lon2: 두 번째 지점의 경도

    Returns:
        두 지점 간의 거리 (미터 단위)
    """
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    delta_phi = math.radians(lat2 - lat1)
    delta_lambda = math.radians(lon2 - lon1)

    a = (
        math.sin(delta_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(delta_lambda / 2) ** 2
    )
    # 부동소수점 오차로 1을 넘으면 sqrt(1 - a) 에서 domain error
    a = min(a, 1.0)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_M * c


def is_within_radius(
    user_lat: float, user_lon: float, place_lat: float, place_lon: float, radius_meters: float = 100
) -> tuple[bool, float]:
    """
    사용자 위치가 장소 중심에서 지정된 반경 안쪽에 있는지 확인합니다.

    경계(정확히 radius_meters)는 반경 밖으로 취급합니다.
    좌표나 거리가 유한한 값이 아니면 항상 반경 밖입니다.

    Returns:
        (반경 내 여부, 계산된 거리)
    """
    if not all(math.isfinite(value) for value in (user_lat, user_lon, place_lat, place_lon)):
        return False, math.inf
    distance = haversine_distance(user_lat, user_lon, place_lat, place_lon)
    return distance < radius_meters, distance
