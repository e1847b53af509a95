"""
Geographic utilities for LEHAR.

This module provides great-circle distance calculation
and coordinate validation shared by the duplicate matcher
and the report query layer.
"""

import math

# 지구 반지름 (킬로미터)
EARTH_RADIUS_KM = 6371.0


class InvalidCoordinatesError(ValueError):
    """위도/경도가 NaN 이거나 범위를 벗어난 경우"""


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    두 지점 간의 Haversine 거리를 계산합니다 (킬로미터).

    Args:
        lat1: 첫 번째 지점의 위도
        lon1: 첫 번째 지점의 경도
        lat2: 두 번째 지점의 위도
        lon2: 두 번째 지점의 경도

    Returns:
        두 지점 간의 거리 (킬로미터)
    """
    # 도를 라디안으로 변환
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    dlat = lat2_rad - lat1_rad
    dlon = math.radians(lon2 - lon1)

    a = (math.sin(dlat / 2) ** 2 +
         math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(dlon / 2) ** 2)
    # 부동소수점 오차로 [0, 1]을 벗어나면 asin 도메인 에러가 난다
    a = min(1.0, max(0.0, a))
    c = 2 * math.asin(math.sqrt(a))

    return c * EARTH_RADIUS_KM


def validate_coordinates(lat: float, lon: float) -> bool:
    """
    좌표가 유효한지 확인합니다.

    Args:
        lat: 위도
        lon: 경도

    Returns:
        좌표가 유한하고 범위 안에 있으면 True
    """
    if not (math.isfinite(lat) and math.isfinite(lon)):
        return False
    return -90 <= lat <= 90 and -180 <= lon <= 180


def ensure_coordinates(lat: float, lon: float) -> None:
    """좌표가 유효하지 않으면 InvalidCoordinatesError 를 발생시킵니다."""
    if lat is None or lon is None or not validate_coordinates(lat, lon):
        raise InvalidCoordinatesError(f"유효하지 않은 좌표: lat={lat}, lon={lon}")
