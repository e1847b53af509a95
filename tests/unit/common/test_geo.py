"""
Common 모듈 단위 테스트

이 모듈은 지리 유틸리티의 기능을 테스트합니다.
"""

import math
import pytest
from hypothesis import given, strategies as st
from lehar.common.geo import (
    haversine_distance, validate_coordinates, ensure_coordinates, InvalidCoordinatesError
)

lats = st.floats(min_value=-90, max_value=90, allow_nan=False)
lons = st.floats(min_value=-180, max_value=180, allow_nan=False)


class TestHaversineDistance:
    """Haversine 거리 계산 테스트"""

    def test_haversine_distance_same_point(self):
        """같은 지점 간 거리 테스트"""
        distance = haversine_distance(13.0827, 80.2707, 13.0827, 80.2707)
        assert distance == 0.0

    def test_haversine_distance_chennai_to_mumbai(self):
        """첸나이에서 뭄바이까지 거리 테스트"""
        distance = haversine_distance(13.0827, 80.2707, 19.0760, 72.8777)

        # 실제 거리는 약 1030km
        assert 1020 <= distance <= 1040

    def test_haversine_distance_equator(self):
        """적도상의 거리 테스트"""
        distance = haversine_distance(0, 0, 0, 1)

        # 1도는 약 111km
        assert 110 <= distance <= 112

    def test_haversine_distance_antipodal(self):
        """지구 반대편 거리 테스트 (asin 도메인 경계)"""
        distance = haversine_distance(0, 0, 0, 180)

        assert not math.isnan(distance)
        assert distance == pytest.approx(math.pi * 6371, rel=1e-9)

    def test_haversine_distance_poles(self):
        """극점 간 거리 테스트"""
        distance = haversine_distance(90, 0, -90, 0)
        assert distance == pytest.approx(math.pi * 6371, rel=1e-9)

    def test_haversine_distance_short(self):
        """200m 내외의 짧은 거리 테스트"""
        # 위도 0.001도는 약 111m
        distance = haversine_distance(13.0827, 80.2707, 13.0837, 80.2707)
        assert 0.10 <= distance <= 0.12

    @given(lat=lats, lon=lons)
    def test_identical_points_are_zero(self, lat, lon):
        """같은 좌표의 거리는 항상 0"""
        assert haversine_distance(lat, lon, lat, lon) == 0.0

    @given(lat1=lats, lon1=lons, lat2=lats, lon2=lons)
    def test_symmetric(self, lat1, lon1, lat2, lon2):
        """거리는 대칭이어야 함"""
        d1 = haversine_distance(lat1, lon1, lat2, lon2)
        d2 = haversine_distance(lat2, lon2, lat1, lon1)
        assert d1 == pytest.approx(d2, abs=1e-9)

    @given(lat1=lats, lon1=lons, lat2=lats, lon2=lons)
    def test_bounded_and_finite(self, lat1, lon1, lat2, lon2):
        """거리는 0 이상, 반 둘레 이하의 유한값"""
        d = haversine_distance(lat1, lon1, lat2, lon2)
        assert math.isfinite(d)
        assert 0.0 <= d <= math.pi * 6371 + 1e-6


class TestCoordinateValidation:
    """좌표 검증 테스트"""

    def test_validate_coordinates_valid(self):
        assert validate_coordinates(13.08, 80.27)
        assert validate_coordinates(90, 180)
        assert validate_coordinates(-90, -180)

    @pytest.mark.parametrize("lat,lon", [
        (90.1, 0), (-90.1, 0), (0, 180.1), (0, -180.1),
        (float("nan"), 0), (0, float("nan")), (float("inf"), 0),
    ])
    def test_validate_coordinates_invalid(self, lat, lon):
        assert not validate_coordinates(lat, lon)

    def test_ensure_coordinates_raises(self):
        with pytest.raises(InvalidCoordinatesError):
            ensure_coordinates(float("nan"), 80.0)
        with pytest.raises(InvalidCoordinatesError):
            ensure_coordinates(None, 80.0)

    def test_ensure_coordinates_is_value_error(self):
        with pytest.raises(ValueError):
            ensure_coordinates(100.0, 0.0)

    def test_ensure_coordinates_passes(self):
        ensure_coordinates(13.08, 80.27)
