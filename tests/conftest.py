"""
테스트 설정 및 픽스처

이 모듈은 pytest 설정과 공통 픽스처를 제공합니다.
"""

import pytest
import tempfile
import os
import uuid
from datetime import datetime, timedelta, timezone
from lehar.settings import Settings
from lehar.core.models import Location, Report


# 테스트 기준 시각
NOW = datetime(2025, 9, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    """고정된 기준 시각"""
    return NOW


@pytest.fixture
def temp_db_path():
    """임시 데이터베이스 파일 경로"""
    with tempfile.NamedTemporaryFile(suffix='.db', delete=False) as f:
        temp_path = f.name
    yield temp_path
    # 테스트 후 파일 정리
    if os.path.exists(temp_path):
        os.unlink(temp_path)


@pytest.fixture
def sample_settings(temp_db_path):
    """테스트용 설정"""
    settings = Settings()
    settings.observability.service_name = "test-service"
    settings.observability.build_version = "1.0.0"
    settings.observability.log_level = "INFO"
    settings.storage.db_path = temp_db_path
    return settings


@pytest.fixture
def make_report():
    """테스트용 보고 생성 함수"""
    def _make(
        *,
        type="tsunami",
        lat=13.0827,
        lng=80.2707,
        severity="medium",
        status="received",
        source="citizen",
        created_at=NOW,
        id=None,
        address="Marina Beach, Chennai",
    ) -> Report:
        return Report(
            id=id or uuid.uuid4().hex,
            type=type,
            title="Unusual wave activity",
            description="Water receding rapidly from the shore",
            location=Location(lat=lat, lng=lng, address=address),
            severity=severity,
            status=status,
            source=source,
            reporter_name="Test Reporter",
            reporter_contact="+91-9000000000",
            created_at=created_at,
        )
    return _make


@pytest.fixture
def sample_reports(make_report):
    """심각도/유형/시간이 섞인 보고 10건"""
    severities = ["critical", "low", "high", "critical", "medium",
                  "low", "critical", "high", "medium", "low"]
    types = ["tsunami", "high-waves", "storm-surge", "coastal-damage", "unusual-tides",
             "swell-surge", "tsunami", "high-waves", "storm-surge", "tsunami"]
    return [
        make_report(
            id=f"r{i:02d}",
            type=types[i],
            severity=severities[i],
            status="verified" if i % 3 == 0 else "received",
            created_at=NOW - timedelta(hours=i * 20),
            lat=13.0 + i * 0.01,
            lng=80.2 + i * 0.01,
        )
        for i in range(10)
    ]


@pytest.fixture
def create_payload():
    """테스트용 제출 페이로드 (dict)"""
    return {
        "type": "high-waves",
        "title": "High waves at Juhu",
        "description": "Waves crossing the promenade wall since morning",
        "location": {"lat": 19.0988, "lng": 72.8267, "address": "Juhu Beach, Mumbai"},
        "severity": "high",
        "reporter_name": "Asha",
        "reporter_contact": "asha@example.com",
    }


# pytest 설정
def pytest_collection_modifyitems(config, items):
    """테스트 아이템 수정"""
    for item in items:
        # 느린 테스트 마커 추가
        if "performance" in item.name or "stress" in item.name:
            item.add_marker(pytest.mark.slow)

        # 통합 테스트 마커 추가
        if "integration" in item.name:
            item.add_marker(pytest.mark.integration)
