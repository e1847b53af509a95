"""
설정 로딩 테스트
"""

from lehar.main import build_settings
from lehar.settings import Settings


def test_defaults():
    """기본 설정값 확인"""
    s = Settings()
    assert s.dedup.radius_km == 0.2
    assert s.dedup.window_sec == 7200
    assert s.dedup.display_limit == 5
    assert s.query.map_limit == 1000
    assert s.query.default_page_size == 20
    assert s.query.max_page_size == 100
    assert s.query.default_radius_km == 50.0


def test_build_settings_from_env(monkeypatch):
    """환경변수가 기본값을 덮어씀"""
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("HTTP_PORT", "9000")
    monkeypatch.setenv("METRICS_ENABLED", "false")
    monkeypatch.setenv("REPORTS_DB_PATH", "/tmp/test-reports.db")
    monkeypatch.setenv("DEDUP_RADIUS_KM", "0.5")
    monkeypatch.setenv("DEDUP_WINDOW_SEC", "3600")
    monkeypatch.setenv("DEDUP_LIMIT", "3")
    monkeypatch.setenv("MAP_LIMIT", "250")
    monkeypatch.setenv("DEFAULT_RADIUS_KM", "25")

    s = build_settings()

    assert s.observability.log_level == "DEBUG"
    assert s.observability.http_port == 9000
    assert s.observability.metrics_enabled is False
    assert s.storage.db_path == "/tmp/test-reports.db"
    assert s.dedup.radius_km == 0.5
    assert s.dedup.window_sec == 3600
    assert s.dedup.display_limit == 3
    assert s.query.map_limit == 250
    assert s.query.default_radius_km == 25.0


def test_build_settings_without_env(monkeypatch):
    for name in ("LOG_LEVEL", "HTTP_PORT", "METRICS_ENABLED", "REPORTS_DB_PATH"):
        monkeypatch.delenv(name, raising=False)

    s = build_settings()

    assert s.observability.http_port == 8099
    assert s.observability.metrics_enabled is True
