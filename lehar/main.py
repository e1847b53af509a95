# lehar/main.py
import os
import uvicorn
from lehar.settings import Settings
from lehar.api.app import create_app
from lehar.observability.logging_setup import setup_logging_dev, get_logger

def _b(name, default=False): return os.getenv(name, str(default)).lower() in ("1","true","yes","on")

def build_settings() -> Settings:
    s = Settings()

    # 관측성
    s.observability.log_level = os.getenv("LOG_LEVEL", s.observability.log_level)
    s.observability.http_port = int(os.getenv("HTTP_PORT", s.observability.http_port))
    s.observability.metrics_enabled = _b("METRICS_ENABLED", s.observability.metrics_enabled)

    # 저장소
    s.storage.db_path = os.getenv("REPORTS_DB_PATH", s.storage.db_path)

    # 중복 탐지
    s.dedup.radius_km = float(os.getenv("DEDUP_RADIUS_KM", s.dedup.radius_km))
    s.dedup.window_sec = int(os.getenv("DEDUP_WINDOW_SEC", s.dedup.window_sec))
    s.dedup.display_limit = int(os.getenv("DEDUP_LIMIT", s.dedup.display_limit))

    # 조회
    s.query.map_limit = int(os.getenv("MAP_LIMIT", s.query.map_limit))
    s.query.default_radius_km = float(os.getenv("DEFAULT_RADIUS_KM", s.query.default_radius_km))

    return s

def main(host: str = "0.0.0.0"):
    s = build_settings()
    setup_logging_dev(s.observability.log_level)
    log = get_logger("lehar.main")
    log.info(f"설정 로드 완료 db:{s.storage.db_path} port:{s.observability.http_port}")

    app = create_app(s)
    uvicorn.run(
        app,
        host=host,
        port=s.observability.http_port,
        log_level=s.observability.log_level.lower(),
        access_log=True
    )

if __name__ == "__main__":
    main()
