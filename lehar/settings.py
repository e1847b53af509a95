# lehar/settings.py
from __future__ import annotations
from pydantic import BaseModel, Field

class Observability(BaseModel):
    http_port: int = 8099
    metrics_enabled: bool = True
    service_name: str = "LEHAR"
    build_version: str = "0.1.0"
    build_date: str = "2025-01-01"
    log_level: str = "INFO"

class Storage(BaseModel):
    db_path: str = "/data/reports.db"

class Dedup(BaseModel):
    radius_km: float = 0.2
    window_sec: int = 7200
    display_limit: int = 5

class Query(BaseModel):
    default_page_size: int = 20
    max_page_size: int = 100
    map_limit: int = 1000
    default_radius_km: float = 50.0

class Settings(BaseModel):
    # 하위 섹션 (기본값/팩토리로 누락 방지)
    observability: Observability = Field(default_factory=Observability)
    storage: Storage = Field(default_factory=Storage)
    dedup: Dedup = Field(default_factory=Dedup)
    query: Query = Field(default_factory=Query)
