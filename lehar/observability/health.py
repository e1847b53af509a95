"""
HTTP endpoints for LEHAR observability.

This module implements health, readiness, metrics, and info endpoints
for monitoring and operational visibility.
"""

from fastapi import FastAPI, HTTPException
from fastapi.responses import Response, JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
import time
from lehar.settings import Settings
from lehar.orchestrators.report_service import ReportService
from lehar.observability import metrics
from lehar.observability.logging_setup import get_logger

log = get_logger("lehar.health")

def register_health_routes(app: FastAPI, settings: Settings, service: ReportService) -> None:
    """관측성 엔드포인트를 등록합니다."""
    start_time = time.time()

    @app.get("/health")
    async def health():
        """헬스 체크 엔드포인트"""
        return JSONResponse({
            "status": "ok",
            "service": settings.observability.service_name,
            "timestamp": time.time()
        })

    @app.get("/ready")
    async def ready():
        """레디니스 체크 엔드포인트 (저장소 조회 가능 여부)"""
        try:
            count = await service.store.count()
        except Exception as e:
            log.error(f"저장소 확인 실패: {e}")
            raise HTTPException(status_code=503, detail="Report store unavailable")
        return JSONResponse({
            "status": "ready",
            "service": settings.observability.service_name,
            "reports": count,
            "timestamp": time.time()
        })

    @app.get("/metrics")
    async def metrics_endpoint():
        """Prometheus 메트릭 엔드포인트"""
        if not settings.observability.metrics_enabled:
            raise HTTPException(status_code=503, detail="Metrics disabled")

        metrics.uptime_seconds.set(time.time() - start_time)
        return Response(
            generate_latest(),
            media_type=CONTENT_TYPE_LATEST
        )

    @app.get("/info")
    async def info():
        """서비스 정보 엔드포인트"""
        uptime = time.time() - start_time
        return JSONResponse({
            "service": settings.observability.service_name,
            "version": settings.observability.build_version,
            "build_date": settings.observability.build_date,
            "uptime_seconds": int(uptime),
            "metrics_enabled": settings.observability.metrics_enabled,
            "log_level": settings.observability.log_level
        })
