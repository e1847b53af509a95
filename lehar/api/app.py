"""
HTTP API for LEHAR.

This module wires the report service into a FastAPI application:
submission, duplicate checks, filtered listing, map data,
statistics and official status review.
"""

from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional
from fastapi import FastAPI, Query, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from lehar.adapters.storage.sqlite_reports import ReportNotFoundError, SQLiteReportStore
from lehar.common.geo import InvalidCoordinatesError
from lehar.core.models import (
    DuplicateCandidate, HazardType, ReportCreate, ReportFilter,
    ReportSource, ReportStatus, Severity, StatusUpdate,
)
from lehar.observability import metrics
from lehar.observability.health import register_health_routes
from lehar.observability.logging_setup import get_logger
from lehar.orchestrators.report_service import ReportService
from lehar.settings import Settings

log = get_logger("lehar.api")

def create_app(settings: Settings, service: Optional[ReportService] = None) -> FastAPI:
    """FastAPI 애플리케이션을 생성합니다."""
    if service is None:
        service = ReportService(SQLiteReportStore(settings.storage.db_path), settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await service.init()
        log.info("보고 저장소 준비 완료")
        yield
        log.info("서버 종료 중")

    app = FastAPI(
        title=settings.observability.service_name,
        version=settings.observability.build_version,
        description="LEHAR Ocean Hazard Reporting Service",
        lifespan=lifespan,
    )
    app.state.service = service

    @app.exception_handler(ReportNotFoundError)
    async def not_found(request: Request, exc: ReportNotFoundError):
        return JSONResponse(status_code=404, content={"detail": f"Report not found: {exc}"})

    @app.exception_handler(InvalidCoordinatesError)
    async def bad_coordinates(request: Request, exc: InvalidCoordinatesError):
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    @app.exception_handler(ValidationError)
    async def bad_filter(request: Request, exc: ValidationError):
        metrics.rejected_queries.inc()
        errors = [{"loc": list(e["loc"]), "msg": e["msg"], "type": e["type"]} for e in exc.errors()]
        return JSONResponse(status_code=422, content={"detail": errors})

    @app.exception_handler(RequestValidationError)
    async def bad_request(request: Request, exc: RequestValidationError):
        # 쿼리 파라미터 단계에서 거부된 조회도 함께 집계
        if request.method == "GET":
            metrics.rejected_queries.inc()
        return await request_validation_exception_handler(request, exc)

    def build_filter(
        type: Optional[HazardType],
        severity: Optional[Severity],
        status: Optional[ReportStatus],
        source: Optional[ReportSource],
        verified: Optional[bool],
        created_after: Optional[datetime],
        created_before: Optional[datetime],
        lat: Optional[float],
        lng: Optional[float],
        radius_km: Optional[float],
        page: int = 1,
        page_size: Optional[int] = None,
    ) -> ReportFilter:
        if page_size is None:
            page_size = settings.query.default_page_size
        return ReportFilter(
            type=type, severity=severity, status=status, source=source,
            verified=verified, created_after=created_after, created_before=created_before,
            center_lat=lat, center_lng=lng, radius_km=radius_km,
            page=page, page_size=page_size,
        )

    @app.post("/reports", status_code=201)
    async def submit_report(payload: ReportCreate):
        """보고 제출 (중복 후보는 참고용으로 함께 반환)"""
        report, duplicates = await service.submit(payload)
        return {
            "report": report.model_dump(mode="json"),
            "duplicates": [d.model_dump(mode="json") for d in duplicates],
        }

    @app.post("/reports/duplicates")
    async def check_duplicates(candidate: DuplicateCandidate):
        """제출 전 중복 후보 확인"""
        duplicates = await service.check_duplicates(candidate)
        return {"duplicates": [d.model_dump(mode="json") for d in duplicates]}

    @app.get("/reports")
    async def list_reports(
        type: Optional[HazardType] = None,
        severity: Optional[Severity] = None,
        status: Optional[ReportStatus] = None,
        source: Optional[ReportSource] = None,
        verified: Optional[bool] = None,
        created_after: Optional[datetime] = None,
        created_before: Optional[datetime] = None,
        lat: Optional[float] = None,
        lng: Optional[float] = None,
        radius_km: Optional[float] = None,
        page: int = Query(1, ge=1),
        page_size: Optional[int] = Query(None, ge=1, le=settings.query.max_page_size),
    ):
        """필터링된 보고 목록"""
        flt = build_filter(type, severity, status, source, verified, created_after,
                           created_before, lat, lng, radius_km, page, page_size)
        result = await service.list_reports(flt)
        return result.model_dump(mode="json")

    @app.get("/reports/map/data")
    async def map_data(
        type: Optional[HazardType] = None,
        severity: Optional[Severity] = None,
        status: Optional[ReportStatus] = None,
        source: Optional[ReportSource] = None,
        verified: Optional[bool] = None,
        created_after: Optional[datetime] = None,
        created_before: Optional[datetime] = None,
        lat: Optional[float] = None,
        lng: Optional[float] = None,
        radius_km: Optional[float] = None,
    ):
        """지도 표시용 GeoJSON"""
        flt = build_filter(type, severity, status, source, verified, created_after,
                           created_before, lat, lng, radius_km)
        result = await service.map_data(flt)
        return result.model_dump(mode="json")

    @app.get("/reports/stats/overview")
    async def stats_overview(
        type: Optional[HazardType] = None,
        severity: Optional[Severity] = None,
        status: Optional[ReportStatus] = None,
        source: Optional[ReportSource] = None,
        verified: Optional[bool] = None,
        created_after: Optional[datetime] = None,
        created_before: Optional[datetime] = None,
        lat: Optional[float] = None,
        lng: Optional[float] = None,
        radius_km: Optional[float] = None,
    ):
        """대시보드 통계 (필터를 주면 해당 범위만 집계)"""
        flt = build_filter(type, severity, status, source, verified, created_after,
                           created_before, lat, lng, radius_km)
        result = await service.stats(flt)
        return result.model_dump(mode="json")

    @app.get("/reports/{report_id}")
    async def get_report(report_id: str):
        """단일 보고 조회"""
        report = await service.get(report_id)
        return report.model_dump(mode="json")

    @app.put("/reports/{report_id}/status")
    async def update_status(report_id: str, update: StatusUpdate):
        """담당자 상태 변경"""
        report = await service.update_status(report_id, update)
        return report.model_dump(mode="json")

    @app.get("/reports/{report_id}/verifications")
    async def verifications(report_id: str):
        """검증 이력 조회"""
        history = await service.verifications(report_id)
        return [v.model_dump(mode="json") for v in history]

    register_health_routes(app, settings, service)

    @app.get("/")
    async def root():
        """루트 엔드포인트"""
        return JSONResponse({
            "service": settings.observability.service_name,
            "version": settings.observability.build_version,
            "endpoints": {
                "health": "/health",
                "ready": "/ready",
                "metrics": "/metrics",
                "info": "/info",
                "reports": "/reports",
                "map": "/reports/map/data",
                "stats": "/reports/stats/overview"
            }
        })

    return app
