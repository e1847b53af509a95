"""
Report service for LEHAR.

This module coordinates the report store with the pure duplicate
detection and query functions. Every call takes a fresh snapshot
from the store and hands it to the core explicitly.
"""

from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional, Tuple
from lehar.adapters.storage.sqlite_reports import ReportNotFoundError
from lehar.common.geo import ensure_coordinates
from lehar.core.duplicates import find_duplicates
from lehar.core.models import (
    DuplicateCandidate, FeatureCollection, Report, ReportCreate,
    ReportFilter, ReportPage, ReportStats, StatusUpdate, Verification,
)
from lehar.core.query import coerce_filter, query_reports, report_stats, reports_for_map, FilterLike
from lehar.observability import metrics
from lehar.observability.logging_setup import get_logger
from lehar.ports.reports import ReportStorePort
from lehar.settings import Settings

log = get_logger("lehar.service")

Clock = Callable[[], datetime]

def utc_now() -> datetime:
    return datetime.now(timezone.utc)

class ReportService:
    """보고 제출/조회/검토 서비스"""

    def __init__(self, store: ReportStorePort, settings: Settings, *, clock: Clock = utc_now):
        """
        초기화합니다.

        Args:
            store: 보고 저장소
            settings: 애플리케이션 설정
            clock: 현재 시각 제공 함수 (테스트에서 교체)
        """
        self.store = store
        self.settings = settings
        self.clock = clock
        self.dedup_window = timedelta(seconds=settings.dedup.window_sec)

    async def init(self) -> None:
        """저장소를 초기화하고 게이지를 갱신합니다."""
        await self.store.init()
        metrics.report_store_size.set(await self.store.count())

    def _with_defaults(self, filters: FilterLike) -> ReportFilter:
        flt = coerce_filter(filters)
        if flt.has_center and flt.radius_km is None:
            flt = flt.model_copy(update={"radius_km": self.settings.query.default_radius_km})
        return flt

    async def check_duplicates(self, candidate: DuplicateCandidate) -> List[Report]:
        """
        아직 제출되지 않은 후보와 비슷한 최근 보고를 찾습니다.

        Args:
            candidate: 유형과 좌표 (일부가 빠져 있으면 빈 결과)

        Returns:
            표시 개수로 제한된 중복 후보 목록
        """
        if candidate.complete:
            ensure_coordinates(candidate.lat, candidate.lng)

        reports = await self.store.snapshot()
        with metrics.duplicate_check_seconds.time():
            found = find_duplicates(
                candidate,
                reports,
                now=self.clock(),
                radius_km=self.settings.dedup.radius_km,
                window=self.dedup_window,
                limit=self.settings.dedup.display_limit,
            )
        if found:
            metrics.duplicates_flagged.inc()
        return found

    async def submit(self, payload: ReportCreate) -> Tuple[Report, List[Report]]:
        """
        보고를 저장하고, 저장 전에 찾은 중복 후보를 함께 반환합니다.

        중복 후보는 참고용이며 제출을 막지 않습니다.

        Args:
            payload: 검증된 제출 페이로드

        Returns:
            (저장된 보고, 중복 후보 목록)
        """
        ensure_coordinates(payload.location.lat, payload.location.lng)

        duplicates = await self.check_duplicates(DuplicateCandidate(
            type=payload.type,
            lat=payload.location.lat,
            lng=payload.location.lng,
        ))
        report = await self.store.add(payload, now=self.clock())

        metrics.reports_submitted.labels(type=report.type.value, severity=report.severity.value).inc()
        metrics.report_store_size.inc()

        if duplicates:
            log.info(f"중복 가능성 있는 보고 {len(duplicates)}건 id:{report.id}")
        return report, duplicates

    async def get(self, report_id: str) -> Report:
        """
        보고를 조회합니다.

        Raises:
            ReportNotFoundError: 보고가 없는 경우
        """
        report = await self.store.get(report_id)
        if report is None:
            raise ReportNotFoundError(report_id)
        return report

    async def update_status(self, report_id: str, update: StatusUpdate) -> Report:
        """담당자 권한으로 상태를 변경합니다."""
        report = await self.store.update_status(report_id, update, now=self.clock())
        metrics.status_updates.labels(status=update.status.value).inc()
        return report

    async def verifications(self, report_id: str) -> List[Verification]:
        """검증 이력을 조회합니다."""
        await self.get(report_id)
        return await self.store.verifications(report_id)

    async def list_reports(self, filters: FilterLike = None) -> ReportPage:
        """필터링된 보고 목록을 페이지 단위로 반환합니다."""
        flt = self._with_defaults(filters)
        reports = await self.store.snapshot()
        with metrics.query_seconds.labels(kind="list").time():
            return query_reports(reports, flt)

    async def map_data(self, filters: FilterLike = None) -> FeatureCollection:
        """지도 표시용 GeoJSON 을 반환합니다."""
        flt = self._with_defaults(filters)
        reports = await self.store.snapshot()
        with metrics.query_seconds.labels(kind="map").time():
            return reports_for_map(reports, flt, limit=self.settings.query.map_limit)

    async def stats(self, filters: Optional[FilterLike] = None) -> ReportStats:
        """대시보드 통계를 반환합니다."""
        flt = self._with_defaults(filters) if filters is not None else None
        reports = await self.store.snapshot()
        with metrics.query_seconds.labels(kind="stats").time():
            return report_stats(reports, now=self.clock(), filters=flt)
