"""
Filtered report queries for LEHAR.

This module contains pure functions for the list, map and
dashboard views over a caller-supplied snapshot of reports:
multi-predicate filtering, deterministic ordering, pagination,
GeoJSON conversion and aggregate statistics.
"""

import math
from datetime import datetime, timedelta
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union
from lehar.common.geo import haversine_distance
from lehar.core.models import (
    Feature, FeatureCollection, HazardType, PointGeometry, Report,
    ReportFilter, ReportPage, ReportStats, ReportStatus, Severity, as_utc,
)
from lehar.observability.logging_setup import get_logger

log = get_logger("lehar.query")

DEFAULT_RADIUS_KM = 50.0
MAP_LIMIT = 1000

FilterLike = Union[ReportFilter, Mapping[str, Any], None]


def coerce_filter(filters: FilterLike) -> ReportFilter:
    """
    dict 나 None 을 ReportFilter 로 변환합니다.

    잘못된 값이 있으면 pydantic.ValidationError 가 그대로 전파됩니다.
    """
    if filters is None:
        return ReportFilter()
    if isinstance(filters, ReportFilter):
        return filters
    return ReportFilter.model_validate(dict(filters))


def matches(report: Report, flt: ReportFilter) -> bool:
    """보고가 필터의 모든 조건을 만족하는지 확인합니다."""
    if flt.type is not None and report.type != flt.type:
        return False
    if flt.severity is not None and report.severity != flt.severity:
        return False
    if flt.status is not None and report.status != flt.status:
        return False
    if flt.source is not None and report.source != flt.source:
        return False
    if flt.verified is not None and report.verified != flt.verified:
        return False
    if flt.created_after is not None and report.created_at < flt.created_after:
        return False
    if flt.created_before is not None and report.created_at > flt.created_before:
        return False
    if flt.has_center:
        radius = flt.radius_km if flt.radius_km is not None else DEFAULT_RADIUS_KM
        distance = haversine_distance(
            flt.center_lat, flt.center_lng,
            report.location.lat, report.location.lng,
        )
        if distance > radius:
            return False
    return True


def filter_reports(reports: Iterable[Report], filters: FilterLike = None) -> List[Report]:
    """
    필터를 적용하고 최신 순으로 정렬합니다.

    created_at 내림차순, 같으면 id 내림차순으로 정렬하여
    페이지 경계가 항상 같은 결과를 갖도록 합니다.

    Args:
        reports: 보고 스냅샷
        filters: 조회 필터 (None 이면 전체)

    Returns:
        정렬된 보고 목록
    """
    flt = coerce_filter(filters)
    selected = [r for r in reports if matches(r, flt)]
    selected.sort(key=lambda r: (r.created_at, r.id), reverse=True)
    return selected


def query_reports(reports: Iterable[Report], filters: FilterLike = None) -> ReportPage:
    """
    필터링된 보고 목록을 페이지 단위로 반환합니다.

    Args:
        reports: 보고 스냅샷
        filters: 조회 필터 (page, page_size 포함)

    Returns:
        페이지 결과. total_count 와 total_pages 는 페이지 분할 전 기준
    """
    flt = coerce_filter(filters)
    selected = filter_reports(reports, flt)

    total = len(selected)
    total_pages = math.ceil(total / flt.page_size)
    start = (flt.page - 1) * flt.page_size
    items = selected[start:start + flt.page_size]

    log.debug("보고 목록 조회",
              total=total, page=flt.page, page_size=flt.page_size, returned=len(items))

    return ReportPage(
        items=items,
        page=flt.page,
        page_size=flt.page_size,
        total_count=total,
        total_pages=total_pages,
    )


def to_feature(report: Report) -> Feature:
    """보고를 GeoJSON Point Feature 로 변환합니다."""
    properties: Dict[str, Any] = {
        "id": report.id,
        "type": report.type.value,
        "title": report.title,
        "description": report.description,
        "severity": report.severity.value,
        "status": report.status.value,
        "source": report.source.value,
        "verified": report.verified,
        "address": report.location.address,
        "created_at": report.created_at.isoformat(),
    }
    return Feature(
        geometry=PointGeometry(coordinates=[report.location.lng, report.location.lat]),
        properties=properties,
    )


def reports_for_map(
    reports: Iterable[Report],
    filters: FilterLike = None,
    *,
    limit: int = MAP_LIMIT,
) -> FeatureCollection:
    """
    지도 표시용 GeoJSON FeatureCollection 을 생성합니다.

    페이지 분할 대신 최신 limit 건으로 결과를 제한합니다.
    필터의 page, page_size 는 무시됩니다.
    """
    selected = filter_reports(reports, filters)[:limit]
    return FeatureCollection(features=[to_feature(r) for r in selected])


def report_stats(
    reports: Iterable[Report],
    *,
    now: datetime,
    filters: Optional[FilterLike] = None,
) -> ReportStats:
    """
    대시보드 통계를 집계합니다.

    Args:
        reports: 보고 스냅샷
        now: 최근 24시간/7일 계산 기준 시각 (naive 이면 UTC 로 간주)
        filters: 집계 전에 적용할 필터 (선택)

    Returns:
        집계 결과
    """
    if filters is not None:
        reports = filter_reports(reports, filters)

    now = as_utc(now)
    day_ago = now - timedelta(hours=24)
    week_ago = now - timedelta(days=7)
    stats = ReportStats()

    for r in reports:
        stats.total_reports += 1
        if r.status == ReportStatus.VERIFIED:
            stats.verified_reports += 1
        if r.severity == Severity.CRITICAL:
            stats.critical_reports += 1
        elif r.severity == Severity.HIGH:
            stats.high_severity_reports += 1
        if r.created_at >= day_ago:
            stats.reports_last_24h += 1
        if r.created_at >= week_ago:
            stats.reports_last_7d += 1
        if r.type == HazardType.TSUNAMI:
            stats.tsunami_reports += 1
        elif r.type == HazardType.HIGH_WAVES:
            stats.high_waves_reports += 1
        elif r.type == HazardType.STORM_SURGE:
            stats.storm_surge_reports += 1

    return stats
