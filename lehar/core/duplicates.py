"""
Proximity-based duplicate detection for LEHAR.

This module flags existing reports that most likely describe the
same real-world event as a not-yet-persisted candidate report.
The result is advisory only and never blocks a submission.
"""

from datetime import datetime, timedelta
from typing import Iterable, List, Optional, Tuple
from lehar.common.geo import haversine_distance
from lehar.core.models import DuplicateCandidate, Report, as_utc
from lehar.observability.logging_setup import get_logger

log = get_logger("lehar.duplicates")

DEFAULT_RADIUS_KM = 0.2
DEFAULT_WINDOW = timedelta(hours=2)
DEFAULT_DISPLAY_LIMIT = 5


def find_duplicates(
    candidate: DuplicateCandidate,
    reports: Iterable[Report],
    *,
    now: datetime,
    radius_km: float = DEFAULT_RADIUS_KM,
    window: timedelta = DEFAULT_WINDOW,
    limit: Optional[int] = None,
) -> List[Report]:
    """
    후보 보고와 같은 사건으로 보이는 기존 보고들을 찾습니다.

    같은 유형이면서, 반경 안에 있고, 최근 window 안에 생성된 보고만 반환합니다.
    가까운 순, 같은 거리면 최신 순으로 정렬합니다.

    Args:
        candidate: 검사할 후보 (유형, 위도, 경도)
        reports: 기존 보고 스냅샷
        now: 기준 시각 (naive 이면 UTC 로 간주)
        radius_km: 거리 임계값 (킬로미터)
        window: 최근성 임계값
        limit: 반환 최대 개수 (None 이면 제한 없음)

    Returns:
        중복 가능성이 있는 보고 목록
    """
    if not candidate.complete:
        return []

    now = as_utc(now)
    matches: List[Tuple[float, Report]] = []
    for report in reports:
        if report.type != candidate.type:
            continue
        if now - report.created_at > window:
            continue
        distance = haversine_distance(
            candidate.lat, candidate.lng,
            report.location.lat, report.location.lng,
        )
        if distance <= radius_km:
            matches.append((distance, report))

    matches.sort(key=lambda m: (m[0], -m[1].created_at.timestamp()))
    result = [report for _, report in matches]
    if limit is not None:
        result = result[:limit]

    log.debug("중복 검사 완료",
              type=candidate.type.value,
              matches=len(result),
              radius_km=radius_km)
    return result
