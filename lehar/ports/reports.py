"""
Report store port interface.

This module defines the protocol for hazard report persistence.
"""

from datetime import datetime
from typing import List, Optional, Protocol
from lehar.core.models import Report, ReportCreate, StatusUpdate, Verification

class ReportStorePort(Protocol):
    """보고 저장소 포트 인터페이스"""

    async def init(self) -> None:
        """저장소를 초기화합니다."""
        ...

    async def add(self, payload: ReportCreate, *, now: datetime) -> Report:
        """
        새 보고를 저장합니다.

        Args:
            payload: 제출 페이로드
            now: 생성 시각

        Returns:
            id 와 created_at 이 부여된 보고
        """
        ...

    async def get(self, report_id: str) -> Optional[Report]:
        """id 로 보고를 조회합니다. 없으면 None."""
        ...

    async def update_status(self, report_id: str, update: StatusUpdate, *, now: datetime) -> Report:
        """
        보고 상태를 변경합니다.

        Raises:
            ReportNotFoundError: 보고가 없는 경우
        """
        ...

    async def snapshot(self) -> List[Report]:
        """현재 저장된 전체 보고의 스냅샷을 반환합니다."""
        ...

    async def count(self) -> int:
        """저장된 보고 수를 반환합니다."""
        ...

    async def verifications(self, report_id: str) -> List[Verification]:
        """보고의 검증 이력을 오래된 순으로 반환합니다."""
        ...
