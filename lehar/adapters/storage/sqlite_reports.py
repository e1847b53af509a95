"""
SQLite-based report store for LEHAR.

This module implements the report store port on top of aiosqlite.
Reports are append-only: status changes update the row in place and
leave an entry in the verification history, nothing is ever deleted.
"""

import aiosqlite
import json
import uuid
from datetime import datetime
from typing import List, Optional
from lehar.core.models import (
    Location, Report, ReportCreate, ReportStatus, StatusUpdate, Verification,
)
from lehar.observability.logging_setup import get_logger

log = get_logger("lehar.store")

# SQLite 스키마
SCHEMA = """
CREATE TABLE IF NOT EXISTS hazard_reports (
    id TEXT PRIMARY KEY,
    reporter_id TEXT,
    reporter_name TEXT,
    reporter_contact TEXT,
    type TEXT NOT NULL,
    title TEXT NOT NULL,
    description TEXT NOT NULL,
    location_lat REAL NOT NULL,
    location_lng REAL NOT NULL,
    location_address TEXT NOT NULL,
    severity TEXT NOT NULL,
    status TEXT NOT NULL DEFAULT 'received',
    source TEXT NOT NULL DEFAULT 'citizen',
    images TEXT NOT NULL DEFAULT '[]',
    verified INTEGER NOT NULL DEFAULT 0,
    social_media_mentions INTEGER NOT NULL DEFAULT 0,
    created_at TEXT NOT NULL,
    updated_at TEXT
);
CREATE INDEX IF NOT EXISTS idx_reports_created ON hazard_reports(created_at);
CREATE INDEX IF NOT EXISTS idx_reports_type ON hazard_reports(type);

CREATE TABLE IF NOT EXISTS report_verifications (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    report_id TEXT NOT NULL REFERENCES hazard_reports(id),
    verified_by TEXT NOT NULL,
    verification_status TEXT NOT NULL,
    verification_notes TEXT,
    created_at TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_verifications_report ON report_verifications(report_id);
"""

COLUMNS = (
    "id, reporter_id, reporter_name, reporter_contact, type, title, description, "
    "location_lat, location_lng, location_address, severity, status, source, "
    "images, social_media_mentions, created_at, updated_at"
)


class ReportNotFoundError(LookupError):
    """요청한 id 의 보고가 없는 경우"""


def _row_to_report(row) -> Report:
    return Report(
        id=row[0],
        reporter_id=row[1],
        reporter_name=row[2],
        reporter_contact=row[3],
        type=row[4],
        title=row[5],
        description=row[6],
        location=Location(lat=row[7], lng=row[8], address=row[9]),
        severity=row[10],
        status=row[11],
        source=row[12],
        images=json.loads(row[13] or "[]"),
        social_media_mentions=row[14],
        created_at=datetime.fromisoformat(row[15]),
        updated_at=datetime.fromisoformat(row[16]) if row[16] else None,
    )


class SQLiteReportStore:
    """SQLite 기반 보고 저장소"""

    def __init__(self, path: str):
        """
        초기화합니다.

        Args:
            path: SQLite 데이터베이스 파일 경로
        """
        self.path = path
        log.info(f"SQLiteReportStore 초기화: {path}")

    async def init(self) -> None:
        """데이터베이스를 초기화합니다."""
        async with aiosqlite.connect(self.path) as db:
            await db.executescript(SCHEMA)
            await db.commit()
        log.info(f"SQLiteReportStore 스키마 초기화 완료: {self.path}")

    async def add(self, payload: ReportCreate, *, now: datetime) -> Report:
        """
        새 보고를 저장합니다.

        Args:
            payload: 검증된 제출 페이로드
            now: 생성 시각 (UTC)

        Returns:
            저장된 보고
        """
        report = Report(
            id=uuid.uuid4().hex,
            created_at=now,
            updated_at=now,
            **payload.model_dump(),
        )

        async with aiosqlite.connect(self.path) as db:
            await db.execute(
                f"INSERT INTO hazard_reports ({COLUMNS}, verified) "
                "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    report.id,
                    report.reporter_id,
                    report.reporter_name,
                    report.reporter_contact,
                    report.type.value,
                    report.title,
                    report.description,
                    report.location.lat,
                    report.location.lng,
                    report.location.address,
                    report.severity.value,
                    report.status.value,
                    report.source.value,
                    json.dumps(report.images),
                    report.social_media_mentions,
                    report.created_at.isoformat(),
                    report.updated_at.isoformat(),
                    1 if report.verified else 0,
                ),
            )
            await db.commit()

        log.info(f"보고 저장됨 id:{report.id} type:{report.type.value} severity:{report.severity.value}")
        return report

    async def get(self, report_id: str) -> Optional[Report]:
        """
        id 로 보고를 조회합니다.

        Args:
            report_id: 보고 id

        Returns:
            보고 또는 None
        """
        async with aiosqlite.connect(self.path) as db:
            cursor = await db.execute(
                f"SELECT {COLUMNS} FROM hazard_reports WHERE id = ?",
                (report_id,)
            )
            row = await cursor.fetchone()
        return _row_to_report(row) if row else None

    async def update_status(self, report_id: str, update: StatusUpdate, *, now: datetime) -> Report:
        """
        보고 상태를 변경하고 verified 값을 함께 갱신합니다.

        검증 메모가 있으면 검증 이력에 기록합니다.

        Args:
            report_id: 보고 id
            update: 상태 변경 요청
            now: 변경 시각

        Returns:
            변경된 보고

        Raises:
            ReportNotFoundError: 보고가 없는 경우
        """
        verified = update.status == ReportStatus.VERIFIED

        async with aiosqlite.connect(self.path) as db:
            cursor = await db.execute(
                "UPDATE hazard_reports SET status = ?, verified = ?, updated_at = ? WHERE id = ?",
                (update.status.value, 1 if verified else 0, now.isoformat(), report_id)
            )
            if cursor.rowcount == 0:
                raise ReportNotFoundError(report_id)

            if update.verification_notes:
                await db.execute(
                    "INSERT INTO report_verifications "
                    "(report_id, verified_by, verification_status, verification_notes, created_at) "
                    "VALUES (?, ?, ?, ?, ?)",
                    (report_id, update.verified_by, update.status.value,
                     update.verification_notes, now.isoformat())
                )
            await db.commit()

        log.info(f"보고 상태 변경 id:{report_id} status:{update.status.value} by:{update.verified_by}")
        report = await self.get(report_id)
        if report is None:
            raise ReportNotFoundError(report_id)
        return report

    async def snapshot(self) -> List[Report]:
        """
        전체 보고를 읽어 스냅샷으로 반환합니다.

        Returns:
            보고 목록 (정렬 보장 없음)
        """
        async with aiosqlite.connect(self.path) as db:
            cursor = await db.execute(f"SELECT {COLUMNS} FROM hazard_reports")
            rows = await cursor.fetchall()
        return [_row_to_report(row) for row in rows]

    async def count(self) -> int:
        """
        현재 저장된 보고 수를 반환합니다.

        Returns:
            보고 수
        """
        async with aiosqlite.connect(self.path) as db:
            cursor = await db.execute("SELECT COUNT(*) FROM hazard_reports")
            result = await cursor.fetchone()
            return result[0] if result else 0

    async def verifications(self, report_id: str) -> List[Verification]:
        """
        보고의 검증 이력을 조회합니다.

        Args:
            report_id: 보고 id

        Returns:
            오래된 순으로 정렬된 검증 이력
        """
        async with aiosqlite.connect(self.path) as db:
            cursor = await db.execute(
                "SELECT report_id, verified_by, verification_status, verification_notes, created_at "
                "FROM report_verifications WHERE report_id = ? ORDER BY id ASC",
                (report_id,)
            )
            rows = await cursor.fetchall()
        return [
            Verification(
                report_id=row[0],
                verified_by=row[1],
                verification_status=row[2],
                verification_notes=row[3],
                created_at=datetime.fromisoformat(row[4]),
            )
            for row in rows
        ]
