"""
Storage Adapter 모듈 단위 테스트

이 모듈은 SQLite 기반 보고 저장소의 기능을 테스트합니다.
"""

import pytest
import os
from datetime import timedelta
from lehar.adapters.storage.sqlite_reports import SQLiteReportStore, ReportNotFoundError
from lehar.core.models import ReportCreate, ReportStatus, StatusUpdate


class TestSQLiteReportStore:
    """SQLite 보고 저장소 테스트"""

    @pytest.fixture
    def store(self, temp_db_path):
        """테스트용 SQLite 보고 저장소"""
        return SQLiteReportStore(temp_db_path)

    @pytest.fixture
    def payload(self, create_payload):
        return ReportCreate(**create_payload)

    @pytest.mark.asyncio
    async def test_init_schema(self, store):
        """스키마 초기화 테스트"""
        await store.init()

        assert os.path.exists(store.path)
        assert await store.count() == 0
        assert await store.snapshot() == []

    @pytest.mark.asyncio
    async def test_init_is_idempotent(self, store):
        await store.init()
        await store.init()
        assert await store.count() == 0

    @pytest.mark.asyncio
    async def test_add_and_get(self, store, payload, now):
        """보고 저장 및 조회 테스트"""
        await store.init()

        report = await store.add(payload, now=now)

        assert len(report.id) == 32
        assert report.created_at == now
        assert report.status == ReportStatus.RECEIVED
        assert report.verified is False

        loaded = await store.get(report.id)
        assert loaded == report
        assert loaded.location.address == "Juhu Beach, Mumbai"
        assert await store.count() == 1

    @pytest.mark.asyncio
    async def test_get_missing(self, store):
        await store.init()
        assert await store.get("missing") is None

    @pytest.mark.asyncio
    async def test_unique_ids(self, store, payload, now):
        await store.init()
        a = await store.add(payload, now=now)
        b = await store.add(payload, now=now)
        assert a.id != b.id
        assert {r.id for r in await store.snapshot()} == {a.id, b.id}

    @pytest.mark.asyncio
    async def test_update_status_verified_in_lockstep(self, store, payload, now):
        """verified 는 status 와 함께 변경"""
        await store.init()
        report = await store.add(payload, now=now)
        later = now + timedelta(minutes=30)

        updated = await store.update_status(
            report.id, StatusUpdate(status="verified", verified_by="official-1"), now=later
        )
        assert updated.status == ReportStatus.VERIFIED
        assert updated.verified is True
        assert updated.updated_at == later

        rejected = await store.update_status(
            report.id, StatusUpdate(status="rejected", verified_by="official-1"), now=later
        )
        assert rejected.verified is False

    @pytest.mark.asyncio
    async def test_update_status_keeps_immutable_fields(self, store, payload, now):
        """상태 변경 후에도 유형/위치/생성 시각은 그대로"""
        await store.init()
        report = await store.add(payload, now=now)

        updated = await store.update_status(
            report.id, StatusUpdate(status="under-review", verified_by="official-1"),
            now=now + timedelta(hours=1),
        )

        assert updated.type == report.type
        assert updated.location == report.location
        assert updated.created_at == report.created_at

    @pytest.mark.asyncio
    async def test_update_status_missing(self, store, now):
        await store.init()
        with pytest.raises(ReportNotFoundError):
            await store.update_status("missing", StatusUpdate(status="verified", verified_by="x"), now=now)

    @pytest.mark.asyncio
    async def test_verification_history(self, store, payload, now):
        """검증 메모가 있을 때만 이력이 남음"""
        await store.init()
        report = await store.add(payload, now=now)

        await store.update_status(report.id, StatusUpdate(status="under-review", verified_by="o1"), now=now)
        await store.update_status(
            report.id,
            StatusUpdate(status="verified", verified_by="o2", verification_notes="Confirmed by coast guard"),
            now=now + timedelta(minutes=5),
        )

        history = await store.verifications(report.id)
        assert len(history) == 1
        assert history[0].verified_by == "o2"
        assert history[0].verification_status == ReportStatus.VERIFIED
        assert history[0].verification_notes == "Confirmed by coast guard"
