"""
Core domain models for LEHAR.

This module defines the hazard report domain models using Pydantic v2
for type safety and validation.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, Field, computed_field, field_validator, model_validator


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """naive datetime 은 UTC 로 간주하고, aware datetime 은 UTC 로 변환합니다."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class HazardType(str, Enum):
    """해양 재해 유형"""
    TSUNAMI = "tsunami"
    HIGH_WAVES = "high-waves"
    STORM_SURGE = "storm-surge"
    COASTAL_DAMAGE = "coastal-damage"
    UNUSUAL_TIDES = "unusual-tides"
    SWELL_SURGE = "swell-surge"


class Severity(str, Enum):
    """심각도"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ReportStatus(str, Enum):
    """검토 상태"""
    RECEIVED = "received"
    UNDER_REVIEW = "under-review"
    VERIFIED = "verified"
    REJECTED = "rejected"


class ReportSource(str, Enum):
    """보고 출처"""
    CITIZEN = "citizen"
    OFFICIAL = "official"
    SOCIAL = "social"


class Location(BaseModel):
    """보고 위치 모델"""
    model_config = {"frozen": True}

    lat: float = Field(ge=-90, le=90, allow_inf_nan=False)
    lng: float = Field(ge=-180, le=180, allow_inf_nan=False)
    address: str = Field(min_length=1, max_length=500)


class Report(BaseModel):
    """
    해양 재해 보고 모델.

    id, type, location, created_at 은 생성 후 변경할 수 없고,
    verified 는 status 에서 파생됩니다.
    """
    id: str = Field(frozen=True)
    type: HazardType = Field(frozen=True)
    title: str
    description: str
    location: Location = Field(frozen=True)
    severity: Severity
    status: ReportStatus = ReportStatus.RECEIVED
    source: ReportSource = ReportSource.CITIZEN
    reporter_id: Optional[str] = None
    reporter_name: Optional[str] = None
    reporter_contact: Optional[str] = None
    images: List[str] = Field(default_factory=list)
    social_media_mentions: int = 0
    created_at: datetime = Field(frozen=True)
    updated_at: Optional[datetime] = None

    @field_validator("created_at", "updated_at")
    @classmethod
    def normalize_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return as_utc(v)

    @computed_field
    @property
    def verified(self) -> bool:
        return self.status == ReportStatus.VERIFIED


class ReportCreate(BaseModel):
    """보고 제출 페이로드"""
    type: HazardType
    title: str = Field(min_length=5, max_length=500)
    description: str = Field(min_length=10, max_length=2000)
    location: Location
    severity: Severity
    source: ReportSource = ReportSource.CITIZEN
    reporter_id: Optional[str] = None
    reporter_name: Optional[str] = Field(default=None, min_length=2, max_length=255)
    reporter_contact: Optional[str] = None
    images: List[str] = Field(default_factory=list, max_length=5)

    @model_validator(mode="after")
    def guest_needs_contact(self) -> "ReportCreate":
        if self.reporter_id is None and (not self.reporter_name or not self.reporter_contact):
            raise ValueError("게스트 제출에는 reporter_name 과 reporter_contact 가 필요합니다")
        return self


class DuplicateCandidate(BaseModel):
    """아직 저장되지 않은 중복 검사 대상 (필드가 빠져 있을 수 있음)"""
    type: Optional[HazardType] = None
    lat: Optional[float] = Field(default=None, ge=-90, le=90, allow_inf_nan=False)
    lng: Optional[float] = Field(default=None, ge=-180, le=180, allow_inf_nan=False)

    @property
    def complete(self) -> bool:
        return self.type is not None and self.lat is not None and self.lng is not None


class StatusUpdate(BaseModel):
    """담당자 상태 변경 요청"""
    status: ReportStatus
    verified_by: str = Field(min_length=1)
    verification_notes: Optional[str] = Field(default=None, max_length=1000)


class Verification(BaseModel):
    """검증 이력"""
    report_id: str
    verified_by: str
    verification_status: ReportStatus
    verification_notes: Optional[str] = None
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def normalize_utc(cls, v: datetime) -> datetime:
        return as_utc(v)


class ReportFilter(BaseModel):
    """
    목록/지도 조회 필터.

    모든 필드는 선택 사항이며, 없으면 해당 조건을 적용하지 않습니다.
    잘못된 값은 무시하지 않고 ValidationError 로 거부합니다.
    """
    model_config = {"extra": "forbid"}

    type: Optional[HazardType] = None
    severity: Optional[Severity] = None
    status: Optional[ReportStatus] = None
    source: Optional[ReportSource] = None
    verified: Optional[bool] = None
    created_after: Optional[datetime] = None
    created_before: Optional[datetime] = None
    center_lat: Optional[float] = Field(default=None, ge=-90, le=90, allow_inf_nan=False)
    center_lng: Optional[float] = Field(default=None, ge=-180, le=180, allow_inf_nan=False)
    radius_km: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=20, ge=1, le=100)

    @field_validator("created_after", "created_before")
    @classmethod
    def normalize_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return as_utc(v)

    @model_validator(mode="after")
    def check_center(self) -> "ReportFilter":
        if (self.center_lat is None) != (self.center_lng is None):
            raise ValueError("center_lat 과 center_lng 는 함께 지정해야 합니다")
        if self.radius_km is not None and self.center_lat is None:
            raise ValueError("radius_km 는 중심 좌표와 함께 지정해야 합니다")
        return self

    @property
    def has_center(self) -> bool:
        return self.center_lat is not None and self.center_lng is not None


class ReportPage(BaseModel):
    """페이지 단위 조회 결과"""
    items: List[Report]
    page: int
    page_size: int
    total_count: int
    total_pages: int


class PointGeometry(BaseModel):
    """GeoJSON Point (경도, 위도 순서)"""
    type: Literal["Point"] = "Point"
    coordinates: List[float]


class Feature(BaseModel):
    """GeoJSON Feature"""
    type: Literal["Feature"] = "Feature"
    geometry: PointGeometry
    properties: Dict[str, Any]


class FeatureCollection(BaseModel):
    """GeoJSON FeatureCollection"""
    type: Literal["FeatureCollection"] = "FeatureCollection"
    features: List[Feature] = Field(default_factory=list)


class ReportStats(BaseModel):
    """대시보드 통계"""
    total_reports: int = 0
    verified_reports: int = 0
    critical_reports: int = 0
    high_severity_reports: int = 0
    reports_last_24h: int = 0
    reports_last_7d: int = 0
    tsunami_reports: int = 0
    high_waves_reports: int = 0
    storm_surge_reports: int = 0
