"""
Report structure handed to display and export collaborators.

Score cards, charts and downloads only ever walk this structure; nothing
downstream re-derives scores.
"""
from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from climate_risk.schemas.assessment_request import PropertyType


class RiskClassification(str, Enum):
    LOW = "Low"
    MODERATE = "Moderate"
    HIGH = "High"
    SEVERE = "Severe"


class AdjustmentType(str, Enum):
    INTEREST_RATE = "interest_rate"
    INSURANCE = "insurance"
    RISK_WARNING = "risk_warning"
    LOAN_CAP = "loan_cap"
    ENHANCED_DUE_DILIGENCE = "enhanced_due_diligence"


class Severity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"


class ClimateFactorScore(BaseModel):
    """One hazard's contribution to the composite score."""
    factor: str
    score: int = Field(ge=0, le=100)
    weight: float = Field(gt=0, le=1)
    weighted_score: float
    description: str
    data_source: str


class ProjectionDataPoint(BaseModel):
    year: int
    flood_risk: float
    heat_stress: float
    sea_level_rise: float
    water_scarcity: float
    composite_risk: float


class LendingAdjustment(BaseModel):
    """Advisory action for the credit officer. Never applied automatically."""
    type: AdjustmentType
    title: str
    description: str
    value: Optional[str] = None
    severity: Severity


class ClimateRiskReport(BaseModel):
    """
    Complete result of one assessment.

    Built once by the engine and never mutated afterwards.
    """
    model_config = ConfigDict(frozen=True, protected_namespaces=())

    assessment_id: str = Field(description="Internal UUID for audit trail")

    # ── Input echo ──
    latitude: float
    longitude: float
    property_type: PropertyType
    loan_amount: Optional[float] = None
    loan_tenure: Optional[int] = None
    reference: Optional[str] = None

    # ── Location ──
    location_name: str
    region: str

    # ── Core score ──
    climate_risk_score: float = Field(ge=0, le=100, description="Composite of the weighted hazard scores")
    risk_classification: RiskClassification
    confidence_level: float = Field(ge=0, le=1)

    # ── Breakdown ──
    factors: list[ClimateFactorScore]
    projections: list[ProjectionDataPoint]
    lending_adjustments: list[LendingAdjustment] = []

    # ── Metadata ──
    scenario: str
    assessment_date: datetime
    model_version: str
    data_vintage: str
    processing_time_ms: int
