"""
Lending Adjustment Rules

Advisory actions derived from the climate score. Each rule is a pure function
of the same inputs and returns at most one adjustment; rules never see each
other's output. LENDING_RULES order is the output order.

  LA-01  Climate risk premium       score ≥ 25
  LA-02  Flood insurance            flood sub-score > 40
  LA-03  Coastal hazard insurance   sea-level sub-score > 50
  LA-04  Loan-to-value cap          High / Severe
  LA-05  Enhanced due diligence     Severe
  LA-06  Standard terms notice      Low
  LA-07  Kharif/Rabi season risk    agricultural and score > 40

Framework reference: RBI Climate Risk Framework (2024).
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Optional, Union

from climate_risk.core.config import get_settings
from climate_risk.schemas.assessment_request import PropertyType
from climate_risk.schemas.risk_report import (
    AdjustmentType,
    ClimateFactorScore,
    LendingAdjustment,
    RiskClassification,
    Severity,
)
from climate_risk.scoring.factors import FLOOD, SEA_LEVEL, factor_score


@dataclass(frozen=True)
class RuleContext:
    score: float
    classification: RiskClassification
    property_type: str
    flood_score: float
    sea_score: float


Rule = Callable[[RuleContext], Optional[LendingAdjustment]]


# ═══════════════════════════════════════════════════════════════
# Rate premium schedule (% p.a.)
# ═══════════════════════════════════════════════════════════════
RATE_PREMIUM_SCHEDULE = [
    (25.0, 0.0),
    (50.0, 0.5),
    (75.0, 1.5),
]
MAX_RATE_PREMIUM = 2.5

FLOOD_INSURANCE_THRESHOLD = 40
FLOOD_MANDATORY_THRESHOLD = 65
COASTAL_INSURANCE_THRESHOLD = 50
COASTAL_CRITICAL_THRESHOLD = 70
LTV_CAP_PCT = {
    RiskClassification.HIGH: 70,
    RiskClassification.SEVERE: 60,
}
AGRICULTURAL_SCORE_THRESHOLD = 40


def rate_premium(score: float) -> float:
    for threshold, premium in RATE_PREMIUM_SCHEDULE:
        if score < threshold:
            return premium
    return MAX_RATE_PREMIUM


def _classification_severity(classification: RiskClassification) -> Severity:
    if classification == RiskClassification.SEVERE:
        return Severity.CRITICAL
    if classification == RiskClassification.HIGH:
        return Severity.WARNING
    return Severity.INFO


# ── LA-01 ──
def interest_rate_rule(ctx: RuleContext) -> Optional[LendingAdjustment]:
    premium = rate_premium(ctx.score)
    if premium <= 0:
        return None
    return LendingAdjustment(
        type=AdjustmentType.INTEREST_RATE,
        title="Climate Risk Premium",
        description=(
            "Apply a climate-adjusted interest rate premium to compensate for elevated default "
            "risk from physical climate hazards. Based on RBI Climate Risk Framework (2024)."
        ),
        value=f"+{premium:.1f}% p.a.",
        severity=_classification_severity(ctx.classification),
    )


# ── LA-02 ──
def flood_insurance_rule(ctx: RuleContext) -> Optional[LendingAdjustment]:
    if ctx.flood_score <= FLOOD_INSURANCE_THRESHOLD:
        return None
    if ctx.flood_score > FLOOD_MANDATORY_THRESHOLD:
        return LendingAdjustment(
            type=AdjustmentType.INSURANCE,
            title="Mandatory Flood Insurance",
            description=(
                "Property is in a high-probability flood zone. "
                "Flood insurance is a mandatory loan condition."
            ),
            value="Mandatory",
            severity=Severity.CRITICAL,
        )
    return LendingAdjustment(
        type=AdjustmentType.INSURANCE,
        title="Recommended Flood Cover",
        description=(
            "Property is in a moderate flood-risk area. "
            "Flood insurance is strongly recommended."
        ),
        value="Recommended",
        severity=Severity.WARNING,
    )


# ── LA-03 ──
def coastal_insurance_rule(ctx: RuleContext) -> Optional[LendingAdjustment]:
    if ctx.sea_score <= COASTAL_INSURANCE_THRESHOLD:
        return None
    return LendingAdjustment(
        type=AdjustmentType.INSURANCE,
        title="Coastal Hazard Insurance",
        description=(
            "Significant sea-level rise exposure detected. Comprehensive coastal hazard coverage "
            "required including storm surge and tidal flooding events."
        ),
        value="Required",
        severity=Severity.CRITICAL if ctx.sea_score > COASTAL_CRITICAL_THRESHOLD else Severity.WARNING,
    )


# ── LA-04 ──
def loan_cap_rule(ctx: RuleContext) -> Optional[LendingAdjustment]:
    cap = LTV_CAP_PCT.get(ctx.classification)
    if cap is None:
        return None
    return LendingAdjustment(
        type=AdjustmentType.LOAN_CAP,
        title="Loan-to-Value Cap",
        description=(
            f"Restrict maximum LTV ratio to {cap}% due to elevated climate risk. Future asset "
            "devaluation from climate hazards may erode collateral value."
        ),
        value=f"Max {cap}% LTV",
        severity=_classification_severity(ctx.classification),
    )


# ── LA-05 ──
def due_diligence_rule(ctx: RuleContext) -> Optional[LendingAdjustment]:
    if ctx.classification != RiskClassification.SEVERE:
        return None
    return LendingAdjustment(
        type=AdjustmentType.ENHANCED_DUE_DILIGENCE,
        title="Enhanced Climate Due Diligence",
        description=(
            "Mandatory independent climate risk assessment by an accredited third-party "
            "environmental consultant before loan sanction. Board-level approval required for "
            "all loans above ₹5 Cr."
        ),
        value="Required",
        severity=Severity.CRITICAL,
    )


# ── LA-06 ──
def standard_terms_rule(ctx: RuleContext) -> Optional[LendingAdjustment]:
    if ctx.classification != RiskClassification.LOW:
        return None
    return LendingAdjustment(
        type=AdjustmentType.RISK_WARNING,
        title="Standard Lending Terms Applicable",
        description=(
            "Climate risk assessment indicates low exposure. Standard lending terms apply. "
            "Annual climate risk review recommended as part of portfolio monitoring."
        ),
        value="No adjustment",
        severity=Severity.INFO,
    )


# ── LA-07 ──
def agricultural_season_rule(ctx: RuleContext) -> Optional[LendingAdjustment]:
    if ctx.property_type != PropertyType.AGRICULTURAL.value or ctx.score <= AGRICULTURAL_SCORE_THRESHOLD:
        return None
    return LendingAdjustment(
        type=AdjustmentType.RISK_WARNING,
        title="Kharif/Rabi Season Risk",
        description=(
            "Agricultural property in a climate-stressed zone. Consider weather-indexed crop "
            "insurance linkage and staggered disbursement tied to seasonal rainfall assessment."
        ),
        value="Conditional",
        severity=Severity.WARNING,
    )


LENDING_RULES: tuple[Rule, ...] = (
    interest_rate_rule,
    flood_insurance_rule,
    coastal_insurance_rule,
    loan_cap_rule,
    due_diligence_rule,
    standard_terms_rule,
    agricultural_season_rule,
)


def generate_lending_adjustments(
    score: float,
    classification: RiskClassification,
    property_type: Union[PropertyType, str],
    factors: list[ClimateFactorScore],
) -> list[LendingAdjustment]:
    ctx = RuleContext(
        score=score,
        classification=RiskClassification(classification),
        property_type=property_type.value if isinstance(property_type, PropertyType) else str(property_type),
        flood_score=factor_score(factors, FLOOD, 0),
        sea_score=factor_score(factors, SEA_LEVEL, 0),
    )
    adjustments: list[LendingAdjustment] = []
    for rule in LENDING_RULES:
        adjustment = rule(ctx)
        if adjustment is not None:
            adjustments.append(adjustment)
    return adjustments


_PREMIUM_RE = re.compile(r"[-+]?\d+(?:\.\d+)?")


def effective_interest_rate(
    adjustments: list[LendingAdjustment],
    base_rate: Optional[float] = None,
) -> float:
    """Base lending rate (configured default when omitted) plus the climate premium."""
    if base_rate is None:
        base_rate = get_settings().base_interest_rate
    for adj in adjustments:
        if adj.type == AdjustmentType.INTEREST_RATE and adj.value:
            match = _PREMIUM_RE.search(adj.value)
            if match:
                return round(base_rate + float(match.group()), 2)
    return base_rate
