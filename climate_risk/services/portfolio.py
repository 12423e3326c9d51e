"""
Portfolio scoring + concentration summary

Scores a batch of properties and rolls the reports up by region:

  total exposure           Σ loan_amount (INR lakhs)
  weighted average risk    Σ score × exposure / Σ exposure
  high-risk exposure       exposure of High + Severe properties
  concentration index      HHI of exposure share by region, × 100
  high-risk regions        regions with average score ≥ 60

Each property is scored with its own generator (seed + index when seeded),
so a seeded batch gives the same reports whether it runs serially or in
the thread pool.
"""
from __future__ import annotations

import random
from collections import defaultdict
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Iterable, Optional

import structlog

from climate_risk.core.config import get_settings
from climate_risk.schemas.assessment_request import PropertyAssessmentInput
from climate_risk.schemas.risk_report import ClimateRiskReport, RiskClassification
from climate_risk.scoring.engine import assess
from climate_risk.scoring.factors import FACTOR_WEIGHTS

logger = structlog.get_logger(__name__)

HIGH_RISK_CLASSES = (RiskClassification.HIGH, RiskClassification.SEVERE)

# Region flagged when its average score reaches this level
HIGH_RISK_REGION_SCORE = 60

# Concentration alert triggers
ALERT_HIGH_RISK_SHARE = 0.5
ALERT_AVERAGE_SCORE = 65


@dataclass
class RegionExposure:
    region: str
    property_count: int
    total_exposure: float
    average_score: float
    high_risk_count: int

    @property
    def high_risk_share(self) -> float:
        return self.high_risk_count / self.property_count if self.property_count else 0.0


@dataclass
class PortfolioSummary:
    property_count: int = 0
    total_exposure: float = 0.0
    weighted_average_score: float = 0.0
    high_risk_exposure: float = 0.0
    concentration_index: int = 0
    dominant_hazard: Optional[str] = None
    distribution: dict[str, int] = field(
        default_factory=lambda: {c.value: 0 for c in RiskClassification}
    )
    high_risk_regions: list[str] = field(default_factory=list)
    regions: list[RegionExposure] = field(default_factory=list)


def assess_portfolio(
    requests: Iterable[PropertyAssessmentInput],
    seed: Optional[int] = None,
    max_workers: Optional[int] = None,
) -> list[ClimateRiskReport]:
    """Score every property; results keep the input order."""
    requests = list(requests)
    workers = max_workers or get_settings().portfolio_max_workers
    rngs = [random.Random(seed + i) if seed is not None else random.Random() for i in range(len(requests))]

    with ThreadPoolExecutor(max_workers=max(1, workers)) as pool:
        reports = list(pool.map(assess, requests, rngs))

    logger.info(
        "portfolio_assessment_complete",
        properties=len(reports),
        seeded=seed is not None,
        workers=workers,
    )
    return reports


def _exposure(report: ClimateRiskReport) -> float:
    return report.loan_amount or 0.0


def region_breakdown(reports: list[ClimateRiskReport]) -> list[RegionExposure]:
    grouped: dict[str, list[ClimateRiskReport]] = defaultdict(list)
    for report in reports:
        grouped[report.region].append(report)

    breakdown = []
    for region, members in grouped.items():
        breakdown.append(RegionExposure(
            region=region,
            property_count=len(members),
            total_exposure=round(sum(_exposure(r) for r in members), 2),
            average_score=round(sum(r.climate_risk_score for r in members) / len(members), 1),
            high_risk_count=sum(1 for r in members if r.risk_classification in HIGH_RISK_CLASSES),
        ))
    return breakdown


def _dominant_hazard(reports: list[ClimateRiskReport]) -> Optional[str]:
    if not reports:
        return None
    totals = {name: 0.0 for name in FACTOR_WEIGHTS}
    for report in reports:
        for factor in report.factors:
            if factor.factor in totals:
                totals[factor.factor] += factor.score
    # Ties resolve to the earlier (higher-weight) factor
    return max(totals, key=lambda name: totals[name])


def summarize_portfolio(reports: list[ClimateRiskReport]) -> PortfolioSummary:
    summary = PortfolioSummary()
    if not reports:
        return summary

    total_exposure = sum(_exposure(r) for r in reports)
    regions = region_breakdown(reports)

    for report in reports:
        summary.distribution[report.risk_classification.value] += 1

    if total_exposure > 0:
        weighted = sum(r.climate_risk_score * _exposure(r) for r in reports) / total_exposure
        shares = [region.total_exposure / total_exposure for region in regions]
        hhi = sum(share * share for share in shares)
    else:
        # No loan amounts supplied: plain average, equal region weights
        weighted = sum(r.climate_risk_score for r in reports) / len(reports)
        hhi = sum((region.property_count / len(reports)) ** 2 for region in regions)

    summary.property_count = len(reports)
    summary.total_exposure = round(total_exposure, 2)
    summary.weighted_average_score = round(weighted, 1)
    summary.high_risk_exposure = round(
        sum(_exposure(r) for r in reports if r.risk_classification in HIGH_RISK_CLASSES), 2
    )
    summary.concentration_index = round(hhi * 100)
    summary.dominant_hazard = _dominant_hazard(reports)
    summary.high_risk_regions = [r.region for r in regions if r.average_score >= HIGH_RISK_REGION_SCORE]
    summary.regions = regions
    return summary


def concentration_alerts(reports: list[ClimateRiskReport]) -> list[RegionExposure]:
    """Regions where most loans are High/Severe or the average score is above 65."""
    alerts = [
        region for region in region_breakdown(reports)
        if region.high_risk_share > ALERT_HIGH_RISK_SHARE or region.average_score > ALERT_AVERAGE_SCORE
    ]
    return sorted(alerts, key=lambda region: region.average_score, reverse=True)
