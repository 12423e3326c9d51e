"""
Risk band assignment on the 0-100 composite score.

  score < 25  → Low
  score < 50  → Moderate
  score < 75  → High
  otherwise   → Severe
"""
from __future__ import annotations

from climate_risk.schemas.risk_report import RiskClassification

CLASSIFICATION_THRESHOLDS = [
    (25.0, RiskClassification.LOW),
    (50.0, RiskClassification.MODERATE),
    (75.0, RiskClassification.HIGH),
]


def classify_risk(score: float) -> RiskClassification:
    for threshold, classification in CLASSIFICATION_THRESHOLDS:
        if score < threshold:
            return classification
    return RiskClassification.SEVERE
