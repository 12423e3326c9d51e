"""
Inbound payload for a single property assessment.

Coordinates arrive already geocoded by the caller; the engine never looks
anything up externally. Validation here is the only place malformed numbers
are rejected — the scoring functions themselves are total.
"""
from __future__ import annotations

from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class PropertyType(str, Enum):
    RESIDENTIAL = "residential"
    COMMERCIAL = "commercial"
    INDUSTRIAL = "industrial"
    AGRICULTURAL = "agricultural"
    MIXED_USE = "mixed_use"


class PropertyAssessmentInput(BaseModel):
    """
    One property to score.

    Out-of-region coordinates are accepted: they resolve to the interior
    default profile. NaN / infinite numbers are refused.
    """
    model_config = ConfigDict(allow_inf_nan=False)

    latitude: float = Field(description="Decimal degrees north")
    longitude: float = Field(description="Decimal degrees east")
    property_type: PropertyType = PropertyType.RESIDENTIAL
    loan_amount: Optional[float] = Field(None, ge=0, description="INR in lakhs")
    loan_tenure: Optional[int] = Field(None, gt=0, description="Years")
    reference: Optional[str] = Field(None, description="Caller's loan / property identifier")
