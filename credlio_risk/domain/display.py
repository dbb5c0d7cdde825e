"""Display attributes (label, colour) for every category axis"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Type

from credlio_risk.domain.models import (
    AffordabilityRiskTier,
    DTIStatus,
    OverallRisk,
    ReputationCategory,
    RiskImpact,
)


@dataclass(frozen=True)
class DisplayAttributes:
    label: str
    color: str


REPUTATION_CATEGORY_DISPLAY = {
    ReputationCategory.GOOD: DisplayAttributes("Good", "green"),
    ReputationCategory.MODERATE: DisplayAttributes("Moderate", "yellow"),
    ReputationCategory.BAD: DisplayAttributes("Bad", "red"),
}

OVERALL_RISK_DISPLAY = {
    OverallRisk.LOW: DisplayAttributes("Low Risk", "green"),
    OverallRisk.MEDIUM: DisplayAttributes("Medium Risk", "yellow"),
    OverallRisk.HIGH: DisplayAttributes("High Risk", "red"),
}

AFFORDABILITY_RISK_DISPLAY = {
    AffordabilityRiskTier.LOW: DisplayAttributes("Low Risk", "green"),
    AffordabilityRiskTier.MEDIUM: DisplayAttributes("Medium Risk", "yellow"),
    AffordabilityRiskTier.HIGH: DisplayAttributes("High Risk", "red"),
}

DTI_STATUS_DISPLAY = {
    DTIStatus.EXCELLENT: DisplayAttributes("Excellent", "green"),
    DTIStatus.GOOD: DisplayAttributes("Good", "blue"),
    DTIStatus.FAIR: DisplayAttributes("Fair", "yellow"),
    DTIStatus.POOR: DisplayAttributes("Poor", "red"),
}

RISK_IMPACT_DISPLAY = {
    RiskImpact.POSITIVE: DisplayAttributes("Positive", "green"),
    RiskImpact.NEGATIVE: DisplayAttributes("Negative", "red"),
}

DISPLAY_TABLES: Dict[Type[Enum], Dict] = {
    ReputationCategory: REPUTATION_CATEGORY_DISPLAY,
    OverallRisk: OVERALL_RISK_DISPLAY,
    AffordabilityRiskTier: AFFORDABILITY_RISK_DISPLAY,
    DTIStatus: DTI_STATUS_DISPLAY,
    RiskImpact: RISK_IMPACT_DISPLAY,
}

for _enum, _table in DISPLAY_TABLES.items():
    _missing = set(_enum) - set(_table)
    if _missing:
        raise RuntimeError(f"No display attributes for {_enum.__name__}: {sorted(m.value for m in _missing)}")


def display_for(value: Enum) -> DisplayAttributes:
    """Look up display attributes for any mapped category value"""
    return DISPLAY_TABLES[type(value)][value]


def reputation_score_color(score: float) -> str:
    """Score gauge banding: >= 70 green, >= 40 yellow, otherwise red"""
    if score >= 70:
        return "green"
    if score >= 40:
        return "yellow"
    return "red"
