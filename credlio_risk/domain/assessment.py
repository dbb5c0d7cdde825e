"""Reputation risk assessor - weighted factors, overall tier and recommendations"""

import math
from typing import Dict, List, Optional, Tuple

from credlio_risk.domain.models import (
    AffordabilityResult,
    BorrowerReputation,
    OverallRisk,
    RiskAssessment,
    RiskFactor,
    RiskImpact,
)
from credlio_risk.domain.exceptions import InvalidRiskInputError

HIGH_REPUTATION_SCORE = 75
LOW_REPUTATION_SCORE = 40
LOW_RISK_MIN_REPUTATION_SCORE = 60

HIGH_DTI = 50
LOW_DTI = 20
LOW_DISPOSABLE_INCOME = 500  # borrower's base currency unit

MAX_ACTIVE_LOANS = 3
MAX_NEGATIVE_FACTORS = 2

RECOMMENDATIONS: Dict[OverallRisk, Tuple[str, ...]] = {
    OverallRisk.HIGH: (
        "Consider requiring collateral or guarantor",
        "Offer smaller loan amounts initially",
        "Request additional documentation",
    ),
    OverallRisk.MEDIUM: (
        "Verify income sources before lending",
        "Consider shorter repayment periods",
    ),
    OverallRisk.LOW: ("Standard lending terms appropriate",),
}


def _validate(reputation: BorrowerReputation, active_loan_count: int) -> None:
    score = reputation.reputation_score
    if isinstance(score, bool) or not isinstance(score, (int, float)) or not math.isfinite(score):
        raise InvalidRiskInputError("reputation_score", "expected a finite number")
    if isinstance(active_loan_count, bool) or not isinstance(active_loan_count, int):
        raise InvalidRiskInputError("active_loan_count", "expected an integer")
    if active_loan_count < 0:
        raise InvalidRiskInputError("active_loan_count", "must not be negative")


def collect_factors(
    reputation: BorrowerReputation,
    affordability: Optional[AffordabilityResult],
    active_loan_count: int,
) -> List[RiskFactor]:
    """Evaluate factor rules in display order"""
    factors = []

    # Reputation
    if reputation.reputation_score >= HIGH_REPUTATION_SCORE:
        factors.append(RiskFactor("High reputation score", RiskImpact.POSITIVE, "Excellent payment history"))
    elif reputation.reputation_score < LOW_REPUTATION_SCORE:
        factors.append(RiskFactor("Low reputation score", RiskImpact.NEGATIVE, "Poor payment history"))

    if reputation.is_blacklisted:
        factors.append(RiskFactor("Blacklisted", RiskImpact.NEGATIVE, "Previously defaulted on loans"))

    if reputation.defaulted_loans > 0:
        factors.append(
            RiskFactor(
                "Previous defaults",
                RiskImpact.NEGATIVE,
                f"{reputation.defaulted_loans} defaulted loans",
            )
        )

    # Affordability
    if affordability is not None:
        if affordability.debt_to_income_ratio > HIGH_DTI:
            factors.append(
                RiskFactor("High debt-to-income ratio", RiskImpact.NEGATIVE, "Over 50% of income goes to debt")
            )
        elif affordability.debt_to_income_ratio < LOW_DTI:
            factors.append(RiskFactor("Low debt-to-income ratio", RiskImpact.POSITIVE, "Healthy financial position"))

        if affordability.disposable_income < LOW_DISPOSABLE_INCOME:
            factors.append(RiskFactor("Low disposable income", RiskImpact.NEGATIVE, "Limited repayment capacity"))

    if active_loan_count > MAX_ACTIVE_LOANS:
        factors.append(
            RiskFactor("Multiple active loans", RiskImpact.NEGATIVE, f"{active_loan_count} active loans")
        )

    return factors


def determine_overall_risk(factors: List[RiskFactor], reputation_score: float) -> OverallRisk:
    """
    Three-branch tier decision. Count comparisons are strict.

    - HIGH:   more than 2 negatives, or reputation below 40
    - LOW:    more positives than negatives and reputation at least 60
    - MEDIUM: everything else
    """
    negative = sum(1 for f in factors if f.impact is RiskImpact.NEGATIVE)
    positive = sum(1 for f in factors if f.impact is RiskImpact.POSITIVE)

    if negative > MAX_NEGATIVE_FACTORS or reputation_score < LOW_REPUTATION_SCORE:
        return OverallRisk.HIGH
    elif positive > negative and reputation_score >= LOW_RISK_MIN_REPUTATION_SCORE:
        return OverallRisk.LOW
    else:
        return OverallRisk.MEDIUM


def recommendations_for(overall_risk: OverallRisk) -> List[str]:
    return list(RECOMMENDATIONS[overall_risk])


def assess_risk(
    reputation: BorrowerReputation,
    affordability: Optional[AffordabilityResult],
    active_loan_count: int,
) -> RiskAssessment:
    """
    Main entry point: evaluate reputation, affordability and loan load.

    A missing affordability record is legal and skips the affordability rules.

    Raises:
        InvalidRiskInputError: non-numeric score or invalid active loan count
    """
    _validate(reputation, active_loan_count)

    factors = collect_factors(reputation, affordability, active_loan_count)
    overall_risk = determine_overall_risk(factors, reputation.reputation_score)

    return RiskAssessment(
        overall_risk=overall_risk,
        factors=factors,
        recommendations=recommendations_for(overall_risk),
    )
