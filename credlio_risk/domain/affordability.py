"""Affordability calculator - income/expense aggregation and risk scoring"""

import math
from dataclasses import fields

from credlio_risk.domain.models import (
    AffordabilityInput,
    AffordabilityResult,
    AffordabilityRiskTier,
    DTIStatus,
)
from credlio_risk.domain.exceptions import InvalidAffordabilityInputError

# Share of disposable income a borrower can commit to a new loan
AFFORDABILITY_SHARE = 0.30
LOAN_HORIZON_MONTHS = 12

# Disposable income at or above this carries no shortfall penalty
DISPOSABLE_INCOME_BASELINE = 2000.0
DTI_WEIGHT = 0.7
SHORTFALL_WEIGHT = 0.3

MAX_DTI = 100.0
MAX_RISK_SCORE = 100.0

# Per-field ceiling; keeps every sum and product of amounts finite
MAX_AMOUNT = 1_000_000_000_000

INCOME_FIELDS = ("monthly_salary", "side_hustle_income", "remittances", "other_income")


def validate_affordability_input(data: AffordabilityInput) -> None:
    """
    Reject any amount that is not a finite number in [0, MAX_AMOUNT].

    Raises:
        InvalidAffordabilityInputError: naming the first offending field
    """
    for f in fields(data):
        value = getattr(data, f.name)
        # bool is an int subclass but never a meaningful amount
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidAffordabilityInputError(f.name, f"expected a number, got {type(value).__name__}")
        if not math.isfinite(value):
            raise InvalidAffordabilityInputError(f.name, "must be finite")
        if value < 0:
            raise InvalidAffordabilityInputError(f.name, "must not be negative")
        if value > MAX_AMOUNT:
            raise InvalidAffordabilityInputError(f.name, f"must not exceed {MAX_AMOUNT:,}")


def total_income(data: AffordabilityInput) -> float:
    return sum(getattr(data, name) for name in INCOME_FIELDS)


def debt_to_income_ratio(outgoings: float, income: float) -> float:
    """
    Outgoings as a percentage of income, clamped to [0, 100].

    Zero income is the worst case (100) rather than a division error.
    """
    if income <= 0:
        return MAX_DTI
    return min(outgoings * 100 / income, MAX_DTI)


def calculate_risk_score(dti: float, disposable_income: float) -> float:
    """
    Calculate affordability risk score from 0 (lowest risk) to 100 (highest risk).

    Scoring weights:
    - 70%: Debt-to-income ratio (already on a 0-100 scale)
    - 30%: Disposable income shortfall against a 2000/month baseline
      (0 at or above baseline, 100 at zero or negative disposable income)

    Non-decreasing in DTI and non-increasing in disposable income.
    """
    cushion = min(max(disposable_income, 0.0) / DISPOSABLE_INCOME_BASELINE, 1.0)
    shortfall = 100.0 * (1.0 - cushion)

    score = DTI_WEIGHT * dti + SHORTFALL_WEIGHT * shortfall

    return round(min(max(score, 0.0), MAX_RISK_SCORE), 1)


def max_affordable_loan(disposable_income: float) -> float:
    """30% of positive disposable income over a one-year horizon"""
    return round(max(0.0, disposable_income) * LOAN_HORIZON_MONTHS * AFFORDABILITY_SHARE, 2)


def compute_affordability(data: AffordabilityInput) -> AffordabilityResult:
    """
    Main entry point: validate input and derive affordability metrics.

    Negative disposable income is kept as-is; it signals over-indebtedness.
    DTI keeps full precision so threshold rules see the real ratio.
    """
    validate_affordability_input(data)

    income = total_income(data)
    outgoings = data.monthly_expenses + data.existing_loan_payments
    disposable = income - outgoings
    dti = debt_to_income_ratio(outgoings, income)

    return AffordabilityResult(
        total_income=round(income, 2),
        disposable_income=round(disposable, 2),
        debt_to_income_ratio=dti,
        risk_score=calculate_risk_score(dti, disposable),
        max_affordable_loan=max_affordable_loan(disposable),
    )


def affordability_risk_tier(risk_score: float) -> AffordabilityRiskTier:
    """
    Map risk score to display tier. Boundary values go to the lower-risk tier.

    - <= 30: Low Risk
    - <= 60: Medium Risk
    - > 60:  High Risk
    """
    if risk_score <= 30:
        return AffordabilityRiskTier.LOW
    elif risk_score <= 60:
        return AffordabilityRiskTier.MEDIUM
    else:
        return AffordabilityRiskTier.HIGH


def dti_status(ratio: float) -> DTIStatus:
    """Map DTI percentage to status; boundary values go to the better status"""
    if ratio <= 20:
        return DTIStatus.EXCELLENT
    elif ratio <= 35:
        return DTIStatus.GOOD
    elif ratio <= 50:
        return DTIStatus.FAIR
    else:
        return DTIStatus.POOR
