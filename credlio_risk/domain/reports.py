"""Borrower reputation report aggregation"""

from typing import List, Optional, Sequence

from credlio_risk.domain.models import (
    ActiveLoan,
    AffordabilityMetrics,
    BlacklistEntry,
    BorrowerReport,
    BorrowerReputation,
    PaymentSummary,
    Repayment,
)
from credlio_risk.domain.assessment import assess_risk


def _percentage(part: float, whole: float) -> float:
    if whole <= 0:
        return 0.0
    return round(min(part / whole * 100, 100.0), 1)


def summarize_payments(reputation: BorrowerReputation) -> PaymentSummary:
    """On-time share of all payments and repaid share of all borrowing"""
    total_payments = reputation.on_time_payments + reputation.late_payments + reputation.very_late_payments

    return PaymentSummary(
        total_payments=total_payments,
        on_time_percentage=_percentage(reputation.on_time_payments, total_payments),
        repayment_percentage=_percentage(reputation.total_repaid, reputation.total_borrowed),
    )


def build_report(
    borrower_id: str,
    reputation: Optional[BorrowerReputation],
    affordability: Optional[AffordabilityMetrics],
    active_loans: Sequence[ActiveLoan] = (),
    repayment_history: Sequence[Repayment] = (),
    blacklist_entries: Sequence[BlacklistEntry] = (),
) -> BorrowerReport:
    """
    Assemble the lender-facing report from loaded collaborator data.

    A missing reputation record is replaced by the neutral default here, once,
    so nothing downstream has to handle None. The active loan count used by
    the assessment is the length of active_loans.
    """
    if reputation is None:
        reputation = BorrowerReputation.neutral(borrower_id)

    loans: List[ActiveLoan] = list(active_loans)
    assessment = assess_risk(
        reputation,
        affordability.result if affordability is not None else None,
        len(loans),
    )

    return BorrowerReport(
        borrower_id=borrower_id,
        reputation=reputation,
        affordability=affordability,
        active_loan_count=len(loans),
        payment_summary=summarize_payments(reputation),
        risk_assessment=assessment,
        active_loans=loans,
        repayment_history=list(repayment_history),
        blacklist_entries=list(blacklist_entries),
    )
