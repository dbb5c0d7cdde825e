"""Borrower report service - runs the risk engine against a data store"""

import time
from typing import Optional

from credlio_risk.domain.affordability import affordability_risk_tier, compute_affordability
from credlio_risk.domain.models import AffordabilityInput, AffordabilityMetrics, BorrowerReport
from credlio_risk.domain.reports import build_report
from credlio_risk.domain.store import BorrowerDataStore
from credlio_risk.domain.exceptions import BorrowerDataStoreError
from credlio_risk.infrastructure.observability.logging import log_affordability, log_assessment
from credlio_risk.infrastructure.observability.metrics import (
    record_affordability,
    record_assessment,
    store_failure_counter,
)


class BorrowerReportService:
    """Application service wrapping the pure engine; all I/O goes through the store"""

    def __init__(self, store: BorrowerDataStore):
        self.store = store

    def calculate_affordability(self, borrower_id: str, data: AffordabilityInput) -> AffordabilityMetrics:
        """
        Compute affordability and persist it as the borrower's current record.

        Raises:
            InvalidAffordabilityInputError: before anything is written
            BorrowerDataStoreError: if the save fails
        """
        start_time = time.time()

        result = compute_affordability(data)

        try:
            metrics = self.store.save_affordability(borrower_id, data, result)
        except BorrowerDataStoreError:
            store_failure_counter.inc()
            raise

        tier = affordability_risk_tier(result.risk_score)
        record_affordability(tier.value)
        log_affordability(
            borrower_id,
            result.risk_score,
            tier.value,
            result.debt_to_income_ratio,
            (time.time() - start_time) * 1000,
        )
        return metrics

    def get_affordability(self, borrower_id: str) -> Optional[AffordabilityMetrics]:
        try:
            return self.store.get_affordability(borrower_id)
        except BorrowerDataStoreError:
            store_failure_counter.inc()
            raise

    def get_report(self, borrower_id: str, lender_id: Optional[str] = None) -> BorrowerReport:
        """
        Load collaborator data and assemble the borrower's risk report.

        Flow:
        1. Log the report view when a lender is opening it
        2. Load reputation, affordability, active loans, recent repayments
           and blacklist entries
        3. Substitute the neutral reputation if none exists, then assess
        """
        start_time = time.time()

        try:
            if lender_id:
                self.store.record_report_view(lender_id, borrower_id)
            reputation = self.store.get_reputation(borrower_id)
            affordability = self.store.get_affordability(borrower_id)
            active_loans = self.store.get_active_loans(borrower_id)
            repayments = self.store.get_repayment_history(borrower_id)
            blacklist_entries = self.store.get_blacklist_entries(borrower_id)
        except BorrowerDataStoreError:
            store_failure_counter.inc()
            raise

        report = build_report(
            borrower_id, reputation, affordability, active_loans, repayments, blacklist_entries
        )

        assessment = report.risk_assessment
        record_assessment(assessment.overall_risk.value, report_viewed=bool(lender_id))
        log_assessment(
            borrower_id,
            assessment.overall_risk.value,
            assessment.negative_count,
            assessment.positive_count,
            report.reputation.is_default,
            (time.time() - start_time) * 1000,
        )
        return report
