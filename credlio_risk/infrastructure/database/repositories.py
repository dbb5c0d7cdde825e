"""Data access layer for borrower risk entities"""

from datetime import datetime, timezone
from typing import List, Optional
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from credlio_risk.infrastructure.database.models import (
    AffordabilityMetricsRecord,
    BlacklistRecord,
    BorrowerReputationRecord,
    LoanTracker,
    RepaymentRecord,
    ReportView,
)
from credlio_risk.domain.exceptions import BorrowerDataStoreError
from credlio_risk.domain.models import (
    ActiveLoan,
    AffordabilityInput,
    AffordabilityMetrics,
    AffordabilityResult,
    BlacklistEntry,
    BorrowerReputation,
    Repayment,
    ReputationCategory,
)
from credlio_risk.domain.store import REPAYMENT_HISTORY_LIMIT, BorrowerDataStore


def _to_metrics(record: AffordabilityMetricsRecord) -> AffordabilityMetrics:
    return AffordabilityMetrics(
        borrower_id=record.borrower_id,
        input=AffordabilityInput(
            monthly_salary=record.monthly_salary,
            side_hustle_income=record.side_hustle_income,
            remittances=record.remittances,
            other_income=record.other_income,
            monthly_expenses=record.monthly_expenses,
            existing_loan_payments=record.existing_loan_payments,
        ),
        result=AffordabilityResult(
            total_income=record.total_monthly_income,
            disposable_income=record.disposable_income,
            debt_to_income_ratio=record.debt_to_income_ratio,
            risk_score=record.risk_score,
            max_affordable_loan=record.max_affordable_loan,
        ),
        last_updated=record.last_updated,
    )


def _to_reputation(record: BorrowerReputationRecord) -> BorrowerReputation:
    return BorrowerReputation(
        borrower_id=record.borrower_id,
        total_loans=record.total_loans,
        completed_loans=record.completed_loans,
        active_loans=record.active_loans,
        defaulted_loans=record.defaulted_loans,
        on_time_payments=record.on_time_payments,
        late_payments=record.late_payments,
        very_late_payments=record.very_late_payments,
        total_borrowed=record.total_borrowed,
        total_repaid=record.total_repaid,
        average_days_late=record.average_days_late,
        # Clamp to the documented range regardless of what upstream wrote
        reputation_score=min(max(record.reputation_score, 0.0), 100.0),
        reputation_category=ReputationCategory(record.reputation_category),
        is_blacklisted=record.is_blacklisted,
        blacklist_count=record.blacklist_count,
    )


class SqlAlchemyBorrowerDataStore(BorrowerDataStore):
    """
    BorrowerDataStore backed by a SQLAlchemy session.

    Writes are flushed, not committed; the caller owns the transaction.
    """

    def __init__(self, db: Session):
        self.db = db

    def get_reputation(self, borrower_id: str) -> Optional[BorrowerReputation]:
        try:
            record = self.db.get(BorrowerReputationRecord, borrower_id)
            return _to_reputation(record) if record is not None else None
        except SQLAlchemyError as e:
            raise BorrowerDataStoreError(f"Failed to load reputation: {e}") from e
        except ValueError as e:
            raise BorrowerDataStoreError(f"Invalid reputation data: {e}") from e

    def get_affordability(self, borrower_id: str) -> Optional[AffordabilityMetrics]:
        try:
            record = self.db.get(AffordabilityMetricsRecord, borrower_id)
        except SQLAlchemyError as e:
            raise BorrowerDataStoreError(f"Failed to load affordability metrics: {e}") from e
        return _to_metrics(record) if record is not None else None

    def save_affordability(
        self,
        borrower_id: str,
        data: AffordabilityInput,
        result: AffordabilityResult,
    ) -> AffordabilityMetrics:
        """Upsert on borrower_id; a later save overwrites every field"""
        try:
            record = self.db.get(AffordabilityMetricsRecord, borrower_id)
            if record is None:
                record = AffordabilityMetricsRecord(borrower_id=borrower_id)
                self.db.add(record)

            record.monthly_salary = data.monthly_salary
            record.side_hustle_income = data.side_hustle_income
            record.remittances = data.remittances
            record.other_income = data.other_income
            record.monthly_expenses = data.monthly_expenses
            record.existing_loan_payments = data.existing_loan_payments
            record.total_monthly_income = result.total_income
            record.disposable_income = result.disposable_income
            record.debt_to_income_ratio = result.debt_to_income_ratio
            record.risk_score = result.risk_score
            record.max_affordable_loan = result.max_affordable_loan
            record.last_updated = datetime.now(timezone.utc)

            self.db.flush()
        except SQLAlchemyError as e:
            raise BorrowerDataStoreError(f"Failed to save affordability metrics: {e}") from e

        return _to_metrics(record)

    def get_active_loans(self, borrower_id: str) -> List[ActiveLoan]:
        try:
            records = self.db.scalars(
                select(LoanTracker)
                .where(LoanTracker.borrower_id == borrower_id)
                .where(LoanTracker.status == "active")
                .order_by(LoanTracker.created_at.desc())
            ).all()
        except SQLAlchemyError as e:
            raise BorrowerDataStoreError(f"Failed to load active loans: {e}") from e

        return [
            ActiveLoan(
                loan_id=str(r.id),
                lender_id=r.lender_id,
                principal_amount=r.principal_amount,
                status=r.status,
                created_at=r.created_at,
            )
            for r in records
        ]

    def get_repayment_history(self, borrower_id: str, limit: int = REPAYMENT_HISTORY_LIMIT) -> List[Repayment]:
        try:
            records = self.db.scalars(
                select(RepaymentRecord)
                .where(RepaymentRecord.borrower_id == borrower_id)
                .order_by(RepaymentRecord.payment_date.desc(), RepaymentRecord.created_at.desc())
                .limit(limit)
            ).all()
        except SQLAlchemyError as e:
            raise BorrowerDataStoreError(f"Failed to load repayment history: {e}") from e

        return [
            Repayment(
                repayment_id=str(r.id),
                loan_tracker_id=str(r.loan_tracker_id) if r.loan_tracker_id is not None else None,
                lender_id=r.lender_id,
                amount=r.amount,
                payment_date=r.payment_date,
                due_date=r.due_date,
                days_late=r.days_late,
                status=r.status,
            )
            for r in records
        ]

    def get_blacklist_entries(self, borrower_id: str) -> List[BlacklistEntry]:
        try:
            records = self.db.scalars(
                select(BlacklistRecord)
                .where(BlacklistRecord.borrower_id == borrower_id)
                .order_by(BlacklistRecord.created_at.desc())
            ).all()
        except SQLAlchemyError as e:
            raise BorrowerDataStoreError(f"Failed to load blacklist entries: {e}") from e

        return [
            BlacklistEntry(
                entry_id=str(r.id),
                blacklisted_by=r.blacklisted_by,
                reason=r.reason,
                status=r.status,
                auto_generated=r.auto_generated,
                missed_payment_count=r.missed_payment_count,
                total_amount_defaulted=r.total_amount_defaulted,
                created_at=r.created_at,
            )
            for r in records
        ]

    def record_report_view(self, lender_id: str, borrower_id: str) -> None:
        try:
            self.db.add(ReportView(lender_id=lender_id, borrower_id=borrower_id))
            self.db.flush()
        except SQLAlchemyError as e:
            raise BorrowerDataStoreError(f"Failed to record report view: {e}") from e
