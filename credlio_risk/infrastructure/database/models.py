"""SQLAlchemy ORM models for borrower risk data"""

import uuid
from sqlalchemy import Column, Boolean, Date, Float, DateTime, Integer, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class AffordabilityMetricsRecord(Base):
    """Affordability inputs and derived metrics, one row per borrower"""

    __tablename__ = "affordability_metrics"

    borrower_id = Column(Text, primary_key=True)
    monthly_salary = Column(Float, nullable=False, default=0)
    side_hustle_income = Column(Float, nullable=False, default=0)
    remittances = Column(Float, nullable=False, default=0)
    other_income = Column(Float, nullable=False, default=0)
    total_monthly_income = Column(Float, nullable=False)
    monthly_expenses = Column(Float, nullable=False, default=0)
    existing_loan_payments = Column(Float, nullable=False, default=0)
    disposable_income = Column(Float, nullable=False)
    debt_to_income_ratio = Column(Float, nullable=False)
    risk_score = Column(Float, nullable=False)
    max_affordable_loan = Column(Float, nullable=False)
    last_updated = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class BorrowerReputationRecord(Base):
    """Reputation summary maintained by the platform"""

    __tablename__ = "borrower_reputation"

    borrower_id = Column(Text, primary_key=True)
    total_loans = Column(Integer, nullable=False, default=0)
    completed_loans = Column(Integer, nullable=False, default=0)
    active_loans = Column(Integer, nullable=False, default=0)
    defaulted_loans = Column(Integer, nullable=False, default=0)
    on_time_payments = Column(Integer, nullable=False, default=0)
    late_payments = Column(Integer, nullable=False, default=0)
    very_late_payments = Column(Integer, nullable=False, default=0)
    total_borrowed = Column(Float, nullable=False, default=0)
    total_repaid = Column(Float, nullable=False, default=0)
    average_days_late = Column(Float, nullable=False, default=0)
    reputation_score = Column(Float, nullable=False, default=50)
    reputation_category = Column(Text, nullable=False, default="MODERATE")
    is_blacklisted = Column(Boolean, nullable=False, default=False)
    blacklist_count = Column(Integer, nullable=False, default=0)
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class LoanTracker(Base):
    """Funded loan between a lender and borrower"""

    __tablename__ = "loan_trackers"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    borrower_id = Column(Text, nullable=False, index=True)
    lender_id = Column(Text, nullable=False, index=True)
    principal_amount = Column(Float, nullable=False)
    status = Column(Text, nullable=False, default="active")  # active | completed | overdue | defaulted
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class ReportView(Base):
    """Audit row written each time a lender opens a borrower report"""

    __tablename__ = "report_views"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    lender_id = Column(Text, nullable=False, index=True)
    borrower_id = Column(Text, nullable=False, index=True)
    viewed_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class RepaymentRecord(Base):
    """Payment made by a borrower against a tracked loan"""

    __tablename__ = "repayments"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    loan_tracker_id = Column(UUID(as_uuid=True), nullable=True, index=True)
    borrower_id = Column(Text, nullable=False, index=True)
    lender_id = Column(Text, nullable=False)
    amount = Column(Float, nullable=False)
    payment_date = Column(Date, nullable=False)
    due_date = Column(Date, nullable=False)
    days_late = Column(Integer, nullable=False, default=0)
    status = Column(Text, nullable=False, default="on_time")  # on_time | late | very_late | partial
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class BlacklistRecord(Base):
    """Blacklist entry filed by a lender or generated from missed payments"""

    __tablename__ = "blacklists"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    borrower_id = Column(Text, nullable=False, index=True)
    blacklisted_by = Column(Text, nullable=False)
    reason = Column(Text, nullable=False)
    status = Column(Text, nullable=False, default="active")  # active | appealed | removed
    auto_generated = Column(Boolean, nullable=False, default=False)
    missed_payment_count = Column(Integer, nullable=True)
    total_amount_defaulted = Column(Float, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
