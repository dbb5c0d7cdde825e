"""Pydantic schemas for API request/response validation"""

from datetime import date, datetime
from pydantic import BaseModel, Field
from typing import List, Optional

from credlio_risk.domain.affordability import MAX_AMOUNT
from credlio_risk.domain.models import (
    AffordabilityRiskTier,
    DTIStatus,
    OverallRisk,
    ReputationCategory,
    RiskImpact,
)


class AffordabilityRequest(BaseModel):
    """Monthly amounts for POST /v1/borrowers/{borrower_id}/affordability"""

    monthly_salary: float = Field(0, ge=0, le=MAX_AMOUNT)
    side_hustle_income: float = Field(0, ge=0, le=MAX_AMOUNT)
    remittances: float = Field(0, ge=0, le=MAX_AMOUNT)
    other_income: float = Field(0, ge=0, le=MAX_AMOUNT)
    monthly_expenses: float = Field(0, ge=0, le=MAX_AMOUNT)
    existing_loan_payments: float = Field(0, ge=0, le=MAX_AMOUNT)


class AffordabilityResponse(BaseModel):
    """Saved affordability record with display tiers"""

    borrower_id: str
    monthly_salary: float
    side_hustle_income: float
    remittances: float
    other_income: float
    monthly_expenses: float
    existing_loan_payments: float
    total_income: float
    disposable_income: float
    debt_to_income_ratio: float
    dti_status: DTIStatus
    dti_label: str
    risk_score: float
    risk_tier: AffordabilityRiskTier
    risk_label: str
    risk_color: str
    max_affordable_loan: float
    last_updated: str


class ReputationSchema(BaseModel):
    """Borrower reputation counts and score"""

    total_loans: int = Field(0, ge=0)
    completed_loans: int = Field(0, ge=0)
    active_loans: int = Field(0, ge=0)
    defaulted_loans: int = Field(0, ge=0)
    on_time_payments: int = Field(0, ge=0)
    late_payments: int = Field(0, ge=0)
    very_late_payments: int = Field(0, ge=0)
    total_borrowed: float = Field(0, ge=0)
    total_repaid: float = Field(0, ge=0)
    average_days_late: float = Field(0, ge=0)
    reputation_score: float = Field(50, ge=0, le=100)
    reputation_category: ReputationCategory = ReputationCategory.MODERATE
    is_blacklisted: bool = False
    blacklist_count: int = Field(0, ge=0)


class ReputationResponse(ReputationSchema):
    borrower_id: str
    category_label: str
    category_color: str
    score_color: str
    is_default: bool


class RiskFactorSchema(BaseModel):
    factor: str
    impact: RiskImpact
    description: str


class RiskAssessmentSchema(BaseModel):
    overall_risk: OverallRisk
    label: str
    color: str
    factors: List[RiskFactorSchema]
    recommendations: List[str]


class PaymentSummarySchema(BaseModel):
    total_payments: int
    on_time_percentage: float
    repayment_percentage: float


class ActiveLoanSchema(BaseModel):
    loan_id: str
    lender_id: str
    principal_amount: float
    status: str
    created_at: Optional[datetime] = None


class RepaymentSchema(BaseModel):
    repayment_id: str
    loan_tracker_id: Optional[str] = None
    lender_id: str
    amount: float
    payment_date: date
    due_date: date
    days_late: int
    status: str


class BlacklistEntrySchema(BaseModel):
    entry_id: str
    blacklisted_by: str
    reason: str
    status: str
    auto_generated: bool
    missed_payment_count: Optional[int] = None
    total_amount_defaulted: Optional[float] = None
    created_at: Optional[datetime] = None


class ReportResponse(BaseModel):
    """Response for GET /v1/borrowers/{borrower_id}/report"""

    borrower_id: str
    reputation: ReputationResponse
    affordability: Optional[AffordabilityResponse] = None
    active_loan_count: int
    payment_summary: PaymentSummarySchema
    risk_assessment: RiskAssessmentSchema
    active_loans: List[ActiveLoanSchema] = []
    repayment_history: List[RepaymentSchema] = []
    blacklist_entries: List[BlacklistEntrySchema] = []


class RiskAssessmentRequest(BaseModel):
    """Request body for POST /v1/risk-assessment"""

    reputation: Optional[ReputationSchema] = None
    affordability: Optional[AffordabilityRequest] = None
    active_loan_count: int = Field(0, ge=0)
