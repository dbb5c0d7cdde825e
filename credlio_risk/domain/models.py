"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import List, Optional


class ReputationCategory(str, Enum):
    GOOD = "GOOD"
    MODERATE = "MODERATE"
    BAD = "BAD"


class RiskImpact(str, Enum):
    POSITIVE = "POSITIVE"
    NEGATIVE = "NEGATIVE"


class OverallRisk(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class AffordabilityRiskTier(str, Enum):
    """Display tier for the numeric affordability risk score"""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class DTIStatus(str, Enum):
    """Display status for a debt-to-income ratio"""

    EXCELLENT = "EXCELLENT"
    GOOD = "GOOD"
    FAIR = "FAIR"
    POOR = "POOR"


@dataclass(frozen=True)
class AffordabilityInput:
    """Monthly income and outgoings entered for a borrower (single currency)"""

    monthly_salary: float = 0.0
    side_hustle_income: float = 0.0
    remittances: float = 0.0
    other_income: float = 0.0
    monthly_expenses: float = 0.0
    existing_loan_payments: float = 0.0


@dataclass(frozen=True)
class AffordabilityResult:
    """Derived affordability metrics"""

    total_income: float
    disposable_income: float  # may be negative
    debt_to_income_ratio: float  # 0-100
    risk_score: float  # 0-100, higher is riskier
    max_affordable_loan: float  # >= 0


@dataclass
class AffordabilityMetrics:
    """Persisted affordability record, one per borrower"""

    borrower_id: str
    input: AffordabilityInput
    result: AffordabilityResult
    last_updated: datetime


@dataclass
class BorrowerReputation:
    """Externally maintained reputation summary for a borrower"""

    borrower_id: str
    total_loans: int = 0
    completed_loans: int = 0
    active_loans: int = 0
    defaulted_loans: int = 0
    on_time_payments: int = 0
    late_payments: int = 0
    very_late_payments: int = 0
    total_borrowed: float = 0.0
    total_repaid: float = 0.0
    average_days_late: float = 0.0
    reputation_score: float = 50.0
    reputation_category: ReputationCategory = ReputationCategory.MODERATE
    is_blacklisted: bool = False
    blacklist_count: int = 0
    is_default: bool = False  # True when synthesized, not loaded

    @classmethod
    def neutral(cls, borrower_id: str) -> "BorrowerReputation":
        """Neutral record used when the store has nothing for a borrower"""
        return cls(borrower_id=borrower_id, is_default=True)


@dataclass(frozen=True)
class RiskFactor:
    """Single factor contributing to a risk assessment"""

    factor: str
    impact: RiskImpact
    description: str


@dataclass
class RiskAssessment:
    """Output of reputation risk assessment"""

    overall_risk: OverallRisk
    factors: List[RiskFactor] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)

    @property
    def negative_count(self) -> int:
        return sum(1 for f in self.factors if f.impact is RiskImpact.NEGATIVE)

    @property
    def positive_count(self) -> int:
        return sum(1 for f in self.factors if f.impact is RiskImpact.POSITIVE)


@dataclass(frozen=True)
class ActiveLoan:
    """Loan currently being repaid"""

    loan_id: str
    lender_id: str
    principal_amount: float
    status: str
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class Repayment:
    """Single recorded repayment against a loan"""

    repayment_id: str
    loan_tracker_id: Optional[str]
    lender_id: str
    amount: float
    payment_date: date
    due_date: date
    days_late: int = 0
    status: str = "on_time"  # on_time | late | very_late | partial


@dataclass(frozen=True)
class BlacklistEntry:
    """Blacklist record filed against a borrower"""

    entry_id: str
    blacklisted_by: str
    reason: str  # missed_payments | fraud | false_information | harassment | other
    status: str = "active"  # active | appealed | removed
    auto_generated: bool = False
    missed_payment_count: Optional[int] = None
    total_amount_defaulted: Optional[float] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class PaymentSummary:
    """Percentages derived from a reputation record's payment history"""

    total_payments: int
    on_time_percentage: float
    repayment_percentage: float


@dataclass
class BorrowerReport:
    """Aggregated reputation report shown to lenders"""

    borrower_id: str
    reputation: BorrowerReputation
    affordability: Optional[AffordabilityMetrics]
    active_loan_count: int
    payment_summary: PaymentSummary
    risk_assessment: RiskAssessment
    active_loans: List[ActiveLoan] = field(default_factory=list)
    repayment_history: List[Repayment] = field(default_factory=list)  # newest first
    blacklist_entries: List[BlacklistEntry] = field(default_factory=list)
