"""Collaborator interface for borrower data held in an external store"""

from abc import ABC, abstractmethod
from typing import List, Optional

from credlio_risk.domain.models import (
    ActiveLoan,
    AffordabilityInput,
    AffordabilityMetrics,
    AffordabilityResult,
    BlacklistEntry,
    BorrowerReputation,
    Repayment,
)

REPAYMENT_HISTORY_LIMIT = 50


class BorrowerDataStore(ABC):
    """
    Reads and writes borrower records keyed by borrower identifier.

    Implementations raise BorrowerDataStoreError for any I/O failure.
    """

    @abstractmethod
    def get_reputation(self, borrower_id: str) -> Optional[BorrowerReputation]:
        """Reputation record, or None when the borrower has none yet"""

    @abstractmethod
    def get_affordability(self, borrower_id: str) -> Optional[AffordabilityMetrics]:
        """Last saved affordability record, or None"""

    @abstractmethod
    def save_affordability(
        self,
        borrower_id: str,
        data: AffordabilityInput,
        result: AffordabilityResult,
    ) -> AffordabilityMetrics:
        """Upsert the borrower's affordability record; last write wins"""

    @abstractmethod
    def get_active_loans(self, borrower_id: str) -> List[ActiveLoan]:
        """Loans with status active, newest first"""

    @abstractmethod
    def get_repayment_history(self, borrower_id: str, limit: int = REPAYMENT_HISTORY_LIMIT) -> List[Repayment]:
        """Most recent repayments by payment date, newest first, at most limit rows"""

    @abstractmethod
    def get_blacklist_entries(self, borrower_id: str) -> List[BlacklistEntry]:
        """Every blacklist entry filed against the borrower, newest first"""

    @abstractmethod
    def record_report_view(self, lender_id: str, borrower_id: str) -> None:
        """Log that a lender opened a borrower's report"""
