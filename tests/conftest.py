"""Pytest fixtures for testing"""

import pytest
from datetime import date, datetime, timedelta, timezone
from typing import Dict, Generator, List, Optional
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker, Session
from credlio_risk.api.main import create_app
from credlio_risk.infrastructure.database.models import (
    Base,
    BlacklistRecord,
    BorrowerReputationRecord,
    LoanTracker,
    RepaymentRecord,
)
from credlio_risk.infrastructure.database.session import build_engine, get_db
from credlio_risk.domain.exceptions import BorrowerDataStoreError
from credlio_risk.domain.models import (
    ActiveLoan,
    AffordabilityInput,
    AffordabilityMetrics,
    AffordabilityResult,
    BlacklistEntry,
    BorrowerReputation,
    Repayment,
)
from credlio_risk.domain.store import REPAYMENT_HISTORY_LIMIT, BorrowerDataStore


# Test database: one shared in-memory connection
TEST_DATABASE_URL = "sqlite://"
engine = build_engine(TEST_DATABASE_URL)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class InMemoryBorrowerDataStore(BorrowerDataStore):
    """Dictionary-backed store for service tests"""

    def __init__(self):
        self.reputations: Dict[str, BorrowerReputation] = {}
        self.affordability: Dict[str, AffordabilityMetrics] = {}
        self.active_loans: Dict[str, List[ActiveLoan]] = {}
        self.repayments: Dict[str, List[Repayment]] = {}
        self.blacklist_entries: Dict[str, List[BlacklistEntry]] = {}
        self.report_views: List[tuple] = []

    def get_reputation(self, borrower_id: str) -> Optional[BorrowerReputation]:
        return self.reputations.get(borrower_id)

    def get_affordability(self, borrower_id: str) -> Optional[AffordabilityMetrics]:
        return self.affordability.get(borrower_id)

    def save_affordability(
        self, borrower_id: str, data: AffordabilityInput, result: AffordabilityResult
    ) -> AffordabilityMetrics:
        metrics = AffordabilityMetrics(borrower_id, data, result, datetime.now(timezone.utc))
        self.affordability[borrower_id] = metrics
        return metrics

    def get_active_loans(self, borrower_id: str) -> List[ActiveLoan]:
        return list(self.active_loans.get(borrower_id, []))

    def get_repayment_history(self, borrower_id: str, limit: int = REPAYMENT_HISTORY_LIMIT) -> List[Repayment]:
        history = sorted(self.repayments.get(borrower_id, []), key=lambda r: r.payment_date, reverse=True)
        return history[:limit]

    def get_blacklist_entries(self, borrower_id: str) -> List[BlacklistEntry]:
        return list(self.blacklist_entries.get(borrower_id, []))

    def record_report_view(self, lender_id: str, borrower_id: str) -> None:
        self.report_views.append((lender_id, borrower_id))


class FailingBorrowerDataStore(InMemoryBorrowerDataStore):
    """Store whose every operation fails like an unreachable database"""

    def get_reputation(self, borrower_id: str) -> Optional[BorrowerReputation]:
        raise BorrowerDataStoreError("connection refused")

    def save_affordability(
        self, borrower_id: str, data: AffordabilityInput, result: AffordabilityResult
    ) -> AffordabilityMetrics:
        raise BorrowerDataStoreError("connection refused")

    def record_report_view(self, lender_id: str, borrower_id: str) -> None:
        raise BorrowerDataStoreError("connection refused")


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def memory_store() -> InMemoryBorrowerDataStore:
    return InMemoryBorrowerDataStore()


@pytest.fixture
def seed_reputation(db: Session):
    """Insert a borrower_reputation row; keyword arguments override defaults"""

    def _seed(borrower_id: str, **fields) -> BorrowerReputationRecord:
        record = BorrowerReputationRecord(
            borrower_id=borrower_id,
            total_loans=fields.pop("total_loans", 0),
            completed_loans=fields.pop("completed_loans", 0),
            active_loans=fields.pop("active_loans", 0),
            defaulted_loans=fields.pop("defaulted_loans", 0),
            on_time_payments=fields.pop("on_time_payments", 0),
            late_payments=fields.pop("late_payments", 0),
            very_late_payments=fields.pop("very_late_payments", 0),
            total_borrowed=fields.pop("total_borrowed", 0.0),
            total_repaid=fields.pop("total_repaid", 0.0),
            average_days_late=fields.pop("average_days_late", 0.0),
            reputation_score=fields.pop("reputation_score", 50.0),
            reputation_category=fields.pop("reputation_category", "MODERATE"),
            is_blacklisted=fields.pop("is_blacklisted", False),
            blacklist_count=fields.pop("blacklist_count", 0),
        )
        assert not fields, f"Unknown reputation fields: {fields}"
        db.add(record)
        db.commit()
        return record

    return _seed


@pytest.fixture
def seed_loans(db: Session):
    """Insert loan_trackers rows for a borrower with the given status"""

    def _seed(borrower_id: str, count: int, status: str = "active", lender_id: str = "lender_1") -> None:
        for _ in range(count):
            db.add(
                LoanTracker(
                    borrower_id=borrower_id,
                    lender_id=lender_id,
                    principal_amount=1000.0,
                    status=status,
                )
            )
        db.commit()

    return _seed


@pytest.fixture
def seed_repayments(db: Session):
    """Insert daily repayments for a borrower, the last one paid on `latest`"""

    def _seed(
        borrower_id: str,
        count: int,
        latest: date = date(2024, 6, 30),
        lender_id: str = "lender_1",
        days_late: int = 0,
    ) -> None:
        for i in range(count):
            paid = latest - timedelta(days=count - 1 - i)
            db.add(
                RepaymentRecord(
                    borrower_id=borrower_id,
                    lender_id=lender_id,
                    amount=100.0 + i,
                    payment_date=paid,
                    due_date=paid - timedelta(days=days_late),
                    days_late=days_late,
                    status="on_time" if days_late == 0 else "late",
                )
            )
        db.commit()

    return _seed


@pytest.fixture
def seed_blacklist(db: Session):
    """Insert a blacklists row filed on the given date"""

    def _seed(
        borrower_id: str,
        blacklisted_by: str,
        reason: str = "missed_payments",
        created_at: datetime = datetime(2024, 1, 1, tzinfo=timezone.utc),
        **fields,
    ) -> BlacklistRecord:
        record = BlacklistRecord(
            borrower_id=borrower_id,
            blacklisted_by=blacklisted_by,
            reason=reason,
            created_at=created_at,
            status=fields.pop("status", "active"),
            auto_generated=fields.pop("auto_generated", False),
            missed_payment_count=fields.pop("missed_payment_count", None),
            total_amount_defaulted=fields.pop("total_amount_defaulted", None),
        )
        assert not fields, f"Unknown blacklist fields: {fields}"
        db.add(record)
        db.commit()
        return record

    return _seed


@pytest.fixture
def failing_store() -> FailingBorrowerDataStore:
    return FailingBorrowerDataStore()
