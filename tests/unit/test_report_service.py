"""Unit tests for the report service against an in-memory store"""

import pytest
from datetime import date, timedelta
from prometheus_client import REGISTRY
from credlio_risk.domain.models import (
    ActiveLoan,
    AffordabilityInput,
    BlacklistEntry,
    BorrowerReputation,
    OverallRisk,
    Repayment,
)
from credlio_risk.domain.exceptions import BorrowerDataStoreError, InvalidAffordabilityInputError
from credlio_risk.services.reports import BorrowerReportService


def store_failures() -> float:
    return REGISTRY.get_sample_value("credlio_store_failures_total") or 0.0


def test_calculate_affordability_saves_record(memory_store):
    service = BorrowerReportService(memory_store)

    metrics = service.calculate_affordability(
        "b1", AffordabilityInput(monthly_salary=1000, monthly_expenses=200, existing_loan_payments=100)
    )

    assert metrics.result.disposable_income == 700
    assert memory_store.affordability["b1"] is metrics
    assert service.get_affordability("b1") is metrics


def test_calculate_affordability_last_write_wins(memory_store):
    service = BorrowerReportService(memory_store)

    service.calculate_affordability("b1", AffordabilityInput(monthly_salary=1000))
    service.calculate_affordability("b1", AffordabilityInput(monthly_salary=4000))

    assert len(memory_store.affordability) == 1
    assert memory_store.affordability["b1"].input.monthly_salary == 4000


def test_calculate_affordability_invalid_input_writes_nothing(memory_store):
    service = BorrowerReportService(memory_store)

    with pytest.raises(InvalidAffordabilityInputError):
        service.calculate_affordability("b1", AffordabilityInput(monthly_salary=-5))

    assert memory_store.affordability == {}


def test_get_report_records_lender_view(memory_store):
    memory_store.reputations["b1"] = BorrowerReputation(borrower_id="b1", reputation_score=82)
    service = BorrowerReportService(memory_store)

    report = service.get_report("b1", lender_id="lender_9")

    assert memory_store.report_views == [("lender_9", "b1")]
    assert report.risk_assessment.overall_risk is OverallRisk.LOW


def test_get_report_without_lender_records_nothing(memory_store):
    service = BorrowerReportService(memory_store)

    report = service.get_report("b1")

    assert memory_store.report_views == []
    assert report.reputation.is_default is True


def test_get_report_passes_active_loan_count(memory_store):
    memory_store.active_loans["b1"] = [ActiveLoan(f"loan_{i}", "lender_1", 800.0, "active") for i in range(5)]
    service = BorrowerReportService(memory_store)

    report = service.get_report("b1")

    assert report.active_loan_count == 5
    assert [f.factor for f in report.risk_assessment.factors] == ["Multiple active loans"]


def test_get_report_store_failure_propagates(failing_store):
    service = BorrowerReportService(failing_store)
    before = store_failures()

    with pytest.raises(BorrowerDataStoreError):
        service.get_report("b1", lender_id="lender_1")

    assert store_failures() == before + 1


def test_calculate_affordability_store_failure_propagates(failing_store):
    service = BorrowerReportService(failing_store)

    with pytest.raises(BorrowerDataStoreError):
        service.calculate_affordability("b1", AffordabilityInput(monthly_salary=1000))


def test_get_report_caps_repayment_history(memory_store):
    first_due = date(2024, 1, 1)
    memory_store.repayments["b1"] = [
        Repayment(f"r{i}", "loan_1", "lender_1", 50.0, first_due + timedelta(days=i), first_due + timedelta(days=i))
        for i in range(56)
    ]
    memory_store.blacklist_entries["b1"] = [BlacklistEntry("e1", "lender_3", "fraud")]
    service = BorrowerReportService(memory_store)

    report = service.get_report("b1")

    assert len(report.repayment_history) == 50
    assert report.repayment_history[0].payment_date == date(2024, 2, 25)
    assert [e.blacklisted_by for e in report.blacklist_entries] == ["lender_3"]
