"""GET /v1/borrowers/{borrower_id}/report - lender-facing reputation report"""

import logging
from dataclasses import asdict
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from credlio_risk.api.v1.affordability import to_affordability_response
from credlio_risk.api.v1.schemas import (
    ActiveLoanSchema,
    BlacklistEntrySchema,
    PaymentSummarySchema,
    RepaymentSchema,
    ReportResponse,
    ReputationResponse,
    RiskAssessmentSchema,
    RiskFactorSchema,
)
from credlio_risk.api.dependencies import get_report_service, get_request_id
from credlio_risk.infrastructure.database.session import get_db
from credlio_risk.services.reports import BorrowerReportService
from credlio_risk.domain.display import display_for, reputation_score_color
from credlio_risk.domain.models import BorrowerReputation, RiskAssessment
from credlio_risk.domain.exceptions import BorrowerDataStoreError, InvalidRiskInputError

router = APIRouter()


def to_reputation_response(reputation: BorrowerReputation) -> ReputationResponse:
    category = display_for(reputation.reputation_category)
    return ReputationResponse(
        **asdict(reputation),
        category_label=category.label,
        category_color=category.color,
        score_color=reputation_score_color(reputation.reputation_score),
    )


def to_assessment_schema(assessment: RiskAssessment) -> RiskAssessmentSchema:
    display = display_for(assessment.overall_risk)
    return RiskAssessmentSchema(
        overall_risk=assessment.overall_risk,
        label=display.label,
        color=display.color,
        factors=[
            RiskFactorSchema(factor=f.factor, impact=f.impact, description=f.description)
            for f in assessment.factors
        ],
        recommendations=assessment.recommendations,
    )


@router.get("/borrowers/{borrower_id}/report", response_model=ReportResponse)
def get_borrower_report(
    borrower_id: str,
    request: Request,
    lender_id: Optional[str] = Query(None, description="Lender opening the report"),
    db: Session = Depends(get_db),
    service: BorrowerReportService = Depends(get_report_service),
):
    """
    Build a borrower's reputation report with risk assessment.

    Borrowers without a reputation record get a neutral default (score 50).
    """
    request_id = get_request_id(request)

    try:
        report = service.get_report(borrower_id, lender_id=lender_id)
        db.commit()

    except BorrowerDataStoreError as e:
        db.rollback()
        logging.error(f"Store error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Borrower data store unavailable")

    except InvalidRiskInputError as e:
        db.rollback()
        logging.warning(f"Invalid risk input: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail={"field": e.field, "message": e.message})

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    return ReportResponse(
        borrower_id=report.borrower_id,
        reputation=to_reputation_response(report.reputation),
        affordability=(
            to_affordability_response(report.affordability) if report.affordability is not None else None
        ),
        active_loan_count=report.active_loan_count,
        payment_summary=PaymentSummarySchema(**asdict(report.payment_summary)),
        risk_assessment=to_assessment_schema(report.risk_assessment),
        active_loans=[ActiveLoanSchema(**asdict(loan)) for loan in report.active_loans],
        repayment_history=[RepaymentSchema(**asdict(r)) for r in report.repayment_history],
        blacklist_entries=[BlacklistEntrySchema(**asdict(e)) for e in report.blacklist_entries],
    )
