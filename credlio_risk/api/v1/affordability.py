"""POST/GET /v1/borrowers/{borrower_id}/affordability - affordability calculator endpoints"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from credlio_risk.api.v1.schemas import AffordabilityRequest, AffordabilityResponse
from credlio_risk.api.dependencies import get_report_service, get_request_id
from credlio_risk.infrastructure.database.session import get_db
from credlio_risk.services.reports import BorrowerReportService
from credlio_risk.domain.affordability import affordability_risk_tier, dti_status
from credlio_risk.domain.display import display_for
from credlio_risk.domain.models import AffordabilityInput, AffordabilityMetrics
from credlio_risk.domain.exceptions import BorrowerDataStoreError, InvalidAffordabilityInputError

router = APIRouter()


def to_affordability_response(metrics: AffordabilityMetrics) -> AffordabilityResponse:
    result = metrics.result
    tier = affordability_risk_tier(result.risk_score)
    status = dti_status(result.debt_to_income_ratio)
    tier_display = display_for(tier)

    return AffordabilityResponse(
        borrower_id=metrics.borrower_id,
        monthly_salary=metrics.input.monthly_salary,
        side_hustle_income=metrics.input.side_hustle_income,
        remittances=metrics.input.remittances,
        other_income=metrics.input.other_income,
        monthly_expenses=metrics.input.monthly_expenses,
        existing_loan_payments=metrics.input.existing_loan_payments,
        total_income=result.total_income,
        disposable_income=result.disposable_income,
        debt_to_income_ratio=round(result.debt_to_income_ratio, 2),
        dti_status=status,
        dti_label=display_for(status).label,
        risk_score=result.risk_score,
        risk_tier=tier,
        risk_label=tier_display.label,
        risk_color=tier_display.color,
        max_affordable_loan=result.max_affordable_loan,
        last_updated=metrics.last_updated.isoformat(),
    )


@router.post("/borrowers/{borrower_id}/affordability", response_model=AffordabilityResponse)
def calculate_affordability(
    borrower_id: str,
    request_body: AffordabilityRequest,
    request: Request,
    db: Session = Depends(get_db),
    service: BorrowerReportService = Depends(get_report_service),
):
    """
    Calculate and save a borrower's affordability metrics.

    A later calculation overwrites the earlier record.
    """
    request_id = get_request_id(request)

    try:
        metrics = service.calculate_affordability(borrower_id, AffordabilityInput(**request_body.model_dump()))
        db.commit()
        return to_affordability_response(metrics)

    except InvalidAffordabilityInputError as e:
        db.rollback()
        logging.warning(f"Invalid affordability input: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail={"field": e.field, "message": e.message})

    except BorrowerDataStoreError as e:
        db.rollback()
        logging.error(f"Store error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Borrower data store unavailable")

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/borrowers/{borrower_id}/affordability", response_model=AffordabilityResponse)
def get_affordability(
    borrower_id: str,
    request: Request,
    service: BorrowerReportService = Depends(get_report_service),
):
    """Retrieve the borrower's last saved affordability metrics"""
    try:
        metrics = service.get_affordability(borrower_id)
    except BorrowerDataStoreError as e:
        logging.error(f"Store error: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=503, detail="Borrower data store unavailable")

    if metrics is None:
        raise HTTPException(status_code=404, detail="Affordability metrics not found")

    return to_affordability_response(metrics)
