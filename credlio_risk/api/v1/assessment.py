"""POST /v1/risk-assessment - stateless assessment of posted borrower data"""

import logging
from fastapi import APIRouter, HTTPException, Request

from credlio_risk.api.v1.reports import to_assessment_schema
from credlio_risk.api.v1.schemas import RiskAssessmentRequest, RiskAssessmentSchema
from credlio_risk.api.dependencies import get_request_id
from credlio_risk.domain.affordability import compute_affordability
from credlio_risk.domain.assessment import assess_risk
from credlio_risk.domain.models import AffordabilityInput, BorrowerReputation
from credlio_risk.domain.exceptions import InvalidInputError
from credlio_risk.infrastructure.observability.metrics import record_assessment

router = APIRouter()


@router.post("/risk-assessment", response_model=RiskAssessmentSchema)
def create_risk_assessment(request_body: RiskAssessmentRequest, request: Request):
    """Assess risk without touching the store; omitted reputation means neutral"""
    if request_body.reputation is not None:
        reputation = BorrowerReputation(borrower_id="", **request_body.reputation.model_dump())
    else:
        reputation = BorrowerReputation.neutral("")

    try:
        affordability = (
            compute_affordability(AffordabilityInput(**request_body.affordability.model_dump()))
            if request_body.affordability is not None
            else None
        )
        assessment = assess_risk(reputation, affordability, request_body.active_loan_count)
    except InvalidInputError as e:
        logging.warning(f"Invalid assessment input: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=422, detail={"field": e.field, "message": e.message})

    record_assessment(assessment.overall_risk.value)
    return to_assessment_schema(assessment)
