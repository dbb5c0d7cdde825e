"""Structured JSON logging for production observability"""

import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger

from credlio_risk.config import settings

# Set per request by RequestIDMiddleware; empty outside a request
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name
        request_id = request_id_var.get()
        if request_id and "request_id" not in log_record:
            log_record["request_id"] = request_id


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_affordability(
    borrower_id: str,
    risk_score: float,
    risk_tier: str,
    debt_to_income_ratio: float,
    duration_ms: float,
) -> None:
    """Log structured affordability calculation outcome"""
    logging.info(
        "Affordability calculated",
        extra={
            "borrower_id": borrower_id,
            "step": "affordability_complete",
            "risk_score": risk_score,
            "risk_tier": risk_tier,
            "debt_to_income_ratio": debt_to_income_ratio,
            "duration_ms": duration_ms,
        },
    )


def log_assessment(
    borrower_id: str,
    overall_risk: str,
    negative_factors: int,
    positive_factors: int,
    default_reputation: bool,
    duration_ms: float,
) -> None:
    """Log structured risk assessment outcome for analysis"""
    logging.info(
        "Risk assessment completed",
        extra={
            "borrower_id": borrower_id,
            "step": "assessment_complete",
            "overall_risk": overall_risk,
            "negative_factors": negative_factors,
            "positive_factors": positive_factors,
            "default_reputation": default_reputation,
            "duration_ms": duration_ms,
        },
    )
