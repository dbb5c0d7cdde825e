"""Dependency injection for FastAPI endpoints"""

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from credlio_risk.domain.store import BorrowerDataStore
from credlio_risk.infrastructure.database.repositories import SqlAlchemyBorrowerDataStore
from credlio_risk.infrastructure.database.session import get_db
from credlio_risk.services.reports import BorrowerReportService


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_store(db: Session = Depends(get_db)) -> BorrowerDataStore:
    """Provide the borrower data store bound to the request's session"""
    return SqlAlchemyBorrowerDataStore(db)


def get_report_service(store: BorrowerDataStore = Depends(get_store)) -> BorrowerReportService:
    return BorrowerReportService(store)
