"""FastAPI application factory"""

import logging
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from sqlalchemy.engine import Engine
from starlette.responses import Response

from credlio_risk.api.middleware import RequestIDMiddleware, MetricsMiddleware
from credlio_risk.api.v1 import affordability, assessment, reports
from credlio_risk.infrastructure.database.models import Base
from credlio_risk.infrastructure.database.session import engine
from credlio_risk.infrastructure.observability.logging import setup_logging
from credlio_risk.config import settings

setup_logging(settings.log_level)


def create_app(db_engine: Optional[Engine] = None, create_tables: Optional[bool] = None) -> FastAPI:
    """
    Build the risk service app.

    With create_tables (default: settings.auto_create_tables) the ORM schema is
    created on startup against db_engine, which lets the service run against a
    bare SQLite file without migrations.
    """
    db_engine = db_engine if db_engine is not None else engine
    if create_tables is None:
        create_tables = settings.auto_create_tables

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if create_tables:
            Base.metadata.create_all(bind=db_engine)
            logging.info("Database schema ensured", extra={"dialect": db_engine.dialect.name})
        yield

    app = FastAPI(
        title="Credlio Risk Service",
        description="Borrower affordability scoring and reputation risk reports",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Last added runs first: request IDs are bound before metrics are timed
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    app.include_router(affordability.router, prefix="/v1", tags=["affordability"])
    app.include_router(reports.router, prefix="/v1", tags=["reports"])
    app.include_router(assessment.router, prefix="/v1", tags=["assessment"])

    return app


app = create_app()
