"""Prometheus metrics for monitoring risk tiers, report traffic and store health"""

from prometheus_client import Counter, Histogram

# Scoring metrics
affordability_counter = Counter(
    "credlio_affordability_calculations_total",
    "Affordability calculations performed",
    ["risk_tier"],  # LOW | MEDIUM | HIGH
)

assessment_counter = Counter(
    "credlio_risk_assessments_total",
    "Borrower risk assessments performed",
    ["overall_risk"],  # LOW | MEDIUM | HIGH
)

report_view_counter = Counter(
    "credlio_report_views_total",
    "Borrower reports opened by lenders",
)

# Store metrics
store_failure_counter = Counter(
    "credlio_store_failures_total",
    "Failed borrower data store operations",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_affordability(risk_tier: str) -> None:
    affordability_counter.labels(risk_tier=risk_tier).inc()


def record_assessment(overall_risk: str, report_viewed: bool = False) -> None:
    """Record assessment tier distribution and lender report traffic"""
    assessment_counter.labels(overall_risk=overall_risk).inc()
    if report_viewed:
        report_view_counter.inc()
