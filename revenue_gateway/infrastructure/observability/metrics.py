"""Prometheus metrics for monitoring decision outcomes, offers and data source health"""

from prometheus_client import Counter, Histogram

# Decision metrics
decision_counter = Counter(
    "revenue_decision_total",
    "Total underwriting decisions made",
    ["status"],  # APPROVED | MANUAL_REVIEW | REJECTED
)

credit_offer_bucket_counter = Counter(
    "revenue_credit_offer_bucket",
    "Credit offers issued by approved amount bucket",
    ["bucket"],  # $0, $0-$60k, $60k-$100k, $100k+
)

# Data source metrics
source_fetch_counter = Counter(
    "source_fetch_total",
    "Data source fetch attempts by outcome",
    ["source", "outcome"],  # outcome: available | unavailable | timeout | error
)

source_latency_histogram = Histogram(
    "source_fetch_latency_seconds",
    "Data source response time",
    ["source"],
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_decision(status: str, approved_amount: int) -> None:
    """Record decision metrics for monitoring approval rates and offer distribution"""
    decision_counter.labels(status=status).inc()

    if approved_amount == 0:
        bucket = "$0"
    elif approved_amount <= 60_000:
        bucket = "$0-$60k"
    elif approved_amount <= 100_000:
        bucket = "$60k-$100k"
    else:
        bucket = "$100k+"

    credit_offer_bucket_counter.labels(bucket=bucket).inc()


def record_source_fetch(source: str, outcome: str, duration_seconds: float) -> None:
    source_fetch_counter.labels(source=source, outcome=outcome).inc()
    source_latency_histogram.labels(source=source).observe(duration_seconds)
