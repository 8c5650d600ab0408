"""Prometheus metrics for monitoring profile completion and the funding gate"""

from prometheus_client import Counter, Histogram

# Completion metrics
completion_recalculation_counter = Counter(
    "loanready_completion_recalculations_total",
    "Profile completion recalculations",
    ["trigger"],  # business_created | business_updated | director_* | document_* | funding_gate
)

completion_percent_histogram = Histogram(
    "loanready_completion_percent",
    "Distribution of computed completion percentages",
    buckets=[20, 50, 69, 89, 100],  # status message bands
)

completion_failure_counter = Counter(
    "loanready_completion_failures_total",
    "Recalculations that failed after a committed mutation",
)

# Funding gate
funding_gate_counter = Counter(
    "loanready_funding_gate_total",
    "Funding utility creation attempts by gate outcome",
    ["outcome"],  # allowed | blocked
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_completion(trigger: str, percent: int) -> None:
    """Record a completion recompute and the resulting percent"""
    completion_recalculation_counter.labels(trigger=trigger).inc()
    completion_percent_histogram.observe(percent)


def record_funding_gate(allowed: bool) -> None:
    funding_gate_counter.labels(outcome="allowed" if allowed else "blocked").inc()
