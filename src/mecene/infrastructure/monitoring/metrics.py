"""
Prometheus metrics collection.
"""

from prometheus_client import Counter, Gauge, Histogram

# ============================================================
# Store Metrics
# ============================================================

store_requests_total = Counter(
    "mecene_store_requests_total",
    "Total store requests",
    ["service", "operation", "status"],
)

store_request_duration_seconds = Histogram(
    "mecene_store_request_duration_seconds",
    "Store request duration in seconds",
    ["service", "operation"],
    buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

live_queries_active = Gauge(
    "mecene_live_queries_active",
    "Live queries currently open",
    ["service"],
)

# ============================================================
# Blockchain Metrics
# ============================================================

chain_transactions_total = Counter(
    "mecene_chain_transactions_total",
    "Campaign transactions by outcome",
    ["operation", "outcome"],
)

# ============================================================
# Error Reporting Metrics
# ============================================================

errors_reported_total = Counter(
    "mecene_errors_reported_total",
    "Errors surfaced to users",
    ["severity"],
)
