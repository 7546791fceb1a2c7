"""
Prometheus metrics for the license key service.

Custom metrics for business logic and performance monitoring.
"""
from prometheus_client import Counter, Gauge, Histogram

# HTTP metrics
http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.0, 5.0, 10.0],
)

# Credential lifecycle metrics
credentials_issued_total = Counter(
    "credentials_issued_total",
    "Total license keys issued",
)

credential_key_collisions_total = Counter(
    "credential_key_collisions_total",
    "Generated key strings rejected because they already existed",
)

credentials_revoked_total = Counter(
    "credentials_revoked_total",
    "Total license keys revoked",
)

credential_domains_updated_total = Counter(
    "credential_domains_updated_total",
    "Total domain whitelist replacements",
)

# Validation metrics
validations_total = Counter(
    "validations_total",
    "Total license key validations",
    ["result", "error_code"],
)

validation_duration_seconds = Histogram(
    "validation_duration_seconds",
    "Validation decision latency in seconds",
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0],
)

# Audit trail metrics
audit_persist_failures_total = Counter(
    "audit_persist_failures_total",
    "Validation events that could not be written on the request path",
)

audit_events_dropped_total = Counter(
    "audit_events_dropped_total",
    "Validation events that could not be handed to the retry task either",
)

# Security log streaming metrics
security_log_sessions = Gauge(
    "security_log_sessions",
    "Open security log monitoring sessions",
)

security_log_events_dropped_total = Counter(
    "security_log_events_dropped_total",
    "Events discarded from full monitoring session buffers",
)

# Cache metrics
cache_hits_total = Counter(
    "cache_hits_total",
    "Total cache hits",
    ["cache"],
)

cache_misses_total = Counter(
    "cache_misses_total",
    "Total cache misses",
    ["cache"],
)

# Error metrics
errors_total = Counter(
    "errors_total",
    "Total errors",
    ["error_type", "endpoint"],
)
