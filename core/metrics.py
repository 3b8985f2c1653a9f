"""
Prometheus metrics for the licensing library.

Counters live in the default registry; the embedding application decides
whether and how to expose them.
"""

from prometheus_client import Counter, Histogram

# Key metrics
license_keys_generated_total = Counter(
    "license_keys_generated_total",
    "Total signing key pairs generated",
)

# License metrics
licenses_issued_total = Counter(
    "licenses_issued_total",
    "Total licenses signed",
    ["product"],
)

license_validations_total = Counter(
    "license_validations_total",
    "Total license validations by outcome",
    ["product", "outcome"],
)

license_validation_duration_seconds = Histogram(
    "license_validation_duration_seconds",
    "License validation duration in seconds",
    buckets=[0.0005, 0.001, 0.005, 0.01, 0.05, 0.1],
)

# Error metrics
errors_total = Counter(
    "errors_total",
    "Total licensing errors",
    ["error_type", "operation"],
)
