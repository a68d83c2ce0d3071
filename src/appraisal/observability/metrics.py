"""Prometheus metrics for the appraisal service.

Defines operational counters for intake, appraisal and operator access.
"""

from prometheus_client import Counter

# Intake metrics
submissions_total = Counter(
    "appraisal_submissions_total",
    "Submission intake attempts by outcome",
    ["outcome"]  # created|invalid_submission|invalid_upload|storage_exhausted
)

upload_rejections_total = Counter(
    "appraisal_upload_rejections_total",
    "Rejected uploads by reason",
    ["reason"]  # MISSING_FILE|UNSUPPORTED_TYPE|EMPTY_FILE|FILE_TOO_LARGE
)

token_collisions_total = Counter(
    "appraisal_token_collisions_total",
    "Token collisions detected on insert (each one triggers a retry)"
)

# Operator metrics
appraisals_total = Counter(
    "appraisal_appraisals_recorded_total",
    "Appraisal writes that updated a submission"
)

operator_logins_total = Counter(
    "appraisal_operator_logins_total",
    "Operator login attempts by result",
    ["result"]  # success|failure
)

# Maintenance metrics
orphaned_artifacts_removed_total = Counter(
    "appraisal_orphaned_artifacts_removed_total",
    "Unreferenced artifacts deleted by the orphan sweep"
)
