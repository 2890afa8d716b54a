# src/manuscript_kit/observability/names.py

"""Standard metric names for manuscript-kit observability.

Use these constants instead of hardcoded strings so that dashboards and
tests agree on spelling.

Note: All duration metrics are in milliseconds by convention.
"""

# ============================================================================
# Manifest Metrics
# ============================================================================

# Duration
MANIFEST_PARSE_DURATION = "manifest_parse_duration"

# Gauges (per parse)
MANIFEST_ENTRIES = "manifest_entries"
MANIFEST_DISABLED_ENTRIES = "manifest_disabled_entries"


# ============================================================================
# Fragment Store Metrics
# ============================================================================

# Duration
FRAGMENT_READ_DURATION = "fragment_read_duration"

# Counters
FRAGMENT_READS_TOTAL = "fragment_reads_total"
FRAGMENT_ERRORS_TOTAL = "fragment_errors_total"


# ============================================================================
# Assembly Metrics
# ============================================================================

# Duration
ASSEMBLY_DURATION = "assembly_duration"

# Counters
ASSEMBLY_RUNS_TOTAL = "assembly_runs_total"
ASSEMBLY_ERRORS_TOTAL = "assembly_errors_total"
ASSEMBLY_DUPLICATES_TOTAL = "assembly_duplicates_total"

# Gauges
ASSEMBLY_FRAGMENTS = "assembly_fragments"
ASSEMBLY_OUTPUT_CHARS = "assembly_output_chars"
