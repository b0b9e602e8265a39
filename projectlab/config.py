from __future__ import annotations

# Engine defaults. The simulation count is always passed explicitly to the
# engine; these values only feed the CLI and the summary helpers.

DEFAULT_RUNS = 1_000_000

DEFAULT_PERCENTILES = (10, 50, 80, 90, 95, 99)

# Number of most frequent critical paths reported in summaries.
TOP_CRITICAL_PATHS = 10

# Models with at least this many tasks sample their batches on a thread pool.
PARALLEL_TASK_THRESHOLD = 8

# Grid size for the table-based inverse-CDF oracle.
ORACLE_TABLE_RESOLUTION = 10_001
