"""
Configuration constants for the Commit Check system.
"""

from pathlib import Path


# Rubric defaults
DEFAULT_TEAM_SIZE: int = 3
DEFAULT_DEADLINE: str = "2025-02-26"
DEFAULT_REPO_URL: str = "https://github.com/roman-mazur/oak"
DEADLINE_FORMAT: str = "%Y-%m-%d"
PENALTY_PERIOD_DAYS: int = 7

# Revert messages: "Revert ..." followed by the hex id of the reverted commit
# e.g. "This reverts commit 397747d22bd12cce4bc6bd0aa979a4f8eed3d29a."
REVERT_PATTERN: str = r"(?i:revert).*?\s+([a-f0-9]{7,40})\b"

# Server check configuration
SERVER_COMMAND: list[str] = ["go", "run", "."]
SERVER_PORT: int = 8795
SERVER_PATH: str = "/time"
SERVER_RETRY_DELAY_SECONDS: float = 0.5
SERVER_MAX_RETRIES: int = 2
SERVER_TIME_TOLERANCE_HOURS: int = 1

# Formatter check configuration
FMT_COMMAND: list[str] = ["gofmt", "-l", "."]

# Output files
DEFAULT_RESULTS_DIR: Path = Path("results")
RESULTS_SUMMARY_FILENAME: str = "results_summary.json"
RESULTS_CSV_FILENAME: str = "results_summary.csv"

# Temporary checkout directories
CLONE_DIR_PREFIX: str = "commits-check"
