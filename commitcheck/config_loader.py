"""
Configuration loader for the Commit Check system.

Handles parsing and validation of YAML configuration files.
"""

from pathlib import Path

import yaml
from pydantic import BaseModel, Field

from .config import (
    DEFAULT_DEADLINE,
    DEFAULT_REPO_URL,
    DEFAULT_TEAM_SIZE,
    FMT_COMMAND,
    SERVER_COMMAND,
    SERVER_PATH,
    SERVER_PORT,
)
from .models import Submission


class ServerConfig(BaseModel):
    """
    Settings of the HTTP server check.
    """
    enabled: bool = Field(True, description="Run the server check")
    command: list[str] = Field(default_factory=lambda: list(SERVER_COMMAND), description="Command starting the server")
    port: int = Field(SERVER_PORT, gt=0, description="Port the server listens on")
    path: str = Field(SERVER_PATH, description="Path of the time endpoint")


class FmtConfig(BaseModel):
    """
    Settings of the formatter check.
    """
    enabled: bool = Field(True, description="Run the formatter check")
    command: list[str] = Field(default_factory=lambda: list(FMT_COMMAND), description="Formatter command")


class CheckerConfig(BaseModel):
    """
    Configuration model for the checker.
    """
    team_size: int = Field(DEFAULT_TEAM_SIZE, gt=0, description="Expected number of committers")
    deadline: str = Field(DEFAULT_DEADLINE, description="Task deadline (YYYY-MM-DD)")
    repo_url: str = Field(DEFAULT_REPO_URL, description="Repository to check in single mode")
    commit: str | None = Field(None, description="Tip commit to check in single mode")
    local_path: Path | None = Field(None, description="Existing checkout used instead of cloning")
    submissions: list[Submission] = Field(default_factory=list, description="Repositories to check in batch mode")
    results_dir: Path | None = Field(None, description="Path to save aggregated results")
    verify_revert: bool = Field(True, description="Require the reverted commit to exist")

    server: ServerConfig = Field(default_factory=ServerConfig)
    fmt: FmtConfig = Field(default_factory=FmtConfig)
    verbose: bool = Field(False, description="Enable verbose output")


def load_config(config_path: Path) -> CheckerConfig:
    """
    Load configuration from a YAML file.

    Args:
        config_path: Path to the YAML configuration file.

    Returns:
        CheckerConfig object with loaded values.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        yaml.YAMLError: If config file is invalid YAML.
        ValidationError: If config data is invalid.
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        config_data = yaml.safe_load(f)

    if not config_data:
        return CheckerConfig()

    # Resolve relative paths relative to the config file location
    config_dir = config_path.parent
    for path_field in ["local_path", "results_dir"]:
        if config_data.get(path_field):
            path = Path(config_data[path_field])
            if not path.is_absolute():
                config_data[path_field] = config_dir / path

    for submission in config_data.get("submissions") or []:
        if submission.get("local_path"):
            path = Path(submission["local_path"])
            if not path.is_absolute():
                submission["local_path"] = str(config_dir / path)

    return CheckerConfig(**config_data)
