"""
Formatter check for the submitted code.
"""

import subprocess
from pathlib import Path

from .config import FMT_COMMAND


def check_fmt(checkout_dir: Path, command: list[str] | None = None, verbose: bool = False) -> bool:
    """
    Verify the code in `checkout_dir` is already formatted.

    The formatter is expected to list unformatted files (like `gofmt -l`),
    so any output means a problem.

    Args:
        checkout_dir: Repository working tree.
        command: Formatter command line. Defaults to FMT_COMMAND.
        verbose: Print the command being run.

    Returns:
        True if the formatter exits cleanly with no output.
    """
    cmd = command or FMT_COMMAND
    if verbose:
        print(f"  Executing: {' '.join(cmd)}")

    try:
        process = subprocess.run(
            cmd,
            cwd=str(checkout_dir),
            capture_output=True,
            text=True,
            check=False,
        )
    except FileNotFoundError:
        print(f"  Formatter not found: {cmd[0]}")
        return False

    output = process.stdout + process.stderr
    passed = process.returncode == 0 and not output
    if not passed:
        print(output)
    return passed
