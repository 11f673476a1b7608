"""
Commit Check: Automated rubric checks over a team project's git history

Usage:
  main.py [options] [<repo>]
  main.py --show-results [--results-dir=PATH] [--config=PATH]
  main.py (-h | --help)

Options:
  --config=PATH       Path to YAML configuration file.
  --team-size=N       Expected number of the committers.
  --commit=HASH       The tip commit to use for checking (hash in hex).
  --deadline=DATE     Task deadline (e.g. 2025-02-26).
  --local=PATH        Check an existing checkout instead of cloning <repo>.
  --results-dir=PATH  Directory to save the reports to.
  --skip-server       Skip the HTTP server check.
  --skip-fmt          Skip the formatter check.
  --show-results      Print the reports saved by a previous run.
  -v --verbose        Enable verbose output.
  -h --help           Show this screen.
"""

import sys
import tempfile
from functools import partial
from pathlib import Path

import yaml
from docopt import docopt
from pydantic import ValidationError

from commitcheck.config import CLONE_DIR_PREFIX, DEFAULT_RESULTS_DIR
from commitcheck.config_loader import CheckerConfig, load_config
from commitcheck.deadline import deadline_time, penalty_points
from commitcheck.errors import CommitCheckError
from commitcheck.fmt_check import check_fmt
from commitcheck.history import clone, has_commit, open_repo, resolve_commit
from commitcheck.models import CheckReport, Submission
from commitcheck.report_aggregator import ReportAggregator, load_reports_from_dir
from commitcheck.rubric import evaluate, print_report
from commitcheck.server_check import check_server
from commitcheck.traversal import traverse


def submission_name(repo_url: str | None, local_path: str | None) -> str:
    """
    Derive a submission identifier from its repository location.

    Args:
        repo_url: Remote repository URL.
        local_path: Local checkout path.

    Returns:
        Last path component without a trailing ".git".
    """
    location = (local_path or repo_url or "submission").rstrip("/")
    name = location.rsplit("/", 1)[-1]
    if name.endswith(".git"):
        name = name[: -len(".git")]
    return name or "submission"


def check_checkout(submission: Submission, checkout_dir: Path, config: CheckerConfig) -> CheckReport:
    """
    Run all rubric checks on a checked-out repository.

    Args:
        submission: The submission being checked.
        checkout_dir: Working tree of the submission.
        config: Checker configuration.

    Returns:
        CheckReport for the submission.

    Raises:
        CommitCheckError: If the repository or its history cannot be read.
    """
    with open_repo(checkout_dir) as repo:
        tip = resolve_commit(repo, submission.commit)

        print(f"  Traversing history from {tip.hexsha}...")
        verify = partial(has_commit, repo) if config.verify_revert else None
        traversal = traverse(tip, config.team_size, verify_revert=verify, verbose=config.verbose)
        commit_time = tip.committed_datetime
        commit_hexsha = tip.hexsha

    if config.verbose:
        print(f"  Authors: {traversal.authors}")
        print(f"  Merge authors: {traversal.merge_authors}")
        print(f"  Revert reference: {traversal.revert_reference}")

    server_error = None
    if config.server.enabled:
        print("  Checking server...")
        server_error = check_server(
            checkout_dir,
            command=config.server.command,
            port=config.server.port,
            path=config.server.path,
        )

    fmt_passed = None
    if config.fmt.enabled:
        print("  Checking formatting...")
        fmt_passed = check_fmt(checkout_dir, command=config.fmt.command, verbose=config.verbose)

    penalty = penalty_points(commit_time, deadline_time(config.deadline))

    return evaluate(
        name=submission.name,
        commit=commit_hexsha,
        team_size=config.team_size,
        traversal=traversal,
        server_error=server_error,
        server_skipped=not config.server.enabled,
        fmt_passed=fmt_passed,
        penalty=penalty,
        repo_url=submission.repo_url or submission.local_path or "",
    )


def check_submission(submission: Submission, config: CheckerConfig) -> CheckReport:
    """
    Clone (or open) a submission and check it.

    Args:
        submission: The submission to check.
        config: Checker configuration.

    Returns:
        CheckReport for the submission.
    """
    if submission.local_path:
        return check_checkout(submission, Path(submission.local_path), config)

    with tempfile.TemporaryDirectory(prefix=CLONE_DIR_PREFIX, ignore_cleanup_errors=True) as tmp:
        print(f"  Cloning {submission.repo_url}")
        clone(submission.repo_url, Path(tmp)).close()
        return check_checkout(submission, Path(tmp), config)


def run_checks(submissions: list[Submission], config: CheckerConfig) -> ReportAggregator:
    """
    Check every submission and save the results.

    A submission whose check aborts is recorded as a failure and the
    remaining submissions are still checked.

    Args:
        submissions: Submissions to check.
        config: Checker configuration.

    Returns:
        ReportAggregator holding all reports and failures.
    """
    aggregator = ReportAggregator(output_dir=config.results_dir or DEFAULT_RESULTS_DIR)

    for i, submission in enumerate(submissions, 1):
        print(f"\n[{i}/{len(submissions)}] Checking {submission.name}...")
        try:
            report = check_submission(submission, config)
        except CommitCheckError as e:
            print(f"  Error: {e}")
            aggregator.add_failure(submission.name, str(e))
            continue
        print_report(report)
        aggregator.add_report(report)

    print("\nSaving results...")
    output_files = aggregator.save_all()
    print(f"  Summary JSON: {output_files.get('summary_json')}")
    print(f"  Summary CSV:  {output_files.get('summary_csv')}")

    print("\n" + "=" * 60)
    print("CHECK COMPLETE")
    print("=" * 60)
    print(f"Submissions checked: {len(aggregator.reports)}")
    if aggregator.failures:
        print(f"Submissions failed: {len(aggregator.failures)}")

    return aggregator


def apply_arguments(config: CheckerConfig, arguments: dict) -> CheckerConfig:
    """
    Override configuration values with command line options.

    Raises:
        ValidationError: If an option value is invalid.
    """
    overrides = config.model_dump()
    if arguments["--team-size"] is not None:
        overrides["team_size"] = arguments["--team-size"]
    if arguments["--commit"] is not None:
        overrides["commit"] = arguments["--commit"]
    if arguments["--deadline"] is not None:
        overrides["deadline"] = arguments["--deadline"]
    if arguments["--local"] is not None:
        overrides["local_path"] = arguments["--local"]
    if arguments["--results-dir"] is not None:
        overrides["results_dir"] = arguments["--results-dir"]
    if arguments["<repo>"]:
        overrides["repo_url"] = arguments["<repo>"]
    if arguments["--skip-server"]:
        overrides["server"]["enabled"] = False
    if arguments["--skip-fmt"]:
        overrides["fmt"]["enabled"] = False
    if arguments["--verbose"]:
        overrides["verbose"] = True
    return CheckerConfig(**overrides)


def build_submissions(config: CheckerConfig) -> list[Submission]:
    """
    Submissions to check: the configured batch, or the single repository.

    Raises:
        ValueError: If no tip commit is known for the single repository.
    """
    if config.submissions and not config.commit:
        return config.submissions

    if not config.commit:
        raise ValueError("Commit is not defined")

    local_path = str(config.local_path) if config.local_path else None
    return [
        Submission(
            name=submission_name(config.repo_url, local_path),
            repo_url=None if local_path else config.repo_url,
            local_path=local_path,
            commit=config.commit,
        )
    ]


def show_results(results_dir: Path) -> int:
    """Print the reports saved in `results_dir`."""
    if not results_dir.exists():
        print(f"Error: Results directory not found: {results_dir}")
        return 1
    reports = load_reports_from_dir(results_dir)
    if not reports:
        print("No results found.")
        return 1
    for report in reports:
        print_report(report)
    return 0


def main() -> int:
    """
    Main CLI entrypoint.

    Returns:
        Exit code (0 for success, 1 for error).
    """
    arguments = docopt(__doc__)

    try:
        if arguments["--config"]:
            config_path = Path(arguments["--config"])
            config = load_config(config_path)
            print(f"Loaded configuration from {config_path}")
        else:
            config = CheckerConfig()
        config = apply_arguments(config, arguments)
    except (FileNotFoundError, ValidationError, yaml.YAMLError) as e:
        print(f"Error loading config: {e}")
        return 1

    if arguments["--show-results"]:
        return show_results(config.results_dir or DEFAULT_RESULTS_DIR)

    try:
        deadline_time(config.deadline)
        submissions = build_submissions(config)
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    try:
        aggregator = run_checks(submissions, config)
    except KeyboardInterrupt:
        print("\nCheck interrupted by user.")
        return 1

    return 1 if aggregator.failures else 0


if __name__ == "__main__":
    sys.exit(main())
