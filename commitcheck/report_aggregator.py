"""
Report aggregator for collecting and exporting all submission reports.

Saves reports to a results folder with JSON and CSV summaries.
"""

import csv
import json
from datetime import datetime
from pathlib import Path

from pydantic import ValidationError

from .config import (
    DEFAULT_RESULTS_DIR,
    RESULTS_CSV_FILENAME,
    RESULTS_SUMMARY_FILENAME,
)
from .models import CheckReport


class ReportAggregator:
    """
    Aggregates reports from multiple submissions and exports them.
    """

    def __init__(self, output_dir: Path | None = None) -> None:
        """
        Initialize the report aggregator.

        Args:
            output_dir: Directory to save results. Defaults to ./results/
        """
        self.output_dir = output_dir or DEFAULT_RESULTS_DIR
        self.reports: list[CheckReport] = []
        self.failures: dict[str, str] = {}
        self.timestamp = datetime.now().isoformat()

    def add_report(self, report: CheckReport) -> None:
        """
        Add a submission report.

        Args:
            report: CheckReport to add.
        """
        self.reports.append(report)

    def add_failure(self, name: str, error: str) -> None:
        """Record a submission whose check aborted."""
        self.failures[name] = error

    def save_all(self) -> dict[str, Path]:
        """
        Save all reports to the output directory.

        Creates:
        - Individual JSON files per submission
        - Summary JSON with all reports and failures
        - Summary CSV with one row per submission

        Returns:
            Dictionary of output file paths.
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)

        output_files: dict[str, Path] = {}

        self.reports.sort(key=lambda r: r.name)

        for report in self.reports:
            individual_path = self.output_dir / f"{report.name}.json"
            with open(individual_path, "w", encoding="utf-8") as f:
                f.write(report.model_dump_json(indent=2))
            output_files[report.name] = individual_path

        summary_path = self.output_dir / RESULTS_SUMMARY_FILENAME
        summary_data = {
            "timestamp": self.timestamp,
            "total_submissions": len(self.reports) + len(self.failures),
            "statistics": self._calculate_statistics(),
            "reports": [report.model_dump() for report in self.reports],
            "failures": self.failures,
        }
        with open(summary_path, "w", encoding="utf-8") as f:
            json.dump(summary_data, f, indent=2)
        output_files["summary_json"] = summary_path

        csv_path = self.output_dir / RESULTS_CSV_FILENAME
        self._save_csv(csv_path)
        output_files["summary_csv"] = csv_path

        return output_files

    def _calculate_statistics(self) -> dict:
        """
        Calculate summary statistics for all reports.

        Returns:
            Dictionary with statistics.
        """
        if not self.reports:
            return {}

        finals = [r.final_points for r in self.reports]
        task_passes: dict[str, int] = {}
        for report in self.reports:
            for task in report.tasks:
                task_passes[task.task] = task_passes.get(task.task, 0) + int(task.passed)

        return {
            "average_points": sum(finals) / len(finals),
            "highest_points": max(finals),
            "lowest_points": min(finals),
            "late_count": sum(1 for r in self.reports if r.penalty > 0),
            "task_passed_count": task_passes,
        }

    def _save_csv(self, csv_path: Path) -> None:
        """
        Save reports as CSV file.

        Args:
            csv_path: Path to save CSV file.
        """
        if not self.reports:
            return

        task_ids = [t.task for t in self.reports[0].tasks]

        header = ["name", "repo_url", "commit", "points", "penalty", "final_points"]
        header.extend(f"task_{task_id}" for task_id in task_ids)

        with open(csv_path, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(header)

            for report in self.reports:
                row = [
                    report.name,
                    report.repo_url,
                    report.commit,
                    report.points,
                    report.penalty,
                    report.final_points,
                ]
                for task in report.tasks:
                    row.append("SKIPPED" if task.skipped else ("OK" if task.passed else "PROBLEM"))
                writer.writerow(row)


def load_reports_from_dir(results_dir: Path) -> list[CheckReport]:
    """
    Load all reports from a results directory.

    Args:
        results_dir: Path to the results directory.

    Returns:
        List of CheckReport objects sorted by name.
    """
    reports: list[CheckReport] = []

    summary_path = results_dir / RESULTS_SUMMARY_FILENAME
    if summary_path.exists():
        with open(summary_path, "r", encoding="utf-8") as f:
            data = json.load(f)
            for report_data in data.get("reports", []):
                reports.append(CheckReport(**report_data))
    else:
        for json_file in results_dir.glob("*.json"):
            try:
                with open(json_file, "r", encoding="utf-8") as f:
                    reports.append(CheckReport(**json.load(f)))
            except (json.JSONDecodeError, TypeError, ValidationError):
                # Not a report written by this tool
                continue

    reports.sort(key=lambda r: r.name)
    return reports
