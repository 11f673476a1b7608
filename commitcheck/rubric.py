"""
Rubric evaluation of the traversal facts.

Turns the facts computed by the history traversal (plus the server and
formatter checks) into per-task verdicts and points.
"""

from .models import CheckReport, TaskCheck, TraversalResult


def authors_task(traversal: TraversalResult, team_size: int) -> TaskCheck:
    """Task 1: at least `team_size` distinct commit authors."""
    task = TaskCheck(task="1", name="authors")
    if len(traversal.authors) < team_size:
        task.message = f"Bad number of authors: {traversal.authors}"
        return task
    if len(traversal.authors) != team_size:
        task.notes.append(f"Too many authors: {traversal.authors}")
    task.passed = True
    return task


def server_task(error: str | None, skipped: bool = False) -> TaskCheck:
    """Task 2: the submission's server answers on its time endpoint."""
    task = TaskCheck(task="2", name="server", skipped=skipped)
    if skipped:
        task.message = "Server check skipped"
    elif error is not None:
        task.message = f"Server check failed: {error}"
    else:
        task.passed = True
    return task


def sequence_task(traversal: TraversalResult) -> TaskCheck:
    """Task 3: a non-chronological run of non-merge commits by the whole team."""
    task = TaskCheck(task="3", name="sequence", passed=traversal.sequence_found)
    if not task.passed:
        task.message = (
            "No sequence of non-merge commits by all team members "
            "(non-chronological) was found"
        )
    return task


def merges_task(traversal: TraversalResult, team_size: int) -> TaskCheck:
    """Task 4: merge commits made by at least `team_size` people."""
    task = TaskCheck(task="4", name="merges")
    if len(traversal.merge_authors) < team_size:
        task.message = f"No sufficient merge authors: {traversal.merge_authors}"
        return task
    if len(traversal.merge_authors) != team_size:
        task.notes.append(f"Too many merge authors: {traversal.merge_authors}")
    task.passed = True
    return task


def revert_task(traversal: TraversalResult) -> TaskCheck:
    """Task 5: a revert commit referencing an existing commit."""
    task = TaskCheck(task="5", name="revert", passed=traversal.revert_found)
    if not task.passed:
        if traversal.revert_reference:
            task.message = f"Reverted commit {traversal.revert_reference} does not exist"
        else:
            task.message = "No correct revert commits"
    return task


def fmt_task(passed: bool | None) -> TaskCheck:
    """Formatting task; None means the check was skipped."""
    task = TaskCheck(task="FMT", name="fmt", skipped=passed is None, passed=bool(passed))
    if passed is None:
        task.message = "Formatter check skipped"
    elif not passed:
        task.message = "Code is not formatted"
    return task


def evaluate(
    name: str,
    commit: str,
    team_size: int,
    traversal: TraversalResult,
    server_error: str | None = None,
    server_skipped: bool = False,
    fmt_passed: bool | None = None,
    penalty: int = 0,
    repo_url: str = "",
) -> CheckReport:
    """
    Build the rubric report for one submission.

    Args:
        name: Submission identifier.
        commit: Tip commit hash.
        team_size: Required team size.
        traversal: Facts from the history traversal.
        server_error: Problem reported by the server check, None if it passed.
        server_skipped: Whether the server check was not run.
        fmt_passed: Formatter check outcome, None if it was not run.
        penalty: Late penalty points.
        repo_url: Checked repository.

    Returns:
        CheckReport with one point per passed task.
    """
    tasks = [
        authors_task(traversal, team_size),
        server_task(server_error, skipped=server_skipped),
        sequence_task(traversal),
        merges_task(traversal, team_size),
        revert_task(traversal),
        fmt_task(fmt_passed),
    ]
    points = sum(1 for t in tasks if t.passed)

    return CheckReport(
        name=name,
        repo_url=repo_url,
        commit=commit,
        team_size=team_size,
        traversal=traversal,
        tasks=tasks,
        points=points,
        penalty=penalty,
        final_points=points - penalty,
    )


def print_report(report: CheckReport) -> None:
    """
    Print the task verdicts and points to the console.

    Args:
        report: CheckReport to summarize.
    """
    print(f"\n  {'='*50}")
    print(f"  Submission: {report.name}")
    print(f"  Commit: {report.commit}")
    print(f"  {'='*50}")

    for task in report.tasks:
        for note in task.notes:
            print(f"  NOTE => {note}")
        if task.passed:
            print(f"  TASK {task.task}: OK")
        elif task.skipped:
            print(f"  TASK {task.task}: SKIPPED")
        else:
            print(f"  TASK {task.task}: PROBLEM => {task.message}")

    print(f"  Total points: {report.points}")
    print(f"  Penalty points: {report.penalty}")
    print(f"  Final points: {report.final_points}")
    print()
