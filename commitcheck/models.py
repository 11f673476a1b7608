"""
Pydantic models for the Commit Check system.

Defines the facts computed by the history traversal and the rubric
report built from them.
"""

from pydantic import BaseModel, Field, model_validator


class TraversalResult(BaseModel):
    """
    The four rubric facts computed by one walk of the commit graph.

    Attributes:
        authors: Every author email reachable from the tip, sorted.
        sequence_found: Whether a finished non-chronological team window exists.
        merge_authors: Author emails of merge commits, sorted.
        revert_found: Whether a revert reference was captured (and resolved, if checked).
        revert_reference: The captured revert reference, if any.
    """

    authors: list[str] = Field(default_factory=list, description="All commit author emails")
    sequence_found: bool = Field(default=False, description="Whether the team sequence was found")
    merge_authors: list[str] = Field(default_factory=list, description="Merge commit author emails")
    revert_found: bool = Field(default=False, description="Whether a correct revert commit exists")
    revert_reference: str | None = Field(default=None, description="Hex id named by the first revert message")


class TaskCheck(BaseModel):
    """
    Verdict for a single rubric task.

    Attributes:
        task: Task identifier as printed ("1", "2", ..., "FMT").
        name: Short task name.
        passed: Whether the task condition holds.
        skipped: Whether the check was not run.
        message: Problem description when the task failed.
        notes: Informational notes that do not affect the verdict.
    """

    task: str = Field(..., description="Task identifier")
    name: str = Field(..., description="Short task name")
    passed: bool = Field(default=False, description="Whether the task passed")
    skipped: bool = Field(default=False, description="Whether the check was skipped")
    message: str = Field(default="", description="Problem description")
    notes: list[str] = Field(default_factory=list, description="Informational notes")


class CheckReport(BaseModel):
    """
    Complete rubric report for one submission.

    Attributes:
        name: Submission identifier.
        repo_url: Repository URL or local path that was checked.
        commit: Tip commit hash.
        team_size: Required team size.
        traversal: Facts from the history traversal.
        tasks: Per-task verdicts.
        points: Points earned before penalty.
        penalty: Late-submission penalty points.
        final_points: Points after penalty.
    """

    name: str = Field(..., description="Submission identifier")
    repo_url: str = Field(default="", description="Checked repository")
    commit: str = Field(..., description="Tip commit hash")
    team_size: int = Field(..., gt=0, description="Required team size")
    traversal: TraversalResult = Field(..., description="History traversal facts")
    tasks: list[TaskCheck] = Field(default_factory=list, description="Per-task verdicts")
    points: int = Field(default=0, ge=0, description="Points before penalty")
    penalty: int = Field(default=0, ge=0, description="Late penalty points")
    final_points: int = Field(default=0, description="Points after penalty")


class Submission(BaseModel):
    """
    A team repository to check in batch mode.

    Attributes:
        name: Submission identifier (team name).
        repo_url: Remote repository to clone.
        local_path: Existing local checkout, used instead of cloning.
        commit: Tip commit to check.
    """

    name: str = Field(..., description="Submission identifier")
    repo_url: str | None = Field(default=None, description="Remote repository URL")
    local_path: str | None = Field(default=None, description="Local checkout path")
    commit: str = Field(..., description="Tip commit hash")

    @model_validator(mode="after")
    def check_location(self) -> "Submission":
        if not self.repo_url and not self.local_path:
            raise ValueError(f"Submission {self.name} needs repo_url or local_path")
        return self
