"""
Commit graph traversal.

Visits every commit reachable from a tip commit in depth-first, parent-order
and computes the rubric facts in a single pass: the set of authors, whether
a team commit sequence exists, the merge authors and the first revert
reference.
"""

import time
from typing import Any, Callable

from .history import parent_of
from .models import TraversalResult
from .revert import parse_revert_reference
from .sequence import CommitSequence


class TraversalContext:
    """
    Mutable state of one traversal.

    A context belongs to a single `traverse` call and must not be shared
    between traversals.
    """

    def __init__(self, tip: Any, team_size: int) -> None:
        self.team_size = team_size
        self.authors: set[str] = set()
        self.merge_authors: set[str] = set()
        self.sequence = CommitSequence(tip)
        self.revert_reference: str | None = None
        self.visited = 0

    def visit(self, commit: Any) -> bool:
        """
        Account for one visited commit.

        Returns:
            True if the sequence detector reported a merge boundary.
        """
        self.visited += 1
        self.authors.add(commit.author.email)
        boundary = self.sequence.handle(commit, self.team_size)

        if len(commit.parents) > 1:
            self.merge_authors.add(commit.author.email)

        if self.revert_reference is None:
            self.revert_reference = parse_revert_reference(commit.message)

        return boundary

    def walk(self, tip: Any) -> None:
        """
        Depth-first walk over all parent edges starting at `tip`.

        Commits reachable along several paths are visited once per path.
        An explicit stack replaces recursion; each entry carries whether the
        sequence window must be restarted at that commit, so a merge's second
        parent gets its fresh window only after the first parent's whole
        ancestry has been walked.
        """
        stack: list[tuple[Any, bool]] = [(tip, False)]
        while stack:
            commit, restart = stack.pop()
            if restart:
                self.sequence.reset(commit)
            boundary = self.visit(commit)

            parents = [parent_of(commit, i) for i in range(len(commit.parents))]
            stack.extend((parent, boundary) for parent in reversed(parents))

    def result(self, verify_revert: Callable[[str], bool] | None = None) -> TraversalResult:
        """Package the accumulated state."""
        revert_found = self.revert_reference is not None
        if revert_found and verify_revert is not None:
            revert_found = verify_revert(self.revert_reference)

        return TraversalResult(
            authors=sorted(self.authors),
            sequence_found=self.sequence.finished,
            merge_authors=sorted(self.merge_authors),
            revert_found=revert_found,
            revert_reference=self.revert_reference,
        )


def traverse(
    tip: Any,
    team_size: int,
    verify_revert: Callable[[str], bool] | None = None,
    verbose: bool = False,
) -> TraversalResult:
    """
    Walk the history reachable from `tip` and compute the rubric facts.

    Args:
        tip: Commit to start from (GitPython Commit or compatible object).
        team_size: Required number of team members, must be positive.
        verify_revert: Optional check that a captured revert reference names
            a real commit. Without it any syntactically valid reference counts.
        verbose: Print traversal statistics.

    Returns:
        TraversalResult with authors, sequence flag, merge authors and revert flag.

    Raises:
        ValueError: If team_size is not positive.
        UnresolvableCommitError: If a parent commit cannot be loaded.
    """
    if team_size <= 0:
        raise ValueError(f"Invalid team size: {team_size}")

    context = TraversalContext(tip, team_size)
    start = time.perf_counter()
    context.walk(tip)
    if verbose:
        elapsed = time.perf_counter() - start
        print(f"  Traversal completed in {elapsed:.3f}s ({context.visited} commits visited)")

    return context.result(verify_revert)
