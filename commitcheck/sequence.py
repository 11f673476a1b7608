"""
Detector for a run of non-merge commits authored by the whole team.

The walk goes from children to parents, so author dates are expected to
decrease. A window that sees a parent dated no earlier than the commit
before it is "non-chronological"; once such a window has exactly
`team_size` distinct authors it is finished and frozen.
"""

from typing import Any


class CommitSequence:
    """
    A candidate window of consecutive continuation commits.

    The seed commit is folded first and is never compared with itself, so a
    lone root commit leaves the window unfinished even for a team of one;
    only two distinct commits can be out of order.

    Attributes:
        start: Commit the window was seeded from.
        end: Most recent commit folded into the window, or None.
        authors: Distinct author emails folded so far.
        last_seen: Author date (epoch seconds) used for the next comparison.
        non_chronological: Whether any fold broke the decreasing-date order.
        finished: Permanent once set; the window is never touched again.
    """

    def __init__(self, start: Any) -> None:
        self.start = None
        self.end = None
        self.authors: set[str] = set()
        self.last_seen = 0
        self.non_chronological = False
        self.finished = False
        self.reset(start)

    def reset(self, commit: Any) -> None:
        """
        Start a brand-new window at `commit`.

        No-op once the window is finished.

        Args:
            commit: Commit the new window begins at.
        """
        if self.finished:
            return
        self.start = commit
        self.end = None
        self.authors = {commit.author.email}
        self.last_seen = commit.authored_date
        self.non_chronological = False

    def handle(self, commit: Any, team_size: int) -> bool:
        """
        Fold a visited commit into the window.

        Merge commits are not folded; they are reported so the caller can
        start a fresh window at each of their parents.

        Args:
            commit: The commit being visited.
            team_size: Required number of distinct authors.

        Returns:
            True if `commit` is a merge boundary, False otherwise.
        """
        if self.finished:
            return False
        if len(commit.parents) > 1:
            return True

        # The seed commit is the first fold and has nothing to compare against.
        if self.end is not None:
            if commit.authored_date >= self.last_seen:
                self.non_chronological = True
            else:
                self.last_seen = commit.authored_date
        self.end = commit
        self.authors.add(commit.author.email)

        self.finished = len(self.authors) == team_size and self.non_chronological
        return False
