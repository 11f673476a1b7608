"""
Shared fixtures: in-memory commits shaped like GitPython's Commit.
"""

import itertools

import pytest


class FakeActor:
    def __init__(self, email: str) -> None:
        self.email = email
        self.name = email.split("@")[0]


class FakeCommit:
    """Minimal stand-in for git.Commit as used by the traversal."""

    _ids = itertools.count(1)

    def __init__(self, email: str, authored_date: int, message: str = "", parents=()) -> None:
        self.hexsha = f"{next(self._ids):040x}"
        self.author = FakeActor(email)
        self.authored_date = authored_date
        self.committed_date = authored_date
        self.message = message
        self.parents = list(parents)

    def __repr__(self) -> str:
        return f"FakeCommit({self.author.email}, {self.authored_date})"


class MissingCommit(FakeCommit):
    """A parent whose object cannot be read from the object store."""

    @property
    def author(self):
        raise ValueError(f"SHA {self.hexsha} could not be resolved")

    @author.setter
    def author(self, value):
        pass


@pytest.fixture
def commit():
    """Factory building FakeCommit objects."""
    def make(email: str, authored_date: int = 0, message: str = "", parents=()) -> FakeCommit:
        return FakeCommit(email, authored_date, message, parents)
    return make
