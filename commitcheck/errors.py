"""
Exceptions raised while checking a repository's history.
"""


class CommitCheckError(Exception):
    """Base class for all commit check failures."""


class RepositoryError(CommitCheckError):
    """The repository could not be cloned or opened."""


class CommitNotFoundError(CommitCheckError):
    """The requested tip commit does not exist in the repository."""

    def __init__(self, hexsha: str, reason: str = "") -> None:
        self.hexsha = hexsha
        message = f"Commit {hexsha} not found"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class UnresolvableCommitError(CommitCheckError):
    """
    A parent commit could not be loaded from the object store.

    This means the repository is corrupt or incomplete; the traversal is
    aborted and no partial result is produced.
    """

    def __init__(self, hexsha: str, index: int, reason: str = "") -> None:
        self.hexsha = hexsha
        self.index = index
        message = f"Cannot resolve parent {index} of commit {hexsha}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
