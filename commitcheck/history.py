"""
Access to a project's git history through GitPython.

Everything the checker needs from the repository goes through here:
cloning, opening, resolving the tip commit, loading parents and checking
whether a referenced commit exists.
"""

from pathlib import Path
from typing import Any

from git import Commit, Repo
from git.exc import BadName, BadObject, GitCommandError, InvalidGitRepositoryError, NoSuchPathError

from .errors import CommitNotFoundError, RepositoryError, UnresolvableCommitError

# Failures GitPython reports when an object id is missing or malformed
LOOKUP_ERRORS = (BadName, BadObject, ValueError)


def clone(url: str, directory: Path) -> Repo:
    """
    Clone a remote repository into `directory`.

    Args:
        url: Repository URL (anything `git clone` accepts).
        directory: Empty destination directory.

    Returns:
        The cloned Repo.

    Raises:
        RepositoryError: If cloning fails.
    """
    try:
        return Repo.clone_from(url, str(directory))
    except GitCommandError as e:
        raise RepositoryError(f"Cannot clone {url}: {e}") from e


def open_repo(path: Path) -> Repo:
    """
    Open an existing local checkout.

    Raises:
        RepositoryError: If `path` is not a git repository.
    """
    try:
        return Repo(str(path))
    except (InvalidGitRepositoryError, NoSuchPathError) as e:
        raise RepositoryError(f"Not a git repository: {path}") from e


def resolve_commit(repo: Repo, rev: str) -> Commit:
    """
    Resolve a revision (full or abbreviated hash, branch, tag) to a commit.

    Raises:
        CommitNotFoundError: If the revision does not name a commit.
    """
    try:
        commit = repo.commit(rev)
        # Force the object to be read so a dangling id fails here
        commit.author
    except LOOKUP_ERRORS as e:
        raise CommitNotFoundError(rev, str(e)) from e
    return commit


def has_commit(repo: Repo, rev: str) -> bool:
    """Whether `rev` resolves to a commit in `repo`."""
    try:
        resolve_commit(repo, rev)
    except CommitNotFoundError:
        return False
    return True


def parent_of(commit: Any, index: int) -> Any:
    """
    Load parent `index` of `commit`.

    GitPython creates parent objects lazily, so the parent's data is read
    here to surface a missing object immediately.

    Raises:
        UnresolvableCommitError: If the parent cannot be loaded.
    """
    try:
        parent = commit.parents[index]
        parent.author
    except LOOKUP_ERRORS as e:
        raise UnresolvableCommitError(commit.hexsha, index, str(e)) from e
    return parent
