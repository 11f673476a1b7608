"""
Revert reference parser.

Finds the object id a commit message claims to revert, e.g. the trailer
`This reverts commit <sha>.` written by `git revert`.
"""

import re

from .config import REVERT_PATTERN

_revert_regex = re.compile(REVERT_PATTERN)


def parse_revert_reference(message: str) -> str | None:
    """
    Extract the reverted commit id from a commit message.

    The check is purely syntactic: the word "revert" in any case, followed
    after some text and whitespace by 7 to 40 lowercase hex digits. Whether
    the id exists in the repository is for the caller to decide.

    Args:
        message: Full commit message.

    Returns:
        The first matching hex id, or None if the message has none.
    """
    match = _revert_regex.search(message)
    if match is None:
        return None
    return match.group(1)
