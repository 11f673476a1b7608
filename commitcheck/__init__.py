"""
Commit Check: Automated rubric checks over a team project's git history

Walks the commit graph from a tip commit and decides whether the project
meets the collaboration criteria of the assignment (team size, a
non-chronological streak, merge authors, a revert commit).
"""

__version__ = "0.1.0"
