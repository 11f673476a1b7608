"""
Deadline handling for late submissions.
"""

from datetime import datetime, timedelta, timezone

from .config import DEADLINE_FORMAT, PENALTY_PERIOD_DAYS


def deadline_time(value: str) -> datetime:
    """
    Parse a deadline date.

    The named day is included, so the returned moment is midnight (UTC) at
    the start of the following day:

        deadline = deadline_time("2021-10-03")
        if some_time < deadline: ...

    Args:
        value: Date in YYYY-MM-DD format.

    Returns:
        Timezone-aware datetime of the deadline.

    Raises:
        ValueError: If the date is malformed.
    """
    try:
        day = datetime.strptime(value, DEADLINE_FORMAT)
    except ValueError as e:
        raise ValueError(f"Invalid deadline {value}: {e}") from e
    return day.replace(tzinfo=timezone.utc) + timedelta(days=1)


def penalty_points(commit_time: datetime, deadline: datetime) -> int:
    """
    One penalty point per started week past the deadline.

    Args:
        commit_time: Committer time of the checked tip commit.
        deadline: Deadline as returned by `deadline_time`.
    """
    penalty = 0
    limit = deadline
    while commit_time > limit:
        penalty += 1
        limit += timedelta(days=PENALTY_PERIOD_DAYS)
    return penalty
