"""Tests for the commit graph traversal."""

import pytest

from commitcheck.errors import UnresolvableCommitError
from commitcheck.traversal import TraversalContext, traverse

from .conftest import MissingCommit


def test_single_root_commit(commit):
    tip = commit("alice@example.com", 100)

    result = traverse(tip, 3)

    assert result.authors == ["alice@example.com"]
    assert not result.sequence_found
    assert result.merge_authors == []
    assert not result.revert_found
    assert result.revert_reference is None


@pytest.mark.parametrize("team_size", [0, -1])
def test_invalid_team_size(commit, team_size):
    with pytest.raises(ValueError):
        traverse(commit("alice@example.com", 100), team_size)


def test_linear_non_chronological_history(commit):
    c3 = commit("carol@example.com", 50)
    c2 = commit("bob@example.com", 100, parents=[c3])
    c1 = commit("alice@example.com", 100, parents=[c2])

    result = traverse(c1, 3)

    assert result.authors == ["alice@example.com", "bob@example.com", "carol@example.com"]
    assert result.sequence_found


def test_linear_chronological_history(commit):
    c3 = commit("carol@example.com", 100)
    c2 = commit("bob@example.com", 200, parents=[c3])
    c1 = commit("alice@example.com", 300, parents=[c2])

    result = traverse(c1, 3)

    assert not result.sequence_found


def test_merge_of_two_roots(commit):
    a = commit("alice@example.com", 100)
    b = commit("bob@example.com", 200)
    merge = commit("dave@example.com", 300, parents=[a, b])

    result = traverse(merge, 2)

    assert result.authors == ["alice@example.com", "bob@example.com", "dave@example.com"]
    assert result.merge_authors == ["dave@example.com"]
    # Each parent gets its own single-author window
    assert not result.sequence_found


def test_merge_separates_windows(commit):
    below = commit("bob@example.com", 900)
    other = commit("carol@example.com", 900)
    merge = commit("dave@example.com", 500, parents=[below, other])
    tip = commit("alice@example.com", 100, parents=[merge])

    result = traverse(tip, 2)

    # alice followed by a later bob would qualify, but the merge lies between them
    assert not result.sequence_found


def test_sequence_in_second_parent(commit):
    first = commit("alice@example.com", 100)
    b0 = commit("carol@example.com", 200)
    b1 = commit("bob@example.com", 100, parents=[b0])
    merge = commit("dave@example.com", 300, parents=[first, b1])

    result = traverse(merge, 2)

    assert result.sequence_found


def test_window_restarts_for_each_parent(commit, monkeypatch):
    a = commit("alice@example.com", 100)
    b = commit("bob@example.com", 200)
    merge = commit("dave@example.com", 300, parents=[a, b])
    context = TraversalContext(merge, 2)
    starts = []
    original_reset = context.sequence.reset

    def record_reset(c):
        starts.append(c)
        original_reset(c)

    monkeypatch.setattr(context.sequence, "reset", record_reset)
    context.walk(merge)

    assert starts == [a, b]
    assert context.sequence.start is b


def test_finished_window_survives_later_merges(commit):
    l1 = commit("bob@example.com", 200)
    l0 = commit("alice@example.com", 100, parents=[l1])
    r0 = commit("frank@example.com", 10)
    r1 = commit("grace@example.com", 20)
    inner = commit("erin@example.com", 30, parents=[r0, r1])
    merge = commit("dave@example.com", 300, parents=[l0, inner])

    result = traverse(merge, 2)

    assert result.sequence_found
    # Merges visited after the window finished are still merges
    assert result.merge_authors == ["dave@example.com", "erin@example.com"]
    assert len(result.authors) == 6


def test_diamond_ancestor_visited_per_path(commit):
    root = commit("root@example.com", 10)
    a = commit("alice@example.com", 20, parents=[root])
    b = commit("bob@example.com", 30, parents=[root])
    merge = commit("dave@example.com", 40, parents=[a, b])
    context = TraversalContext(merge, 3)

    context.walk(merge)

    assert context.visited == 5
    assert context.authors == {
        "root@example.com", "alice@example.com", "bob@example.com", "dave@example.com",
    }


def test_visit_order_is_depth_first_parent_order(commit):
    root = commit("root@example.com", 10)
    a = commit("alice@example.com", 20, parents=[root])
    b = commit("bob@example.com", 30)
    merge = commit("dave@example.com", 40, parents=[a, b])
    context = TraversalContext(merge, 3)
    order = []
    original_visit = context.visit

    def record_visit(c):
        order.append(c)
        return original_visit(c)

    context.visit = record_visit
    context.walk(merge)

    assert order == [merge, a, root, b]


def test_first_revert_in_visit_order(commit):
    deep = commit("carol@example.com", 10, message="Revert 1111111 in first parent")
    a = commit("alice@example.com", 20, message="add handler", parents=[deep])
    b = commit("bob@example.com", 30, message="This reverts commit 2222222.")
    merge = commit("dave@example.com", 40, message="Merge branch 'b'", parents=[a, b])

    result = traverse(merge, 3)

    assert result.revert_found
    assert result.revert_reference == "1111111"


def test_revert_verification(commit):
    tip = commit("alice@example.com", 10, message="This reverts commit 2222222.")

    missing = traverse(tip, 1, verify_revert=lambda ref: False)
    present = traverse(tip, 1, verify_revert=lambda ref: ref == "2222222")

    assert not missing.revert_found
    assert missing.revert_reference == "2222222"
    assert present.revert_found


def test_unresolvable_parent_aborts(commit):
    broken = MissingCommit("ghost@example.com", 0)
    tip = commit("alice@example.com", 100, parents=[broken])

    with pytest.raises(UnresolvableCommitError) as excinfo:
        traverse(tip, 1)

    assert excinfo.value.hexsha == tip.hexsha
    assert excinfo.value.index == 0


def test_traversal_is_idempotent(commit):
    root = commit("carol@example.com", 10)
    a = commit("alice@example.com", 50, parents=[root])
    b = commit("bob@example.com", 60, message="Revert abcdef0", parents=[root])
    merge = commit("dave@example.com", 40, parents=[a, b])

    assert traverse(merge, 2) == traverse(merge, 2)


def test_long_linear_history(commit):
    tip = commit("root@example.com", 0)
    for i in range(1, 5000):
        tip = commit(f"dev{i % 3}@example.com", i, parents=[tip])

    result = traverse(tip, 3)

    assert len(result.authors) == 4
    assert not result.sequence_found


def test_single_root_team_of_one_stays_unfinished(commit):
    # A lone commit has no parent to be out of order with
    result = traverse(commit("alice@example.com", 100), 1)

    assert result.authors == ["alice@example.com"]
    assert not result.sequence_found
