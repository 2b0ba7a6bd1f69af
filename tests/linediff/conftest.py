"""Shared fixtures and utilities for line diff tests."""

import pytest
from typing import Any, List, Tuple

from linediff.line_diff_applier import EditScriptApplier, SequenceEditScriptApplier
from linediff.line_differ import LineDiffer


class RecordingEditScriptApplier(EditScriptApplier):
    """Applier that records every replace call it makes on a list document."""

    def __init__(self) -> None:
        self.calls: List[Tuple[int, int, Tuple[Any, ...]]] = []

    def _line_count(self, document: Any) -> int:
        """Get the number of lines in a list document."""
        return len(document)

    def _replace_lines(self, document: Any, start: int, old_count: int, new_lines: Tuple[Any, ...]) -> None:
        """Record the call, then replace the slice."""
        self.calls.append((start, old_count, new_lines))
        document[start:start + old_count] = new_lines


@pytest.fixture
def differ():
    """Create a line differ for testing."""
    return LineDiffer()


@pytest.fixture
def sequence_applier():
    """Create a list applier for testing."""
    return SequenceEditScriptApplier()


@pytest.fixture
def recording_applier():
    """Create an applier that records its replace calls."""
    return RecordingEditScriptApplier()


# Pairs of (old, new) line sequences covering inserts, deletes, and edits at either end
DIFF_PAIRS = [
    ([], []),
    ([], ["a"]),
    (["a"], []),
    (["a"], ["a"]),
    (["a"], ["b"]),
    (["a", "b"], ["a", "x", "b"]),
    (["a", "x", "b"], ["a", "b"]),
    (["a", "b", "c"], ["x", "b", "y"]),
    (["a", "b", "c"], ["a", "b", "c", "d"]),
    (["z", "a", "b", "c"], ["a", "b", "c"]),
    (["a", "a", "a"], ["a", "a"]),
    (["a", "a"], ["a", "a", "a", "a"]),
    (["a", "b", "a"], ["a", "a"]),
    (["p", "q", "r", "s"], ["p", "x", "y", "z", "s"]),
    (["one", "two", "three"], ["four", "five"]),
    (["", "", ""], ["", "x", ""]),
]


@pytest.fixture(params=DIFF_PAIRS, ids=lambda pair: f"{len(pair[0])}->{len(pair[1])}")
def diff_pair(request):
    """Provide each (old, new) pair in turn."""
    old, new = request.param
    return list(old), list(new)
