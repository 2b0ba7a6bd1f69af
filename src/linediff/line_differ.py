"""Contiguous-region differ for sequences of rendered lines."""

import logging
from typing import Generic, List, Sequence, TypeVar

from linediff.line_diff_types import EditOperation, LineReplace, LineRetain


T = TypeVar('T')


class LineDiffer(Generic[T]):
    """
    Compute small edit scripts between two line sequences.

    Lines are compared with `==`, so any value type works (plain strings, frozen dataclasses, etc.).

    When the sequences have the same length each differing line becomes its own single-line replace.
    Otherwise the common prefix and suffix are retained and everything in between becomes one replace.
    It runs in O(max(m, n)) and is not a minimum edit distance diff, so it can replace more lines than an
    optimal diff would.
    """

    def __init__(self) -> None:
        """Initialize the differ."""
        self._logger = logging.getLogger("LineDiffer")

    def diff(self, old: Sequence[T], new: Sequence[T]) -> List[EditOperation]:
        """
        Compute an edit script that transforms `old` into `new`.

        Args:
            old: The previous line sequence
            new: The updated line sequence

        Returns:
            An ordered list of retain and replace operations covering every line of `old`
        """
        if len(old) == len(new):
            script = self._diff_same_length(old, new)

        else:
            script = self._diff_changed_length(old, new)

        self._logger.debug(
            "diff %d -> %d lines: %d operation(s)", len(old), len(new), len(script)
        )
        return script

    def _diff_same_length(self, old: Sequence[T], new: Sequence[T]) -> List[EditOperation]:
        """
        Diff two sequences of equal length, line by line.

        Args:
            old: The previous line sequence
            new: The updated line sequence

        Returns:
            The edit script
        """
        script: List[EditOperation] = []
        retained = 0

        for i, (old_line, new_line) in enumerate(zip(old, new)):
            if old_line == new_line:
                retained += 1
                continue

            if retained:
                script.append(LineRetain(retained))
                retained = 0

            script.append(LineReplace(i, 1, (new_line,)))

        if retained:
            script.append(LineRetain(retained))

        return script

    def _diff_changed_length(self, old: Sequence[T], new: Sequence[T]) -> List[EditOperation]:
        """
        Diff two sequences of different length as a single changed region.

        Args:
            old: The previous line sequence
            new: The updated line sequence

        Returns:
            The edit script
        """
        old_len = len(old)
        new_len = len(new)
        shortest = min(old_len, new_len)

        start = 0
        while start < shortest and old[start] == new[start]:
            start += 1

        # The suffix may not reach back into the prefix on either side
        suffix = 0
        while suffix < shortest - start and old[old_len - 1 - suffix] == new[new_len - 1 - suffix]:
            suffix += 1

        script: List[EditOperation] = []
        if start:
            script.append(LineRetain(start))

        script.append(LineReplace(start, old_len - suffix - start, tuple(new[start:new_len - suffix])))

        if suffix:
            script.append(LineRetain(suffix))

        return script


def diff_lines(old: Sequence[T], new: Sequence[T]) -> List[EditOperation]:
    """
    Compute an edit script that transforms `old` into `new`.

    Args:
        old: The previous line sequence
        new: The updated line sequence

    Returns:
        An ordered list of retain and replace operations
    """
    return LineDiffer().diff(old, new)
