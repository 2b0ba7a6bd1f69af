"""Shared dataclasses for line diff operations."""

from dataclasses import dataclass
from typing import Any, List, Tuple, Union


@dataclass(frozen=True)
class LineRetain:
    """Keep the next `count` lines of the old sequence unchanged."""

    count: int


@dataclass(frozen=True)
class LineReplace:
    """
    Replace a contiguous range of lines.

    `start` is the index of the first affected line.  Old and new sequences agree on every index before a
    replace, so the same value addresses both.  Either side may be empty: `old_count == 0` is a pure insert
    and an empty `new_lines` is a pure delete.
    """

    start: int
    old_count: int
    new_lines: Tuple[Any, ...]

    @property
    def new_count(self) -> int:
        """Number of lines this replacement inserts."""
        return len(self.new_lines)


EditOperation = Union[LineRetain, LineReplace]


@dataclass
class EditScriptApplicationResult:
    """Result of applying an edit script."""

    success: bool
    message: str
    replacements_applied: int = 0
    error_details: dict | None = None


def edit_script_old_length(script: List[EditOperation]) -> int:
    """
    Number of old lines an edit script accounts for.

    Args:
        script: The edit script

    Returns:
        Sum of all retained counts and replaced old counts
    """
    total = 0
    for op in script:
        if isinstance(op, LineRetain):
            total += op.count

        else:
            total += op.old_count

    return total


def edit_script_new_length(script: List[EditOperation]) -> int:
    """
    Number of lines the result of an edit script will have.

    Args:
        script: The edit script

    Returns:
        Sum of all retained counts and inserted line counts
    """
    total = 0
    for op in script:
        if isinstance(op, LineRetain):
            total += op.count

        else:
            total += op.new_count

    return total
