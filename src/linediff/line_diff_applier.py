"""Edit script appliers."""

from abc import ABC, abstractmethod
from typing import Any, List, Sequence, Tuple

from linediff.line_diff_exceptions import EditScriptError
from linediff.line_diff_types import (
    EditOperation, EditScriptApplicationResult, LineReplace, LineRetain, edit_script_old_length
)


class EditScriptApplier(ABC):
    """
    Abstract base class for applying edit scripts to a document.

    Subclasses adapt this to a concrete document model (a host surface, a Python list, etc.) by
    implementing the line count and replace primitives.
    """

    @abstractmethod
    def _line_count(self, document: Any) -> int:
        """
        Get the number of lines in the document.

        Args:
            document: Document to inspect (type varies by implementation)

        Returns:
            The number of lines
        """

    @abstractmethod
    def _replace_lines(self, document: Any, start: int, old_count: int, new_lines: Tuple[Any, ...]) -> None:
        """
        Replace a range of lines in the document.

        Args:
            document: Document to modify (type varies by implementation)
            start: Index of the first line to replace (0-indexed)
            old_count: Number of existing lines to remove
            new_lines: Lines to insert in their place
        """

    def apply_script(
        self,
        script: List[EditOperation],
        document: Any,
        dry_run: bool = False
    ) -> EditScriptApplicationResult:
        """
        Apply an edit script to a document.

        This operation is atomic - the whole script is validated before any line is touched.

        Args:
            script: The edit script to apply
            document: Document to modify (type varies by implementation)
            dry_run: If True, validate but don't apply changes

        Returns:
            EditScriptApplicationResult with operation status

        Raises:
            EditScriptError: If the script does not fit the document
        """
        # Phase 1: validate the script against the document
        replacements = self._validate(script, self._line_count(document))

        if dry_run:
            return EditScriptApplicationResult(
                success=True,
                message=f'Edit script validation successful: {len(replacements)} replacement(s) can be applied',
                replacements_applied=len(replacements)
            )

        # Phase 2: apply bottom to top so earlier indices stay valid
        for op in reversed(replacements):
            self._replace_lines(document, op.start, op.old_count, op.new_lines)

        return EditScriptApplicationResult(
            success=True,
            message=f'Successfully applied {len(replacements)} replacement(s)',
            replacements_applied=len(replacements)
        )

    def _validate(self, script: List[EditOperation], line_count: int) -> List[LineReplace]:
        """
        Check an edit script walks the document exactly once.

        Args:
            script: The edit script to check
            line_count: Number of lines in the target document

        Returns:
            The replace operations of the script, in order

        Raises:
            EditScriptError: If the script is malformed or does not cover the document
        """
        covered = edit_script_old_length(script)
        if covered != line_count:
            raise EditScriptError(
                f'Edit script covers {covered} line(s) but the document has {line_count}',
                {
                    'phase': 'validation',
                    'reason': 'Script length mismatch',
                    'script_lines': covered,
                    'document_lines': line_count,
                    'suggestion': 'Recompute the edit script against the current document.'
                }
            )

        replacements: List[LineReplace] = []
        cursor = 0
        for idx, op in enumerate(script):
            if isinstance(op, LineRetain):
                if op.count < 0:
                    raise EditScriptError(
                        f'Operation {idx + 1} retains a negative number of lines',
                        {'phase': 'validation', 'operation': idx + 1, 'count': op.count}
                    )

                cursor += op.count
                continue

            if op.old_count < 0 or op.start != cursor:
                raise EditScriptError(
                    f'Operation {idx + 1} does not start at line {cursor}',
                    {
                        'phase': 'validation',
                        'operation': idx + 1,
                        'expected_start': cursor,
                        'actual_start': op.start,
                        'old_count': op.old_count
                    }
                )

            replacements.append(op)
            cursor += op.old_count

        return replacements


class SequenceEditScriptApplier(EditScriptApplier):
    """Edit script applier for mutable Python lists."""

    def _line_count(self, document: Any) -> int:
        """Get the number of items in a list."""
        if not isinstance(document, list):
            raise TypeError(f"Document must be a list, not {type(document).__name__}")

        return len(document)

    def _replace_lines(self, document: Any, start: int, old_count: int, new_lines: Tuple[Any, ...]) -> None:
        """Replace a slice of a list."""
        document[start:start + old_count] = new_lines


def apply_edit_script(old: Sequence[Any], script: List[EditOperation]) -> List[Any]:
    """
    Replay an edit script against a sequence without modifying it.

    Args:
        old: The sequence the script was computed from
        script: The edit script

    Returns:
        A new list holding the transformed sequence

    Raises:
        EditScriptError: If the script does not fit `old`
    """
    document = list(old)
    SequenceEditScriptApplier().apply_script(script, document)
    return document
