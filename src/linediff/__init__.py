"""
Line sequence diffing and edit script application.

This package computes small retain/replace edit scripts between two sequences of lines and replays
them against list-like documents or host surfaces.
"""

from linediff.line_diff_applier import (
    EditScriptApplier,
    SequenceEditScriptApplier,
    apply_edit_script,
)
from linediff.line_diff_exceptions import EditScriptError, LineDiffError
from linediff.line_diff_types import (
    EditOperation,
    EditScriptApplicationResult,
    LineReplace,
    LineRetain,
    edit_script_new_length,
    edit_script_old_length,
)
from linediff.line_differ import LineDiffer, diff_lines

__all__ = [
    # Exceptions
    'LineDiffError',
    'EditScriptError',
    # Types
    'EditOperation',
    'LineRetain',
    'LineReplace',
    'EditScriptApplicationResult',
    'edit_script_old_length',
    'edit_script_new_length',
    # Core classes
    'LineDiffer',
    'EditScriptApplier',
    'SequenceEditScriptApplier',
    'diff_lines',
    'apply_edit_script',
]
