"""
Per-document render state.
"""

from dataclasses import dataclass
from typing import Sequence, Tuple

from livemark.livemark_exceptions import LineRangeError
from livemark.livemark_span import RenderedLine


@dataclass(frozen=True)
class LineInfo:
    """
    Position information for one line of a document.

    Character offsets count Unicode code points over the document text with lines joined by "\\n".

    Attributes:
        num: Line number (0-indexed)
        start: Offset of the first character of the line
        end: Offset just past the last character of the line
        text: The line text
    """
    num: int
    start: int
    end: int
    text: str


class RenderState:
    """
    The rendering of one document.

    A render state is never modified: a reparse produces a new one, so a host holding a reference always
    sees a consistent set of lines, rendered lines and line types.
    """

    def __init__(
        self,
        lines: Sequence[str] = (),
        rendered_lines: Sequence[RenderedLine] = (),
        line_types: Sequence[str] = ()
    ) -> None:
        """
        Initialize the render state.

        Args:
            lines: Raw document lines
            rendered_lines: The rendering of each line
            line_types: The type of each line
        """
        if not len(lines) == len(rendered_lines) == len(line_types):
            raise ValueError(
                f"Line count mismatch: {len(lines)} lines, {len(rendered_lines)} rendered, "
                f"{len(line_types)} types"
            )

        self._lines: Tuple[str, ...] = tuple(lines)
        self._rendered_lines: Tuple[RenderedLine, ...] = tuple(rendered_lines)
        self._line_types: Tuple[str, ...] = tuple(line_types)

    @property
    def lines(self) -> Tuple[str, ...]:
        """The raw document lines."""
        return self._lines

    @property
    def rendered_lines(self) -> Tuple[RenderedLine, ...]:
        """The rendered lines."""
        return self._rendered_lines

    @property
    def line_types(self) -> Tuple[str, ...]:
        """The type of each line."""
        return self._line_types

    @property
    def line_count(self) -> int:
        """Number of lines in the document."""
        return len(self._lines)

    @property
    def content(self) -> str:
        """The document text, with lines joined by newlines."""
        return "\n".join(self._lines)

    def _check_line_number(self, num: int) -> None:
        if num < 0 or num >= len(self._lines):
            raise LineRangeError(
                f"Invalid line {num} in document with {len(self._lines)} lines",
                {'line': num, 'line_count': len(self._lines)}
            )

    def line_type_of(self, num: int) -> str:
        """
        Get the type of a line.

        Args:
            num: Line number (0-indexed)

        Returns:
            The name of the rule that classified the line

        Raises:
            LineRangeError: If the line does not exist
        """
        self._check_line_number(num)
        return self._line_types[num]

    def rendered_line(self, num: int) -> RenderedLine:
        """
        Get the rendering of a line.

        Args:
            num: Line number (0-indexed)

        Returns:
            The rendered line

        Raises:
            LineRangeError: If the line does not exist
        """
        self._check_line_number(num)
        return self._rendered_lines[num]

    def line(self, num: int) -> LineInfo:
        """
        Get a line by number.

        Args:
            num: Line number (0-indexed)

        Returns:
            The positions and text of the line

        Raises:
            LineRangeError: If the line does not exist
        """
        self._check_line_number(num)
        start = sum(len(line) + 1 for line in self._lines[:num])
        text = self._lines[num]
        return LineInfo(num, start, start + len(text), text)

    def line_at(self, pos: int) -> LineInfo:
        """
        Get the line containing a character position.

        A position at the end of a line, just before its newline, belongs to that line.

        Args:
            pos: Character offset into the document text

        Returns:
            The positions and text of the line

        Raises:
            LineRangeError: If the position is outside the document
        """
        total_length = len(self.content)
        if not self._lines or pos < 0 or pos > total_length:
            raise LineRangeError(
                f"Invalid position {pos} in document of length {total_length}",
                {'position': pos, 'length': total_length}
            )

        num = 0
        start = 0
        for line in self._lines:
            if start + len(line) >= pos:
                break

            start += len(line) + 1
            num += 1

        text = self._lines[num]
        return LineInfo(num, start, start + len(text), text)
