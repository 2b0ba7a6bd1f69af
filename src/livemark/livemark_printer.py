"""
Visitor class to print rendered lines for debugging
"""

from typing import List

from livemark.livemark_render_state import RenderState
from livemark.livemark_span import RenderedLine, Span
from livemark.livemark_span_visitor import SpanVisitor


class LivemarkPrinter(SpanVisitor):
    """Visitor that formats the span structure of rendered lines as an indented tree."""

    def __init__(self) -> None:
        """Initialize the printer with zero indentation."""
        super().__init__()
        self.indent_level = 0
        self._output: List[str] = []

    def _indent(self) -> str:
        return "  " * self.indent_level

    def _emit(self, text: str) -> None:
        self._output.append(f"{self._indent()}{text}")

    def format_line(self, line: RenderedLine, num: int | None = None, line_type: str | None = None) -> str:
        """
        Format one rendered line.

        Args:
            line: The rendered line
            num: Optional line number to show
            line_type: Optional line type to show

        Returns:
            The tree, one node per output line
        """
        self._output = []
        self.indent_level = 0

        header = "Line" if num is None else f"Line {num}"
        if line_type is not None:
            header += f" [{line_type}]"

        if line.name is not None:
            header += f" {line.name}"

        if line.attributes:
            header += " " + " ".join(f"{key}={value!r}" for key, value in line.attributes)

        self._emit(header)
        self.indent_level += 1
        for span in line.spans:
            self.visit(span)

        return "\n".join(self._output)

    def format_state(self, state: RenderState) -> str:
        """
        Format every line of a render state.

        Args:
            state: The render state

        Returns:
            The trees of all lines
        """
        return "\n".join(
            self.format_line(line, num, state.line_types[num]) for num, line in enumerate(state.rendered_lines)
        )

    def generic_visit(self, span: Span) -> List[str]:
        """
        Print a span and its children.

        Args:
            span: The span to print

        Returns:
            The results of visiting the children
        """
        label = span.name if span.name else span.kind.value
        if span.attributes:
            label += " " + " ".join(f"{key}={value!r}" for key, value in span.attributes)

        if not span.children:
            self._emit(f"{label}: '{span.text}'" if span.text else label)
            return []

        self._emit(label)
        self.indent_level += 1
        results = super().generic_visit(span)
        self.indent_level -= 1
        return results
