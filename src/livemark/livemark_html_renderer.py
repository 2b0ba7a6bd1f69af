"""
Span visitor to render lines as HTML.
"""

import html
from typing import Dict, Sequence

from livemark.livemark_span import RenderedLine, Span
from livemark.livemark_span_visitor import SpanVisitor


class LivemarkHTMLRenderer(SpanVisitor):
    """
    Visitor that renders lines as HTML.

    Every line becomes a `<div class="md-line">` and every syntax marker a `<span class="md-mark">`, so a
    stylesheet can hide markers outside the current selection.  Span text is already escaped; only
    attribute values are escaped here.
    """

    _INLINE_TAGS: Dict[str, str] = {
        "Emphasis": "em",
        "StrongEmphasis": "b",
        "Underline": "ins",
        "Strikethrough": "del",
    }

    _LINE_CLASSES: Dict[str, str] = {
        "BlockQuote": "md-quote",
        "ThematicBreak": "md-hr",
    }

    def render_document(self, lines: Sequence[RenderedLine]) -> str:
        """
        Render a sequence of lines.

        Args:
            lines: The rendered lines

        Returns:
            The HTML for all lines, concatenated
        """
        return "".join(self.render_line(line) for line in lines)

    def render_line(self, line: RenderedLine) -> str:
        """
        Render one line.

        Args:
            line: The rendered line

        Returns:
            The HTML for the line
        """
        inner_html = "".join(self.visit(span) for span in line.spans)

        if line.name == "ATXHeading":
            level = line.attribute("level") or "1"
            inner_html = f'<h{level} class="md-heading">{inner_html}</h{level}>'

        elif line.name == "CodeBlock":
            inner_html = f'<code class="md-code-block">{inner_html}</code>'

        elif line.name is not None:
            css_class = self._LINE_CLASSES.get(line.name, f"md-{line.name.lower()}")
            inner_html = f'<div class="{css_class}">{inner_html}</div>'

        return f'<div class="md-line">{inner_html}</div>'

    def _children_html(self, span: Span) -> str:
        return "".join(self.visit(child) for child in span.children)

    def generic_visit(self, span: Span) -> str:  # type: ignore[override]
        """
        Render a named span that has no dedicated handler.

        Args:
            span: The span to render

        Returns:
            The HTML string representation of the span
        """
        inner_html = self._children_html(span) if span.children else span.text
        css_class = f"md-{span.name.lower()}" if span.name else f"md-{span.kind.value}"
        tag = self._INLINE_TAGS.get(span.name or "")
        if tag is not None:
            return f"<{tag}>{inner_html}</{tag}>"

        return f'<span class="{css_class}">{inner_html}</span>'

    def visit_mark(self, span: Span) -> str:
        """Render a syntax marker."""
        return f'<span class="md-mark">{span.text}</span>'

    def visit_content(self, span: Span) -> str:
        """Render literal content."""
        return span.text

    def visit_empty_line(self, span: Span) -> str:  # pylint: disable=unused-argument
        """Render the empty line placeholder."""
        return "<br>"

    def visit_CodeLanguage(self, span: Span) -> str:  # pylint: disable=invalid-name
        """Render the language name of a fenced code block."""
        return f'<span class="md-mark md-code-lang">{span.text}</span>'

    def visit_InlineCode(self, span: Span) -> str:  # pylint: disable=invalid-name
        """Render an inline code span."""
        return f'<code class="md-code">{self._children_html(span)}</code>'

    def visit_Escape(self, span: Span) -> str:  # pylint: disable=invalid-name
        """Render a backslash escape."""
        return f'<span class="md-escape">{self._children_html(span)}</span>'

    def _link(self, span: Span) -> str:
        href = html.escape(span.attribute("href") or "", quote=True)
        return f'<a href="{href}">{self._children_html(span)}</a>'

    def visit_Autolink(self, span: Span) -> str:  # pylint: disable=invalid-name
        """Render an autolink; the angle brackets stay outside the anchor."""
        brackets_open, *link, brackets_close = span.children
        href = html.escape(span.attribute("href") or "", quote=True)
        link_html = "".join(self.visit(child) for child in link)
        return f'<span>{self.visit(brackets_open)}<a href="{href}">{link_html}</a>{self.visit(brackets_close)}</span>'

    def visit_URL(self, span: Span) -> str:  # pylint: disable=invalid-name
        """Render a bare URL."""
        return self._link(span)

    def visit_Email(self, span: Span) -> str:  # pylint: disable=invalid-name
        """Render a bare email address."""
        return self._link(span)
