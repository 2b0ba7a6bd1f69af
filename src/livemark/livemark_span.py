"""
Structured output of the renderer.

A document renders to one `RenderedLine` per source line.  Each rendered line is a flat tuple of `Span`
values; spans that carry a `name` and `children` are inline nodes (emphasis, links, code spans, etc.).
All text held in spans is already HTML-escaped, while attribute values are kept raw.
"""

import html
from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class SpanKind(Enum):
    """Kind of a span within a rendered line."""
    MARK = "mark"
    CONTENT = "content"
    EMPTY_LINE = "empty_line"


Attributes = Tuple[Tuple[str, str], ...]


def escape_html(text: str) -> str:
    """
    Escape the characters that are structurally significant in markup.

    Args:
        text: Raw text

    Returns:
        Text with `&`, `<` and `>` replaced by entities
    """
    return html.escape(text, quote=False)


@dataclass(frozen=True)
class Span:
    """
    A piece of a rendered line.

    Attributes:
        kind: Whether this is syntax (mark), user visible content, or the empty line placeholder
        text: Escaped text for leaf spans
        children: Nested spans for inline nodes
        name: Name of the grammar rule that produced an inline node, if any
        attributes: Raw attribute values of an inline node, e.g. `href`
    """
    kind: SpanKind
    text: str = ""
    children: Tuple["Span", ...] = ()
    name: str | None = None
    attributes: Attributes = ()

    def attribute(self, key: str) -> str | None:
        """
        Look up an attribute value.

        Args:
            key: Attribute name

        Returns:
            The attribute value, or None if not present
        """
        for name, value in self.attributes:
            if name == key:
                return value

        return None

    def is_plain_text(self) -> bool:
        """Return True if this is an unnamed content leaf that adjacent literal text can merge into."""
        return self.kind == SpanKind.CONTENT and self.name is None and not self.children and not self.attributes

    def markup_text(self) -> str:
        """
        Get the escaped source text covered by this span, including marks.

        Returns:
            Concatenated text of this span and all of its descendants
        """
        if self.children:
            return "".join(child.markup_text() for child in self.children)

        return self.text

    def walk(self) -> Tuple["Span", ...]:
        """
        Get this span and all of its descendants in document order.

        Returns:
            A tuple of spans, starting with this one
        """
        result = [self]
        for child in self.children:
            result.extend(child.walk())

        return tuple(result)


EMPTY_LINE_SPAN = Span(SpanKind.EMPTY_LINE)


def mark(text: str, name: str | None = None) -> Span:
    """Create a syntax marker span from already escaped text."""
    return Span(SpanKind.MARK, text=text, name=name)


def content(text: str) -> Span:
    """Create a content span from already escaped text."""
    return Span(SpanKind.CONTENT, text=text)


def element(name: str, children: Tuple[Span, ...], attributes: Attributes = ()) -> Span:
    """Create an inline node span wrapping `children`."""
    return Span(SpanKind.CONTENT, children=tuple(children), name=name, attributes=attributes)


@dataclass(frozen=True)
class RenderedLine:
    """
    The rendering of one source line.

    Attributes:
        spans: The spans of the line, in order
        name: Line level element name (e.g. "ATXHeading"), or None for a plain paragraph line
        attributes: Raw attribute values of the line element, e.g. `level`
    """
    spans: Tuple[Span, ...]
    name: str | None = None
    attributes: Attributes = ()

    @classmethod
    def empty(cls, name: str | None = None, attributes: Attributes = ()) -> "RenderedLine":
        """
        Create the placeholder rendering used for a line with no text.

        Args:
            name: Optional line element name
            attributes: Optional line element attributes

        Returns:
            A rendered line holding only the empty line placeholder span
        """
        return cls((EMPTY_LINE_SPAN,), name, attributes)

    def is_empty(self) -> bool:
        """Return True if this line is the empty line placeholder."""
        return len(self.spans) == 1 and self.spans[0].kind == SpanKind.EMPTY_LINE

    def attribute(self, key: str) -> str | None:
        """
        Look up a line attribute value.

        Args:
            key: Attribute name

        Returns:
            The attribute value, or None if not present
        """
        for name, value in self.attributes:
            if name == key:
                return value

        return None

    def markup_text(self) -> str:
        """Get the escaped source text covered by this line, including marks."""
        return "".join(span.markup_text() for span in self.spans)

    def text(self) -> str:
        """Get the unescaped source text covered by this line."""
        return html.unescape(self.markup_text())
