"""
Grammar rule types.

A line grammar holds `LineRule` and `BlockRule` entries; an inline grammar holds `MatchRule` and
`DelimiterRule` entries.  Each category is its own class so the registry can classify a rule once, when
it is registered, rather than inspecting its shape every time it is used.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Tuple

from livemark.livemark_span import RenderedLine, Span, element, mark

if TYPE_CHECKING:
    from livemark.livemark_inline_formatter import InlineFormatter


class RuleKind(Enum):
    """Category of a grammar rule."""
    LINE = "line"
    BLOCK = "block"
    MATCH = "match"
    DELIMITER = "delimiter"


class LineGrammarRule(ABC):
    """Base class for rules that can appear in a line grammar."""

    kind: RuleKind


class InlineGrammarRule(ABC):
    """Base class for rules that can appear in an inline grammar."""

    kind: RuleKind


class LineRule(LineGrammarRule):
    """A stateless rule that matches and renders a single line."""

    kind = RuleKind.LINE

    @abstractmethod
    def match(self, line: str) -> Any | None:
        """
        Try to match a line.

        Args:
            line: The raw line text

        Returns:
            A capture to pass to `render`, or None if the rule does not apply
        """

    @abstractmethod
    def render(self, capture: Any, inline: "InlineFormatter") -> RenderedLine:
        """
        Render a matched line.

        Args:
            capture: The value returned by `match`
            inline: Formatter for any inline content of the line

        Returns:
            The rendered line
        """


class BlockRule(LineGrammarRule):
    """A rule spanning several lines, from an opening line up to and including a closing line."""

    kind = RuleKind.BLOCK

    @abstractmethod
    def open(self, line: str, inline: "InlineFormatter") -> Tuple[Any, RenderedLine] | None:
        """
        Try to open a block on a line.

        Args:
            line: The raw line text
            inline: Inline formatter

        Returns:
            A tuple of (capture, rendered opening line), or None if the line does not open a block
        """

    @abstractmethod
    def close(self, line: str, capture: Any, inline: "InlineFormatter") -> RenderedLine | None:
        """
        Check whether a line closes the block.

        Args:
            line: The raw line text
            capture: The capture returned by `open`
            inline: Inline formatter

        Returns:
            The rendered closing line, or None if the block continues
        """

    @abstractmethod
    def render_middle(self, line: str, inline: "InlineFormatter") -> RenderedLine:
        """
        Render a line inside the block.

        Args:
            line: The raw line text
            inline: Inline formatter

        Returns:
            The rendered line
        """


class MatchRule(InlineGrammarRule):
    """An inline rule that recognises a construct at a position within a line."""

    kind = RuleKind.MATCH

    @abstractmethod
    def match(self, text: str, pos: int) -> Tuple[int, Any] | None:
        """
        Try to match at a position.

        The rule sees the whole line so it can inspect the character before `pos`, but any match must
        start exactly at `pos`.

        Args:
            text: The line text
            pos: Position to match at

        Returns:
            A tuple of (number of characters consumed, capture), or None if there is no match
        """

    @abstractmethod
    def render(self, capture: Any, inline: "InlineFormatter") -> Span:
        """
        Render a match.

        Args:
            capture: The capture returned by `match`
            inline: Inline formatter

        Returns:
            The inline node for the match
        """


@dataclass(frozen=True)
class DelimiterRule(InlineGrammarRule):
    """
    An emphasis-like inline rule driven by delimiter runs.

    Attributes:
        characters: Delimiter characters this rule applies to; each one pairs only with itself
        length: Number of delimiter characters consumed on each side
        name: Name of the inline node produced
    """
    characters: str
    length: int
    name: str

    kind = RuleKind.DELIMITER

    def render(self, delimiter: str, children: Tuple[Span, ...]) -> Span:
        """
        Wrap formatted content in its delimiters.

        Args:
            delimiter: The delimiter text consumed on each side, e.g. "**"
            children: Spans enclosed by the delimiters

        Returns:
            The inline node
        """
        return element(self.name, (mark(delimiter),) + tuple(children) + (mark(delimiter),))


class RegexLineRule(LineRule):
    """A line rule backed by a regular expression."""

    def __init__(self, pattern: str | re.Pattern, render: Callable[[re.Match, "InlineFormatter"], RenderedLine]):
        """
        Initialize the rule.

        Args:
            pattern: Regular expression, matched from the start of the line
            render: Function that renders a match
        """
        self._pattern = re.compile(pattern) if isinstance(pattern, str) else pattern
        self._render = render

    def match(self, line: str) -> re.Match | None:
        return self._pattern.match(line)

    def render(self, capture: re.Match, inline: "InlineFormatter") -> RenderedLine:
        return self._render(capture, inline)


class RegexMatchRule(MatchRule):
    """An inline match rule backed by a regular expression."""

    def __init__(self, pattern: str | re.Pattern, render: Callable[[re.Match, "InlineFormatter"], Span]):
        """
        Initialize the rule.

        Args:
            pattern: Regular expression, anchored at the match position
            render: Function that renders a match
        """
        self._pattern = re.compile(pattern) if isinstance(pattern, str) else pattern
        self._render = render

    def match(self, text: str, pos: int) -> Tuple[int, re.Match] | None:
        found = self._pattern.match(text, pos)
        if found is None or found.end() == pos:
            return None

        return found.end() - pos, found

    def render(self, capture: re.Match, inline: "InlineFormatter") -> Span:
        return self._render(capture, inline)


class NeverLineRule(LineRule):
    """Line rule that never matches, used to disable a named default."""

    def match(self, line: str) -> None:
        return None

    def render(self, capture: Any, inline: "InlineFormatter") -> RenderedLine:
        raise AssertionError("NeverLineRule cannot render")


class NeverMatchRule(MatchRule):
    """Inline rule that never matches, used to disable a named default."""

    def match(self, text: str, pos: int) -> None:
        return None

    def render(self, capture: Any, inline: "InlineFormatter") -> Span:
        raise AssertionError("NeverMatchRule cannot render")


class NeverBlockRule(BlockRule):
    """Block rule that never opens, used to disable a named default."""

    def open(self, line: str, inline: "InlineFormatter") -> None:
        return None

    def close(self, line: str, capture: Any, inline: "InlineFormatter") -> RenderedLine | None:
        raise AssertionError("NeverBlockRule cannot be open")

    def render_middle(self, line: str, inline: "InlineFormatter") -> RenderedLine:
        raise AssertionError("NeverBlockRule cannot be open")
