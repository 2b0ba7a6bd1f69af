"""
Inline formatting of a single line of text.
"""

import unicodedata
from dataclasses import dataclass, field
from typing import List, Tuple

from livemark.livemark_grammar import DelimiterRule
from livemark.livemark_grammar_registry import GrammarRegistry
from livemark.livemark_span import RenderedLine, Span, content, escape_html


@dataclass
class DelimiterStackEntry:
    """
    An open delimiter run waiting for a matching close.

    Attributes:
        character: The delimiter character
        remaining: Number of delimiter characters not yet consumed by a close
        buffer: Output that preceded the run; reattached when the entry is popped or flushed
    """
    character: str
    remaining: int
    buffer: List[Span] = field(default_factory=list)


def _append_literal(output: List[Span], text: str) -> None:
    """
    Append escaped literal text, merging it into a preceding plain content span.

    Args:
        output: Output buffer to extend
        text: Escaped text
    """
    if not text:
        return

    if output and output[-1].is_plain_text():
        output[-1] = content(output[-1].text + text)
        return

    output.append(content(text))


def _concat(first: List[Span], second: List[Span]) -> List[Span]:
    """
    Join two output buffers, merging plain text across the seam.

    Args:
        first: Leading spans
        second: Trailing spans

    Returns:
        A new list holding both buffers
    """
    result = list(first)
    for index, span in enumerate(second):
        if index == 0 and span.is_plain_text():
            _append_literal(result, span.text)
            continue

        result.append(span)

    return result


class InlineFormatter:
    """
    Turns the text of one line into inline spans.

    At each position the match rules are tried in priority order.  If none applies and the character can
    form a delimiter run, the run is handled with a delimiter stack in the style of CommonMark's emphasis
    algorithm.  Anything else is literal text.  No inline node ever spans more than one line.
    """

    def __init__(self, registry: GrammarRegistry, strict_flanking_delimiters: str = "_") -> None:
        """
        Initialize the formatter.

        Args:
            registry: Grammar registry supplying match and delimiter rules
            strict_flanking_delimiters: Delimiter characters that may not open or close mid-word
        """
        self._registry = registry
        self._match_rules = registry.match_rules()
        self._delimiter_characters = registry.delimiter_characters()
        self._strict_flanking = frozenset(strict_flanking_delimiters)

    def registry(self) -> GrammarRegistry:
        """Get the grammar registry used by this formatter."""
        return self._registry

    def format_line(self, text: str) -> RenderedLine:
        """
        Format a line of text as a plain paragraph line.

        Args:
            text: The raw line text

        Returns:
            The rendered line; a line with no output holds only the empty line placeholder
        """
        spans = self.format_spans(text)
        if not spans:
            return RenderedLine.empty()

        return RenderedLine(spans)

    def format_spans(self, text: str) -> Tuple[Span, ...]:
        """
        Format inline text.

        Args:
            text: The raw text

        Returns:
            The spans for the text, which is empty if the text is empty
        """
        output: List[Span] = []
        stack: List[DelimiterStackEntry] = []
        literal: List[str] = []
        pos = 0
        text_len = len(text)

        while pos < text_len:
            matched = self._apply_match_rules(text, pos)
            if matched is not None:
                _append_literal(output, "".join(literal))
                literal = []
                consumed, span = matched
                output.append(span)
                pos += consumed
                continue

            ch = text[pos]
            if ch in self._delimiter_characters:
                end = pos + 1
                while end < text_len and text[end] == ch:
                    end += 1

                if self._is_literal_run(text, pos, end, stack):
                    literal.append(ch * (end - pos))
                    pos = end
                    continue

                _append_literal(output, "".join(literal))
                literal = []
                output = self._handle_delimiter_run(text, pos, end, output, stack)
                pos = end
                continue

            literal.append(escape_html(ch))
            pos += 1

        _append_literal(output, "".join(literal))

        # Anything left open never found its close
        while stack:
            output = self._flush_entry(stack.pop(), output)

        return tuple(output)

    def _apply_match_rules(self, text: str, pos: int) -> Tuple[int, Span] | None:
        """
        Try each match rule at a position.

        Args:
            text: The line text
            pos: Current position

        Returns:
            A tuple of (characters consumed, node) for the first rule that matches, or None
        """
        for _name, rule in self._match_rules:
            result = rule.match(text, pos)
            if result is None:
                continue

            consumed, capture = result
            if consumed <= 0:
                continue

            return consumed, rule.render(capture, self)

        return None

    @staticmethod
    def _is_whitespace(ch: str | None) -> bool:
        """Line boundaries count as whitespace."""
        return ch is None or ch.isspace()

    @staticmethod
    def _is_punctuation(ch: str | None) -> bool:
        """Unicode punctuation and symbol characters count as punctuation."""
        return ch is not None and unicodedata.category(ch)[0] in ('P', 'S')

    def _flanking(self, ch: str, run_length: int, before: str | None, after: str | None) -> Tuple[bool, bool]:
        """
        Work out whether a delimiter run can open and/or close formatting.

        Args:
            ch: Delimiter character
            run_length: Length of the run
            before: Character before the run, or None at the start of the line
            after: Character after the run, or None at the end of the line

        Returns:
            A tuple of (can_open, can_close)
        """
        before_space = self._is_whitespace(before)
        after_space = self._is_whitespace(after)
        before_punct = self._is_punctuation(before)
        after_punct = self._is_punctuation(after)

        can_open = not after_space and (not after_punct or before_space or before_punct)
        can_close = not before_space and (not before_punct or after_space or after_punct)

        if run_length == 1 and ch in self._strict_flanking and can_open and can_close:
            can_open = before_punct
            can_close = after_punct

        return can_open, can_close

    def _is_literal_run(self, text: str, start: int, end: int, stack: List[DelimiterStackEntry]) -> bool:
        """A run that cannot open and has no opener to close is plain text."""
        ch = text[start]
        before = text[start - 1] if start > 0 else None
        after = text[end] if end < len(text) else None
        can_open, can_close = self._flanking(ch, end - start, before, after)
        return not can_open and (not can_close or self._find_opener(stack, ch) is None)

    def _handle_delimiter_run(
        self,
        text: str,
        start: int,
        end: int,
        output: List[Span],
        stack: List[DelimiterStackEntry]
    ) -> List[Span]:
        """
        Process one delimiter run.

        Args:
            text: The line text
            start: Position of the first character of the run
            end: Position after the last character of the run
            output: Output buffered since the most recent open entry
            stack: Open delimiter entries, innermost last

        Returns:
            The new output buffer
        """
        ch = text[start]
        remaining = end - start
        before = text[start - 1] if start > 0 else None
        after = text[end] if end < len(text) else None
        can_open, can_close = self._flanking(ch, remaining, before, after)

        while can_close and remaining:
            index = self._find_opener(stack, ch)
            if index is None:
                break

            # Entries skipped on the way down can no longer match anything
            while len(stack) > index + 1:
                output = self._flush_entry(stack.pop(), output)

            entry = stack[index]
            while remaining and entry.remaining:
                rule = self._select_rule(ch, min(remaining, entry.remaining))
                if rule is None:
                    break

                output = [rule.render(ch * rule.length, tuple(output))]
                entry.remaining -= rule.length
                remaining -= rule.length

            if entry.remaining:
                break

            stack.pop()
            output = _concat(entry.buffer, output)

        if not remaining:
            return output

        if can_open:
            stack.append(DelimiterStackEntry(ch, remaining, output))
            return []

        _append_literal(output, ch * remaining)
        return output

    @staticmethod
    def _find_opener(stack: List[DelimiterStackEntry], ch: str) -> int | None:
        """
        Find the innermost open entry for a delimiter character.

        Args:
            stack: Open delimiter entries
            ch: Delimiter character

        Returns:
            Index of the entry, or None if there is none
        """
        for index in range(len(stack) - 1, -1, -1):
            if stack[index].character == ch:
                return index

        return None

    def _select_rule(self, ch: str, available: int) -> DelimiterRule | None:
        """
        Pick the longest delimiter rule both sides can supply.

        Args:
            ch: Delimiter character
            available: Characters available on both the open and the close side

        Returns:
            The delimiter rule, or None if every rule needs more characters
        """
        for rule in self._registry.delimiter_rules(ch):
            if rule.length <= available:
                return rule

        return None

    @staticmethod
    def _flush_entry(entry: DelimiterStackEntry, output: List[Span]) -> List[Span]:
        """
        Turn an unmatched entry back into literal text.

        Args:
            entry: The stack entry being discarded
            output: Output buffered after the entry

        Returns:
            The entry's buffer, its unused delimiters, then `output`
        """
        result = list(entry.buffer)
        _append_literal(result, entry.character * entry.remaining)
        return _concat(result, output)
