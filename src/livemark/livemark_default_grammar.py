"""
The built-in line and inline grammars.
"""

import re
from typing import TYPE_CHECKING, List, Tuple

from livemark.livemark_grammar import (
    BlockRule, DelimiterRule, InlineGrammarRule, LineGrammarRule, MatchRule, RegexLineRule, RegexMatchRule
)
from livemark.livemark_span import RenderedLine, Span, content, element, escape_html, mark

if TYPE_CHECKING:
    from livemark.livemark_inline_formatter import InlineFormatter


def _indent_spans(indent: str) -> Tuple[Span, ...]:
    """Leading whitespace of a line, kept as content so the line text is preserved."""
    if not indent:
        return ()

    return (content(escape_html(indent)),)


def _render_thematic_break(match: re.Match, inline: "InlineFormatter") -> RenderedLine:
    spans = _indent_spans(match.group('indent')) + (mark(escape_html(match.group('mark'))),)
    if match.group('end'):
        spans += (content(escape_html(match.group('end'))),)

    return RenderedLine(spans, "ThematicBreak")


def _render_atx_heading(match: re.Match, inline: "InlineFormatter") -> RenderedLine:
    heading_mark = match.group('mark')
    level = len(heading_mark) - 1
    spans = _indent_spans(match.group('indent')) + (mark(escape_html(heading_mark)),)
    spans += inline.format_spans(match.group('text'))
    return RenderedLine(spans, "ATXHeading", (("level", str(level)),))


def _render_block_quote(match: re.Match, inline: "InlineFormatter") -> RenderedLine:
    spans = _indent_spans(match.group('indent')) + (mark(escape_html(match.group('mark'))),)
    spans += inline.format_spans(match.group('text'))
    return RenderedLine(spans, "BlockQuote")


class FencedCodeBlockRule(BlockRule):
    """
    A fenced code block.

    The block opens on a run of three or more backticks, optionally followed by a language name, and
    closes on a line holding only a backtick run at least as long as the opening one.  Lines in between
    are kept verbatim.
    """

    _OPEN_PATTERN = re.compile(r'(?P<indent>\s*)(?P<mark>`{3,})(?P<space>\s*)(?P<lang>[^\s`]*)(?P<rest>[^`]*)$')

    def __init__(self, name: str = "CodeBlock") -> None:
        """
        Initialize the rule.

        Args:
            name: Line element name used for every line of the block
        """
        self._name = name

    def open(self, line: str, inline: "InlineFormatter") -> Tuple[re.Pattern, RenderedLine] | None:
        match = self._OPEN_PATTERN.match(line)
        if match is None:
            return None

        fence = match.group('mark')
        language = match.group('lang')
        spans = _indent_spans(match.group('indent')) + (mark(fence + match.group('space')),)
        if language:
            spans += (mark(escape_html(language), "CodeLanguage"),)

        if match.group('rest'):
            spans += (mark(escape_html(match.group('rest'))),)

        attributes = (("language", language),) if language else ()
        close_pattern = re.compile(r'(?P<indent>\s*)(?P<mark>`{%d,}\s*)$' % len(fence))
        return close_pattern, RenderedLine(spans, self._name, attributes)

    def close(self, line: str, capture: re.Pattern, inline: "InlineFormatter") -> RenderedLine | None:
        match = capture.match(line)
        if match is None:
            return None

        spans = _indent_spans(match.group('indent')) + (mark(match.group('mark')),)
        return RenderedLine(spans, self._name)

    def render_middle(self, line: str, inline: "InlineFormatter") -> RenderedLine:
        if not line:
            return RenderedLine.empty(self._name)

        return RenderedLine((content(escape_html(line)),), self._name)


class InlineCodeRule(MatchRule):
    """
    An inline code span.

    A run of N backticks opens the span, which ends at the next run of exactly N backticks.  The rule
    only starts at the beginning of a backtick run, so an unmatched run stays literal as a whole.
    """

    def match(self, text: str, pos: int) -> Tuple[int, Tuple[str, str]] | None:
        if text[pos] != '`' or (pos > 0 and text[pos - 1] == '`'):
            return None

        end = pos + 1
        while end < len(text) and text[end] == '`':
            end += 1

        size = end - pos
        run = 0
        for i in range(end, len(text)):
            if text[i] != '`':
                run = 0
                continue

            run += 1
            if run == size and (i + 1 >= len(text) or text[i + 1] != '`'):
                return i + 1 - pos, (text[pos:end], text[end:i + 1 - size])

        return None

    def render(self, capture: Tuple[str, str], inline: "InlineFormatter") -> Span:
        fence, code = capture
        return element("InlineCode", (mark(fence), content(escape_html(code)), mark(fence)))


class BareURLRule(MatchRule):
    """
    A bare `http://` or `https://` URL.

    Trailing sentence punctuation and unbalanced closing parentheses are not part of the URL.
    """

    _URL_PATTERN = re.compile(
        r'(https?://[a-z\d](?:[a-z\d-]{0,61}[a-z\d])?(?:\.[a-z\d](?:[a-z\d-]{0,61}[a-z\d])?)*(?::\d{1,5})?)'
        r'((?:/[^\s<>]*)?)',
        re.IGNORECASE
    )
    _TRAILING_PUNCTUATION = frozenset("?!.,:*_~")

    def match(self, text: str, pos: int) -> Tuple[int, str] | None:
        found = self._URL_PATTERN.match(text, pos)
        if found is None:
            return None

        path = found.group(2)
        end = len(path)
        while end > 0:
            last = path[end - 1]
            if last in self._TRAILING_PUNCTUATION:
                end -= 1
                continue

            if last == ')' and path.count(')', 0, end) > path.count('(', 0, end):
                end -= 1
                continue

            break

        url = found.group(1) + path[:end]
        return len(url), url

    def render(self, capture: str, inline: "InlineFormatter") -> Span:
        return element("URL", (content(escape_html(capture)),), (("href", capture),))


def _render_escape(match: re.Match, inline: "InlineFormatter") -> Span:
    return element("Escape", (mark("\\"), content(escape_html(match.group(1)))))


def _render_autolink(match: re.Match, inline: "InlineFormatter") -> Span:
    link = match.group(1)
    href = f"mailto:{link}" if match.group(2) == '@' else link
    return element("Autolink", (mark("&lt;"), content(escape_html(link)), mark("&gt;")), (("href", href),))


_DOMAIN = r'[a-z\d](?:[a-z\d-]{0,61}[a-z\d])?'


class EmailRule(MatchRule):
    """
    A bare email address.

    A match never starts inside a word: the character before it may not be a local part character.
    """

    _LOCAL_CHARACTER = re.compile(r"[\w!#$%&'*+\-./=?^`{|}~]")
    _EMAIL_PATTERN = re.compile(
        r"[a-z\d](?:[\w!#$%&'*+\-./=?^`{|}~]*[a-z\d])?@" + _DOMAIN + r'(?:\.' + _DOMAIN + r')+',
        re.IGNORECASE
    )

    def match(self, text: str, pos: int) -> Tuple[int, str] | None:
        if pos > 0 and self._LOCAL_CHARACTER.match(text[pos - 1]):
            return None

        found = self._EMAIL_PATTERN.match(text, pos)
        if found is None:
            return None

        return found.end() - pos, found.group(0)

    def render(self, capture: str, inline: "InlineFormatter") -> Span:
        return element("Email", (content(escape_html(capture)),), (("href", f"mailto:{capture}"),))


THEMATIC_BREAK = RegexLineRule(
    r'(?P<indent>\s*)(?P<mark>(?:(?:\*\s*){3,})|(?:(?:-\s*){3,})|(?:(?:_\s*){3,}))(?P<end>\s*)$',
    _render_thematic_break
)
ATX_HEADING = RegexLineRule(r'(?P<indent>\s*)(?P<mark>#{1,6}\s)(?P<text>.*)$', _render_atx_heading)
CODE_BLOCK = FencedCodeBlockRule()
BLOCK_QUOTE = RegexLineRule(r'(?P<indent>\s*)(?P<mark>>)(?P<text>.*)$', _render_block_quote)

ESCAPE = RegexMatchRule(r'''\\([!"#$%&'()*+,\-./:;<=>?@\[\\\]^_`{|}~])''', _render_escape)
AUTOLINK = RegexMatchRule(
    re.compile(
        r'<([a-z][a-z\d+.-]{1,31}:[^\s<>]+'
        r"|[a-z\d](?:[\w!#$%&'*+\-./=?^`{|}~]*[a-z\d])?(@)" + _DOMAIN + r'(?:\.' + _DOMAIN + r')*)>',
        re.IGNORECASE
    ),
    _render_autolink
)
INLINE_CODE = InlineCodeRule()
URL = BareURLRule()
EMAIL = EmailRule()
EMPHASIS = DelimiterRule("*_", 1, "Emphasis")
STRONG_EMPHASIS = DelimiterRule("*", 2, "StrongEmphasis")
UNDERLINE = DelimiterRule("_", 2, "Underline")
STRIKETHROUGH = DelimiterRule("~", 2, "Strikethrough")


def default_line_grammar() -> List[Tuple[str, LineGrammarRule]]:
    """Get the default line grammar in priority order."""
    return [
        ("ThematicBreak", THEMATIC_BREAK),
        ("ATXHeading", ATX_HEADING),
        ("CodeBlock", CODE_BLOCK),
        ("BlockQuote", BLOCK_QUOTE),
    ]


def default_inline_grammar() -> List[Tuple[str, InlineGrammarRule]]:
    """Get the default inline grammar in priority order."""
    return [
        ("Escape", ESCAPE),
        ("Autolink", AUTOLINK),
        ("InlineCode", INLINE_CODE),
        ("URL", URL),
        ("Email", EMAIL),
        ("Emphasis", EMPHASIS),
        ("StrongEmphasis", STRONG_EMPHASIS),
        ("Underline", UNDERLINE),
        ("Strikethrough", STRIKETHROUGH),
    ]
