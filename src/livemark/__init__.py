"""
Line oriented Markdown-like rendering.

Each line of a document renders to a `RenderedLine` of spans that keep every source character, syntax
markers included, so a host can show or hide the markers and update only the lines that changed.
"""

from livemark.livemark_block_classifier import DEFAULT_LINE_TYPE, BlockClassifier, ClassifiedLine, OpenBlock
from livemark.livemark_config import LivemarkConfig
from livemark.livemark_default_grammar import default_inline_grammar, default_line_grammar
from livemark.livemark_exceptions import ConfigError, GrammarError, LineRangeError, LivemarkError
from livemark.livemark_grammar import (
    BlockRule,
    DelimiterRule,
    InlineGrammarRule,
    LineGrammarRule,
    LineRule,
    MatchRule,
    RegexLineRule,
    RegexMatchRule,
    RuleKind,
)
from livemark.livemark_grammar_registry import GrammarRegistry, RuleEntry, RuleOverrides, merge_rules
from livemark.livemark_html_renderer import LivemarkHTMLRenderer
from livemark.livemark_inline_formatter import InlineFormatter
from livemark.livemark_parser import LivemarkParser
from livemark.livemark_printer import LivemarkPrinter
from livemark.livemark_render_state import LineInfo, RenderState
from livemark.livemark_span import EMPTY_LINE_SPAN, RenderedLine, Span, SpanKind, content, element, escape_html, mark
from livemark.livemark_span_visitor import SpanVisitor

__all__ = [
    # Exceptions
    'LivemarkError',
    'GrammarError',
    'LineRangeError',
    'ConfigError',
    # Spans
    'SpanKind',
    'Span',
    'RenderedLine',
    'EMPTY_LINE_SPAN',
    'mark',
    'content',
    'element',
    'escape_html',
    # Grammar
    'RuleKind',
    'LineGrammarRule',
    'InlineGrammarRule',
    'LineRule',
    'BlockRule',
    'MatchRule',
    'DelimiterRule',
    'RegexLineRule',
    'RegexMatchRule',
    'RuleEntry',
    'RuleOverrides',
    'GrammarRegistry',
    'merge_rules',
    'default_line_grammar',
    'default_inline_grammar',
    # Rendering
    'InlineFormatter',
    'DEFAULT_LINE_TYPE',
    'OpenBlock',
    'ClassifiedLine',
    'BlockClassifier',
    'LineInfo',
    'RenderState',
    'LivemarkConfig',
    'LivemarkParser',
    # Output
    'SpanVisitor',
    'LivemarkHTMLRenderer',
    'LivemarkPrinter',
]
