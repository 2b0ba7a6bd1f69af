"""Shared fixtures and utilities for livemark tests."""

import pytest
from typing import List, Sequence

from livemark.livemark_block_classifier import BlockClassifier
from livemark.livemark_grammar_registry import GrammarRegistry
from livemark.livemark_html_renderer import LivemarkHTMLRenderer
from livemark.livemark_inline_formatter import InlineFormatter
from livemark.livemark_parser import LivemarkParser
from livemark.livemark_printer import LivemarkPrinter
from livemark.livemark_span import Span


@pytest.fixture
def registry():
    """Create a registry holding the default grammar."""
    return GrammarRegistry.create()


@pytest.fixture
def formatter(registry):
    """Create an inline formatter for the default grammar."""
    return InlineFormatter(registry)


@pytest.fixture
def classifier(registry, formatter):
    """Create a block classifier for the default grammar."""
    return BlockClassifier(registry, formatter)


@pytest.fixture
def parser():
    """Create a parser with the default grammar."""
    return LivemarkParser()


@pytest.fixture
def html_renderer():
    """Create an HTML renderer."""
    return LivemarkHTMLRenderer()


@pytest.fixture
def printer():
    """Create a span tree printer."""
    return LivemarkPrinter()


class SpanTestHelpers:
    """Helper utilities for inspecting spans."""

    @staticmethod
    def nodes(spans: Sequence[Span], name: str) -> List[Span]:
        """Find every span with a given name, at any depth."""
        return [node for span in spans for node in span.walk() if node.name == name]

    @staticmethod
    def names(spans: Sequence[Span]) -> List[str | None]:
        """Get the names of the top level spans."""
        return [span.name for span in spans]

    @staticmethod
    def markup(spans: Sequence[Span]) -> str:
        """Get the escaped source text covered by spans."""
        return "".join(span.markup_text() for span in spans)


@pytest.fixture
def helpers():
    """Provide span helper utilities."""
    return SpanTestHelpers
