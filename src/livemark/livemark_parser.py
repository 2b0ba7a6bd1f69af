"""
Parser facade tying the grammar, classifier and render state together.
"""

import logging
from typing import Dict, List, Mapping, Sequence, Tuple

from linediff import EditOperation, diff_lines

from livemark.livemark_block_classifier import BlockClassifier
from livemark.livemark_config import LivemarkConfig
from livemark.livemark_exceptions import ConfigError
from livemark.livemark_grammar_registry import GrammarRegistry, RuleOverrides
from livemark.livemark_inline_formatter import InlineFormatter
from livemark.livemark_render_state import RenderState
from livemark.livemark_span import RenderedLine, Span


def _with_disabled(overrides: RuleOverrides | None, disabled: Dict[str, None]) -> List[Tuple[str, object]]:
    """
    Combine configured rule disables with explicit overrides; explicit overrides win.

    Args:
        overrides: Explicit overrides, as a mapping or a sequence of pairs
        disabled: Names to disable

    Returns:
        The combined overrides as (name, rule) pairs
    """
    if overrides is None:
        pairs: List[Tuple[str, object]] = []

    elif isinstance(overrides, Mapping):
        pairs = list(overrides.items())

    else:
        pairs = [tuple(pair) for pair in overrides]

    named = {name for name, _rule in pairs}
    return [(name, None) for name in disabled if name not in named] + pairs


class LivemarkParser:
    """
    Renders documents line by line and tracks the result.

    Each call to `parse` replaces the parser's render state wholesale.  A parser is not safe to use from
    several threads at once; the grammar registry it holds is immutable and can be shared.
    """

    def __init__(
        self,
        line_grammar: RuleOverrides | None = None,
        inline_grammar: RuleOverrides | None = None,
        config: LivemarkConfig | None = None,
        registry: GrammarRegistry | None = None
    ) -> None:
        """
        Initialize the parser.

        Args:
            line_grammar: Overrides for the default line grammar
            inline_grammar: Overrides for the default inline grammar
            config: Optional configuration
            registry: A prebuilt registry to use instead of building one from the grammars

        Raises:
            ConfigError: If the configuration is invalid
            GrammarError: If the grammar is invalid
        """
        self._config = config or LivemarkConfig.create_default()
        errors = self._config.validate()
        if errors:
            raise ConfigError("Invalid configuration: " + "; ".join(errors), {'errors': errors})

        if registry is None:
            registry = GrammarRegistry.create(
                _with_disabled(line_grammar, self._config.line_overrides()),
                _with_disabled(inline_grammar, self._config.inline_overrides())
            )

        self._registry = registry
        self._inline = InlineFormatter(registry, self._config.strict_flanking_delimiters)
        self._classifier = BlockClassifier(registry, self._inline)
        self._state = RenderState()
        self._logger = logging.getLogger("LivemarkParser")

    @property
    def registry(self) -> GrammarRegistry:
        """The grammar registry."""
        return self._registry

    @property
    def state(self) -> RenderState:
        """The render state from the most recent parse."""
        return self._state

    def parse(self, lines: Sequence[str]) -> List[RenderedLine]:
        """
        Render a whole document.

        Args:
            lines: The document lines, without line terminators

        Returns:
            One rendered line per input line
        """
        rendered, line_types = self._classifier.classify(lines)
        self._state = RenderState(lines, rendered, line_types)
        self._logger.debug("parsed %d line(s)", len(rendered))
        return rendered

    def parse_text(self, text: str) -> List[RenderedLine]:
        """
        Render a document held as a single string.

        Args:
            text: The document text; lines are separated by "\\n"

        Returns:
            One rendered line per line of text
        """
        return self.parse(text.split('\n'))

    def parse_inline(self, text: str) -> Tuple[Span, ...]:
        """
        Format inline text without any line level rules.

        Args:
            text: The raw text

        Returns:
            The inline spans
        """
        return self._inline.format_spans(text)

    def line_type_of(self, index: int) -> str:
        """
        Get the type of a line from the most recent parse.

        Args:
            index: Line number (0-indexed)

        Returns:
            The name of the rule that classified the line

        Raises:
            LineRangeError: If the line does not exist
        """
        return self._state.line_type_of(index)

    @staticmethod
    def diff(old_rendered: Sequence[RenderedLine], new_rendered: Sequence[RenderedLine]) -> List[EditOperation]:
        """
        Compute the edit script between two renderings.

        Args:
            old_rendered: The previous rendering
            new_rendered: The new rendering

        Returns:
            The edit script transforming `old_rendered` into `new_rendered`
        """
        return diff_lines(old_rendered, new_rendered)

    def update(self, lines: Sequence[str]) -> List[EditOperation]:
        """
        Reparse a document and compute the changes from the previous rendering.

        Args:
            lines: The new document lines

        Returns:
            The edit script from the previous rendering to the new one
        """
        previous = self._state.rendered_lines
        rendered = self.parse(lines)
        return self.diff(previous, rendered)
