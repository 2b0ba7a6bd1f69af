"""
Block level classification of document lines.
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Sequence, Tuple

from livemark.livemark_grammar import BlockRule, LineRule, RuleKind
from livemark.livemark_grammar_registry import GrammarRegistry
from livemark.livemark_inline_formatter import InlineFormatter
from livemark.livemark_span import RenderedLine


DEFAULT_LINE_TYPE = "Default"


@dataclass(frozen=True)
class OpenBlock:
    """
    A block that has been opened and not yet closed.

    Attributes:
        name: Name of the block rule, used as the type of every line in the block
        rule: The block rule
        capture: The capture returned when the block was opened
    """
    name: str
    rule: BlockRule
    capture: Any


@dataclass(frozen=True)
class ClassifiedLine:
    """
    The outcome of classifying one line.

    Attributes:
        rendered: The rendered line
        line_type: Name of the rule that produced the line, or DEFAULT_LINE_TYPE
        open_block: The block still open after this line, or None
    """
    rendered: RenderedLine
    line_type: str
    open_block: OpenBlock | None


class BlockClassifier:
    """
    Classifies and renders the lines of a document.

    The classifier is a two state machine.  While scanning, the line grammar is tried in priority order:
    a block rule that opens moves the classifier into that block, a line rule renders just its own line,
    and anything else is a paragraph line handed to the inline formatter.  Inside a block, every line is
    offered to the block's close check and otherwise rendered as block content; no other rule is tried
    until the block closes, so blocks never nest.
    """

    def __init__(self, registry: GrammarRegistry, inline_formatter: InlineFormatter) -> None:
        """
        Initialize the classifier.

        Args:
            registry: Grammar registry supplying the line grammar
            inline_formatter: Formatter for inline content
        """
        self._line_entries = registry.line_entries()
        self._inline = inline_formatter
        self._logger = logging.getLogger("BlockClassifier")

    def classify(self, lines: Sequence[str]) -> Tuple[List[RenderedLine], List[str]]:
        """
        Classify and render a whole document.

        Args:
            lines: The document lines, without line terminators

        Returns:
            A tuple of (rendered lines, line types), one entry per input line
        """
        rendered: List[RenderedLine] = []
        line_types: List[str] = []
        open_block: OpenBlock | None = None

        for line in lines:
            result = self.classify_line(line, open_block)
            rendered.append(result.rendered)
            line_types.append(result.line_type)
            open_block = result.open_block

        if open_block is not None:
            self._logger.debug("document ended inside unclosed '%s' block", open_block.name)

        return rendered, line_types

    def classify_line(self, line: str, open_block: OpenBlock | None) -> ClassifiedLine:
        """
        Classify and render a single line.

        Args:
            line: The raw line text
            open_block: The block open before this line, or None

        Returns:
            The classification result, including the block state to carry to the next line
        """
        if open_block is not None:
            result = self._continue_block(line, open_block)

        else:
            result = self._scan(line)

        if line or result.rendered.is_empty():
            return result

        # An empty line always occupies its slot with the placeholder
        empty = RenderedLine.empty(result.rendered.name, result.rendered.attributes)
        return ClassifiedLine(empty, result.line_type, result.open_block)

    def _continue_block(self, line: str, open_block: OpenBlock) -> ClassifiedLine:
        """
        Handle a line inside an open block.

        Args:
            line: The raw line text
            open_block: The open block

        Returns:
            The classification result
        """
        closing = open_block.rule.close(line, open_block.capture, self._inline)
        if closing is not None:
            return ClassifiedLine(closing, open_block.name, None)

        return ClassifiedLine(open_block.rule.render_middle(line, self._inline), open_block.name, open_block)

    def _scan(self, line: str) -> ClassifiedLine:
        """
        Handle a line outside any block.

        Args:
            line: The raw line text

        Returns:
            The classification result
        """
        for entry in self._line_entries:
            if entry.kind == RuleKind.BLOCK:
                block_rule = entry.rule
                assert isinstance(block_rule, BlockRule)
                opened = block_rule.open(line, self._inline)
                if opened is None:
                    continue

                capture, rendered = opened
                return ClassifiedLine(rendered, entry.name, OpenBlock(entry.name, block_rule, capture))

            line_rule = entry.rule
            assert isinstance(line_rule, LineRule)
            capture = line_rule.match(line)
            if capture is None:
                continue

            return ClassifiedLine(line_rule.render(capture, self._inline), entry.name, None)

        return ClassifiedLine(self._inline.format_line(line), DEFAULT_LINE_TYPE, None)
