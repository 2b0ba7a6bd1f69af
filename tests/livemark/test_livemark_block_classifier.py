"""Tests for the block classifier."""

import logging

from livemark.livemark_block_classifier import DEFAULT_LINE_TYPE, ClassifiedLine
from livemark.livemark_span import RenderedLine, content, mark


class TestCodeBlocks:
    """Test fenced code block handling."""

    def test_code_block_with_language(self, classifier):
        """Test a block opens, holds content verbatim, and closes."""
        rendered, types = classifier.classify(["```js", "let x = *1* < 2;", "```", "after"])

        assert types == ["CodeBlock", "CodeBlock", "CodeBlock", DEFAULT_LINE_TYPE]
        assert rendered[0].name == "CodeBlock"
        assert rendered[0].attribute("language") == "js"
        assert rendered[0].spans == (mark("```"), mark("js", "CodeLanguage"))
        assert rendered[1] == RenderedLine((content("let x = *1* &lt; 2;"),), "CodeBlock")
        assert rendered[2] == RenderedLine((mark("```"),), "CodeBlock")
        assert rendered[3] == RenderedLine((content("after"),))

    def test_no_language(self, classifier):
        """Test a fence without a language has no language attribute."""
        rendered, _types = classifier.classify(["```", "```"])
        assert rendered[0].attribute("language") is None

    def test_longer_fence_closes(self, classifier):
        """Test a closing run may be longer than the opening one."""
        _rendered, types = classifier.classify(["```", "x", "`````", "y"])
        assert types == ["CodeBlock", "CodeBlock", "CodeBlock", DEFAULT_LINE_TYPE]

    def test_shorter_fence_does_not_close(self, classifier):
        """Test a closing run shorter than the opening one is content."""
        rendered, types = classifier.classify(["````", "```", "````"])
        assert types == ["CodeBlock"] * 3
        assert rendered[1] == RenderedLine((content("```"),), "CodeBlock")

    def test_unclosed_block(self, classifier, caplog):
        """Test a block left open runs to the end of the document and is logged."""
        caplog.set_level(logging.DEBUG, logger="BlockClassifier")
        rendered, types = classifier.classify(["```", "# not a heading", "> not a quote"])
        assert types == ["CodeBlock"] * 3
        assert rendered[1] == RenderedLine((content("# not a heading"),), "CodeBlock")
        assert "document ended inside unclosed 'CodeBlock' block" in caplog.text

    def test_closed_block_not_logged(self, classifier, caplog):
        """Test nothing is logged when every block closes."""
        caplog.set_level(logging.DEBUG, logger="BlockClassifier")
        classifier.classify(["```", "x", "```"])
        assert "unclosed" not in caplog.text

    def test_blocks_do_not_nest(self, classifier):
        """Test an opening fence inside a block is content."""
        rendered, types = classifier.classify(["```", "```js", "```", "text"])
        assert types == ["CodeBlock", "CodeBlock", "CodeBlock", DEFAULT_LINE_TYPE]
        assert rendered[1] == RenderedLine((content("```js"),), "CodeBlock")

    def test_empty_line_in_block(self, classifier):
        """Test an empty line inside a block is the placeholder with the block name."""
        rendered, _types = classifier.classify(["```", "", "```"])
        assert rendered[1].is_empty()
        assert rendered[1].name == "CodeBlock"


class TestLineRules:
    """Test single line rules."""

    def test_heading(self, classifier):
        """Test a heading carries its level."""
        rendered, types = classifier.classify(["### Title *x*"])
        assert types == ["ATXHeading"]
        assert rendered[0].name == "ATXHeading"
        assert rendered[0].attribute("level") == "3"
        assert rendered[0].spans[0] == mark("### ")
        assert rendered[0].spans[-1].name == "Emphasis"

    def test_heading_needs_space(self, classifier):
        """Test a hash without a following space is text."""
        _rendered, types = classifier.classify(["#hashtag", "####### seven"])
        assert types == [DEFAULT_LINE_TYPE, DEFAULT_LINE_TYPE]

    def test_block_quote(self, classifier):
        """Test a quote line formats its text inline."""
        rendered, types = classifier.classify(["> quoted **text**"])
        assert types == ["BlockQuote"]
        assert rendered[0].spans[0] == mark("&gt;")
        assert rendered[0].spans[1] == content(" quoted ")
        assert rendered[0].spans[2].name == "StrongEmphasis"

    def test_thematic_break(self, classifier):
        """Test thematic breaks of each character."""
        _rendered, types = classifier.classify(["***", "- - -", "___", "**bold**"])
        assert types == ["ThematicBreak", "ThematicBreak", "ThematicBreak", DEFAULT_LINE_TYPE]

    def test_indented_lines_keep_whitespace(self, classifier):
        """Test leading whitespace is kept as content."""
        rendered, _types = classifier.classify(["  # Title", "  ```", "  ```"])
        assert rendered[0].spans[0] == content("  ")
        assert rendered[1].spans[0] == content("  ")
        assert rendered[0].text() == "  # Title"


class TestParagraphs:
    """Test lines that match no line rule."""

    def test_default_type(self, classifier):
        """Test a plain line has the default type and no element name."""
        rendered, types = classifier.classify(["just text"])
        assert types == [DEFAULT_LINE_TYPE]
        assert rendered[0].name is None

    def test_empty_line(self, classifier):
        """Test an empty line renders as the placeholder."""
        rendered, types = classifier.classify(["a", "", "b"])
        assert types == [DEFAULT_LINE_TYPE] * 3
        assert rendered[1] == RenderedLine.empty()

    def test_one_rendering_per_line(self, classifier):
        """Test the output has exactly one entry per input line."""
        lines = ["# h", "", "```", "", "```", "> q", "---", "p"]
        rendered, types = classifier.classify(lines)
        assert len(rendered) == len(lines)
        assert len(types) == len(lines)

    def test_empty_document(self, classifier):
        """Test an empty document."""
        assert classifier.classify([]) == ([], [])


class TestClassifyLine:
    """Test classifying a line at a time."""

    def test_open_block_carried(self, classifier):
        """Test the open block is returned for the next line."""
        first = classifier.classify_line("```py", None)
        assert isinstance(first, ClassifiedLine)
        assert first.open_block is not None
        assert first.open_block.name == "CodeBlock"

        second = classifier.classify_line("print(1)", first.open_block)
        assert second.line_type == "CodeBlock"
        assert second.open_block == first.open_block

        third = classifier.classify_line("```", second.open_block)
        assert third.open_block is None

    def test_line_rule_leaves_no_block(self, classifier):
        """Test a line rule does not open a block."""
        result = classifier.classify_line("# h", None)
        assert result.open_block is None
        assert result.line_type == "ATXHeading"
