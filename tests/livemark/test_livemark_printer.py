"""Tests for the span tree printer."""

from livemark.livemark_span import RenderedLine


class TestPrinter:
    """Test printing rendered lines."""

    def test_empty_line(self, printer):
        """Test the empty line placeholder."""
        line = RenderedLine.empty()
        assert printer.format_line(line) == "Line\n  empty_line"

    def test_nested_nodes(self, parser, printer):
        """Test inline nodes print with their children indented."""
        rendered = parser.parse(["**b**"])
        assert printer.format_line(rendered[0], 0, "Default") == "\n".join([
            "Line 0 [Default]",
            "  StrongEmphasis",
            "    mark: '**'",
            "    content: 'b'",
            "    mark: '**'",
        ])

    def test_line_attributes(self, parser, printer):
        """Test line names and attributes appear in the header."""
        rendered = parser.parse(["# T"])
        output = printer.format_line(rendered[0], 0, "ATXHeading")
        assert output.splitlines()[0] == "Line 0 [ATXHeading] ATXHeading level='1'"

    def test_span_attributes(self, parser, printer):
        """Test span attributes appear on the node label."""
        rendered = parser.parse(["https://a.io"])
        assert printer.format_line(rendered[0]).splitlines()[1] == "  URL href='https://a.io'"

    def test_named_mark(self, parser, printer):
        """Test a named leaf prints its name."""
        rendered = parser.parse(["```py"])
        assert printer.format_line(rendered[0]).splitlines()[-1] == "  CodeLanguage: 'py'"

    def test_format_state(self, parser, printer):
        """Test printing every line of a parse."""
        parser.parse(["a", "> b"])
        output = printer.format_state(parser.state)
        assert output == "\n".join([
            "Line 0 [Default]",
            "  content: 'a'",
            "Line 1 [BlockQuote] BlockQuote",
            "  mark: '&gt;'",
            "  content: ' b'",
        ])

    def test_printer_reusable(self, parser, printer):
        """Test the printer starts fresh on every call."""
        rendered = parser.parse(["x"])
        assert printer.format_line(rendered[0]) == printer.format_line(rendered[0])
