"""Tests for the HTML renderer."""

from livemark.livemark_span import RenderedLine, content, element


class TestLines:
    """Test line level HTML."""

    def test_plain_line(self, parser, html_renderer):
        """Test a paragraph line is a bare line div."""
        rendered = parser.parse(["hello"])
        assert html_renderer.render_line(rendered[0]) == '<div class="md-line">hello</div>'

    def test_empty_line(self, html_renderer):
        """Test the empty line placeholder renders as a break."""
        assert html_renderer.render_line(RenderedLine.empty()) == '<div class="md-line"><br></div>'

    def test_heading(self, parser, html_renderer):
        """Test headings use the level attribute."""
        rendered = parser.parse(["## Hi"])
        assert html_renderer.render_line(rendered[0]) == (
            '<div class="md-line"><h2 class="md-heading"><span class="md-mark">## </span>Hi</h2></div>'
        )

    def test_code_block(self, parser, html_renderer):
        """Test code block lines and the language marker."""
        rendered = parser.parse(["```js", "a < b", "```"])
        assert html_renderer.render_line(rendered[0]) == (
            '<div class="md-line"><code class="md-code-block"><span class="md-mark">```</span>'
            '<span class="md-mark md-code-lang">js</span></code></div>'
        )
        assert html_renderer.render_line(rendered[1]) == (
            '<div class="md-line"><code class="md-code-block">a &lt; b</code></div>'
        )

    def test_block_quote(self, parser, html_renderer):
        """Test quote lines."""
        rendered = parser.parse(["> q"])
        assert html_renderer.render_line(rendered[0]) == (
            '<div class="md-line"><div class="md-quote"><span class="md-mark">&gt;</span> q</div></div>'
        )

    def test_thematic_break(self, parser, html_renderer):
        """Test thematic breaks."""
        rendered = parser.parse(["---"])
        assert html_renderer.render_line(rendered[0]) == (
            '<div class="md-line"><div class="md-hr"><span class="md-mark">---</span></div></div>'
        )

    def test_custom_line_name(self, html_renderer):
        """Test an unknown line element gets a class from its name."""
        line = RenderedLine((content("x"),), "Task")
        assert html_renderer.render_line(line) == '<div class="md-line"><div class="md-task">x</div></div>'

    def test_document(self, parser, html_renderer):
        """Test a document is the concatenation of its lines."""
        rendered = parser.parse(["a", "", "b"])
        assert html_renderer.render_document(rendered) == (
            '<div class="md-line">a</div><div class="md-line"><br></div><div class="md-line">b</div>'
        )


class TestInline:
    """Test inline HTML."""

    def test_emphasis_tags(self, parser, html_renderer):
        """Test delimiter nodes map to HTML tags."""
        spans = parser.parse_inline("**b** *i* __u__ ~~s~~")
        html = "".join(html_renderer.visit(span) for span in spans)
        assert html == (
            '<b><span class="md-mark">**</span>b<span class="md-mark">**</span></b> '
            '<em><span class="md-mark">*</span>i<span class="md-mark">*</span></em> '
            '<ins><span class="md-mark">__</span>u<span class="md-mark">__</span></ins> '
            '<del><span class="md-mark">~~</span>s<span class="md-mark">~~</span></del>'
        )

    def test_inline_code(self, parser, html_renderer):
        """Test code spans."""
        spans = parser.parse_inline("`x`")
        assert html_renderer.visit(spans[0]) == (
            '<code class="md-code"><span class="md-mark">`</span>x<span class="md-mark">`</span></code>'
        )

    def test_url_href_escaped(self, parser, html_renderer):
        """Test link targets are escaped in attributes."""
        spans = parser.parse_inline('https://x.io/?a=1&b="2"')
        assert html_renderer.visit(spans[0]) == (
            '<a href="https://x.io/?a=1&amp;b=&quot;2&quot;">https://x.io/?a=1&amp;b="2"</a>'
        )

    def test_email(self, parser, html_renderer):
        """Test email links."""
        spans = parser.parse_inline("me@example.com")
        assert html_renderer.visit(spans[0]) == '<a href="mailto:me@example.com">me@example.com</a>'

    def test_autolink(self, parser, html_renderer):
        """Test the angle brackets of an autolink stay outside the anchor."""
        spans = parser.parse_inline("<https://a.io>")
        assert html_renderer.visit(spans[0]) == (
            '<span><span class="md-mark">&lt;</span><a href="https://a.io">https://a.io</a>'
            '<span class="md-mark">&gt;</span></span>'
        )

    def test_escape(self, parser, html_renderer):
        """Test backslash escapes."""
        spans = parser.parse_inline("\\*")
        assert html_renderer.visit(spans[0]) == (
            '<span class="md-escape"><span class="md-mark">\\</span>*</span>'
        )

    def test_custom_node(self, html_renderer):
        """Test an unknown inline node gets a class from its name."""
        node = element("Mention", (content("@bob"),))
        assert html_renderer.visit(node) == '<span class="md-mention">@bob</span>'

    def test_user_markup_never_structure(self, parser, html_renderer):
        """Test raw HTML in the source is escaped in the output."""
        html = html_renderer.render_document(parser.parse(["<b>x</b> & <i>"]))
        assert "<b>" not in html
        assert "&lt;b&gt;x&lt;/b&gt; &amp; &lt;i&gt;" in html
