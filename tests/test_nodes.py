"""Tests for the document model and its writers."""

from glossterm.core.nodes import (
    DefinitionList, Emph, HTMLWriter, Note, Para, RawBlock, RawInline, Space,
    Span, Str, clone, stringify, to_html, to_markdown,
)


class TestStringify:
    """Tests for stringify."""

    def test_scalars(self):
        assert stringify(None) == ""
        assert stringify("text") == "text"
        assert stringify(True) == "true"
        assert stringify(3) == "3"

    def test_nodes_drop_markup_and_notes(self):
        span = Span([Emph([Str("big")]), Space(), Str("data"), Note([Para([Str("x")])])])

        assert stringify(span) == "big data"

    def test_raw_content_is_dropped(self):
        assert stringify([Str("a"), RawInline("html", "<b>")]) == "a"

    def test_blocks_are_separated(self):
        assert stringify([Para([Str("one")]), Para([Str("two")])]) == "one\n\ntwo"


class TestClone:
    """Tests for clone."""

    def test_clone_is_independent(self):
        original = [Emph([Str("a")])]
        copied = clone(original)
        copied[0].content.append(Str("b"))
        copied.append(Str("c"))

        assert original == [Emph([Str("a")])]


class TestHTMLWriter:
    """Tests for HTML serialization."""

    def test_escapes_text(self):
        assert to_html([Para([Str("a < b")])]) == "<p>a &lt; b</p>"

    def test_raw_html_passes_through(self):
        assert to_html([RawInline("html", "<b>x</b>")]) == "<b>x</b>"
        assert to_html([RawBlock("latex", "\\x")]) == ""

    def test_notes_become_footnotes(self):
        writer = HTMLWriter()
        body = writer.write([Str("cli"), Note([Para([Str("Defined.")])])])

        assert body.startswith("cli<a href=\"#fn1\"")
        assert '<li id="fn1"><p>Defined.</p>' in writer.footnotes()

    def test_definition_list(self):
        html = to_html([DefinitionList([([Str("api")], [[Para([Str("A.")])]])])])

        assert html == "<dl>\n<dt>api</dt>\n<dd>\n<p>A.</p>\n</dd>\n</dl>"


class TestMarkdownWriter:
    """Tests for Markdown serialization."""

    def test_note_becomes_footnote_reference(self):
        span = Span([Str("cli"), Note([Para([Str("Command-line"), Space(), Str("interface.")])])])

        assert to_markdown([span]) == "cli[^1]\n\n[^1]: Command-line interface."

    def test_span_classes(self):
        assert to_markdown([Span([Str("x")], classes=["glossary"])]) == "[x]{.glossary}"

    def test_definition_list(self):
        dl = DefinitionList([
            ([Str("api")], [[Para([Str("A.")])]]),
            ([Str("cli")], [[Para([Str("C.")])]]),
        ])

        assert to_markdown([dl]) == "api\n\n:   A.\n\ncli\n\n:   C."
