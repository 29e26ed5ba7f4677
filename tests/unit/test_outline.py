"""Tests for outline extraction and markup stripping."""

from engine.revision.outline import (
    extract_structure,
    flatten_html,
    has_frame_markers,
    strip_markup,
    strip_tags,
)


class TestExtractStructure:
    """Tests for extract_structure."""

    def test_headings_and_blocks_in_order(self) -> None:
        html = """
        <html><body>
            <h1>Main</h1>
            <p>Intro <b>bold</b> text.</p>
            <h2>Section</h2>
            <ul><li>One</li><li>Two</li></ul>
            <script>ignored()</script>
        </body></html>
        """
        structure = extract_structure(html)

        assert structure.outline == "H1: Main\nH2: Section"
        assert structure.text == "Main\nIntro bold text.\nSection\nOne\nTwo"
        assert structure.has_frames is False

    def test_nested_blocks_not_duplicated(self) -> None:
        structure = extract_structure("<blockquote><p>Quoted</p></blockquote>")

        assert structure.blocks == ["Quoted"]

    def test_falls_back_to_body_text(self) -> None:
        structure = extract_structure("<div>Just a div</div>")

        assert structure.headings == []
        assert structure.text == "Just a div"

    def test_loose_container_text_kept_in_order(self) -> None:
        """Text directly inside divs and inline wrappers is not dropped."""
        html = (
            "<h1>Guide</h1><div class='intro'>Critical intro sentence in a div.</div>"
            "<p>Second paragraph.</p><div>Closing <span>remark in spans</span>.</div>"
        )
        structure = extract_structure(html)

        assert structure.blocks == [
            "Guide",
            "Critical intro sentence in a div.",
            "Second paragraph.",
            "Closing remark in spans.",
        ]

    def test_text_between_blocks_in_one_container(self) -> None:
        html = "<body><section>Lead-in<p>Body</p>Tail <b>note</b><br>After break</section></body>"

        assert extract_structure(html).blocks == ["Lead-in", "Body", "Tail note", "After break"]

    def test_head_text_ignored(self) -> None:
        structure = extract_structure("<html><head><title>Tab title</title></head><p>Body</p></html>")

        assert structure.blocks == ["Body"]

    def test_decoded_tags_removed(self) -> None:
        structure = extract_structure("<p>&lt;div class=&quot;x&quot;&gt;Text&lt;/div&gt;</p>")

        assert structure.text == "Text"

    def test_frame_markers(self) -> None:
        assert has_frame_markers('<iframe id="mainFrame" src="/x"></iframe>') is True
        assert extract_structure('<div class="se-main-container"><p>x</p></div>').has_frames is True
        assert has_frame_markers("<p>plain</p>") is False


class TestFlatten:
    """Tests for flatten_html and strip_tags."""

    def test_flatten(self) -> None:
        assert flatten_html("<div><p>A</p>\n\n<p>B   C</p><style>x{}</style></div>") == "A B C"

    def test_strip_tags(self) -> None:
        assert strip_tags("a <span>b</span> c") == "a b c"


class TestStripMarkup:
    """Tests for strip_markup."""

    def test_plain_text_unchanged(self) -> None:
        text = "Heading\n\nA paragraph."
        assert strip_markup(text) == text

    def test_html_output(self) -> None:
        result = strip_markup("<h1>Title</h1><p>Body <em>text</em></p>")

        assert "<" not in result
        assert result.splitlines()[0] == "Title"
        assert "Body text" in result

    def test_markdown_output(self) -> None:
        result = strip_markup("## Title\n\nSome **bold** and `code`.\n```\nblock\n```")

        assert result == "Title\n\nSome bold and code.\nblock"

    def test_collapses_blank_lines(self) -> None:
        assert strip_markup("a\n\n\n\nb") == "a\n\nb"
