"""Unit tests for HTML sanitizing and snippet production."""

from unittest.mock import Mock

import pytest

from event_calendar.snippets import (
    InMemorySnippetCache,
    SnippetProducer,
    make_snippet_cache_key,
    sanitize_html,
    strip_images,
)


class TestStripImages:
    """Test cases for image removal."""

    def test_removes_bare_img(self):
        assert strip_images('<p>Before<img src="a.png" alt="A">After</p>') == "<p>BeforeAfter</p>"

    def test_removes_legacy_thumb_frame_with_caption(self):
        html = (
            '<div class="thumb tright"><div class="thumbinner">'
            '<a href="/wiki/File:X.png" class="image"><img src="x.png"></a>'
            '<div class="thumbcaption">Caption</div></div></div><p>Text</p>'
        )
        assert strip_images(html) == "<p>Text</p>"

    def test_removes_figure_block(self):
        html = (
            '<figure typeof="mw:File/Thumb"><a href="/wiki/File:X.png"><img src="x.png"></a>'
            '<figcaption>Caption</figcaption></figure><p>Text</p>'
        )
        assert strip_images(html) == "<p>Text</p>"

    def test_removes_inline_wrappers_left_empty(self):
        html = '<p><span typeof="mw:File"><a href="/wiki/File:X.png"><img src="x.png"></a></span>Text</p>'
        assert strip_images(html) == "<p>Text</p>"

    def test_keeps_wrapper_with_other_content(self):
        assert strip_images('<div><img src="x.png">Caption</div>') == "<div>Caption</div>"

    def test_keeps_empty_elements_written_by_the_author(self):
        html = (
            '<p></p><p><a href="/wiki/File:X.png" class="image"><img src="x.png"></a></p>'
            "<p>Text</p>"
        )
        assert strip_images(html) == "<p></p><p>Text</p>"

    def test_empty(self):
        assert strip_images("") == ""


class TestSanitizeHtml:
    """Test cases for repairing truncated HTML."""

    def test_closes_unterminated_tags(self):
        assert sanitize_html("<p>Hello <b>wor") == "<p>Hello <b>wor</b></p>"

    def test_drops_tag_cut_in_half(self):
        assert sanitize_html('<p>Read <a href="/wiki/Fo') == "<p>Read </p>"

    def test_drops_doctype_and_head(self):
        html = "<!DOCTYPE html><html><head><title>T</title></head><body><p>Body</p></body></html>"
        assert sanitize_html(html) == "<p>Body</p>"

    def test_drops_doctype_without_body(self):
        assert sanitize_html("<!DOCTYPE html><p>Text</p>") == "<p>Text</p>"

    def test_trims_trailing_newline_in_paragraph(self):
        assert sanitize_html("<p>Line\n</p>") == "<p>Line</p>"

    def test_trims_only_one_newline(self):
        assert sanitize_html("<p>Line\n\n</p>") == "<p>Line\n</p>"

    def test_keeps_empty_elements(self):
        """Test repair leaves empty elements alone; only image removal prunes wrappers."""
        assert sanitize_html("<p></p><span></span><p>Text</p>") == "<p></p><span></span><p>Text</p>"

    def test_keeps_wrappers_with_content(self):
        assert sanitize_html('<p><a href="/wiki/Page">Page</a></p>') == '<p><a href="/wiki/Page">Page</a></p>'

    @pytest.mark.parametrize("html", [
        "</div></span>text<p",
        "<<<>>>",
        "<p><b><i>x</p></b>",
        "&amp",
        "<!-- unterminated comment",
        "<table><tr><td>cell",
    ])
    def test_malformed_input_never_raises(self, html):
        """Test the repair pass tolerates anything truncation can produce."""
        assert isinstance(sanitize_html(html), str)

    def test_stray_end_tags_are_dropped(self):
        assert sanitize_html("</div></span>text<p") == "text"

    def test_empty(self):
        assert sanitize_html("") == ""


class TestSnippetProducer:
    """Test cases for SnippetProducer."""

    def test_truncates_and_repairs(self):
        producer = SnippetProducer(max_chars=11)
        assert producer.produce(1, "<p>Hello world, this is long</p>") == "<p>Hello wo</p>"

    def test_counts_characters_not_bytes(self):
        producer = SnippetProducer(max_chars=9)
        assert producer.produce(1, "<p>Привет мир</p>") == "<p>Привет</p>"

    def test_images_do_not_count_towards_the_limit(self):
        producer = SnippetProducer(max_chars=20)
        html = '<p><img src="very/long/path/to/an/image.png" alt="x">Short text</p>'
        assert producer.produce(1, html) == "<p>Short text</p>"

    def test_authored_empty_paragraph_survives(self):
        producer = SnippetProducer(max_chars=50)
        assert producer.produce(1, "<p></p><p>Text</p>") == "<p></p><p>Text</p>"

    def test_none_html_gives_empty_snippet(self):
        assert SnippetProducer(max_chars=50).produce(1, None) == ""

    def test_cached_snippet_is_returned_verbatim(self):
        """Test a cache hit skips all HTML processing."""
        cache = Mock()
        producer = SnippetProducer(max_chars=5, cache=cache)
        cached = "<b>not repaired on purpose"
        assert producer.produce(7, "<p>Fresh text</p>", cached) == cached
        cache.set.assert_not_called()

    def test_fresh_snippet_is_written_to_cache(self):
        cache = InMemorySnippetCache()
        producer = SnippetProducer(max_chars=50, cache=cache, ttl=60)
        snippet = producer.produce(42, "<p>Board meeting</p>")
        assert cache.get(make_snippet_cache_key(42)) == snippet
        assert make_snippet_cache_key(42) == "eventcalendar-snippet-42"

    def test_cache_failure_propagates(self):
        cache = Mock()
        cache.set.side_effect = OSError("disk full")
        producer = SnippetProducer(max_chars=50, cache=cache)
        with pytest.raises(OSError):
            producer.produce(1, "<p>Text</p>")
