"""Produce bounded HTML snippets of event pages."""

from __future__ import annotations

import logging

from event_calendar.snippets.cache import SnippetCache, make_snippet_cache_key
from event_calendar.snippets.html_sanitizer import sanitize_html, strip_images


logger = logging.getLogger(__name__)


class SnippetProducer:
    """Turns rendered page HTML into a short, well-formed snippet.

    When a cache is given, freshly produced snippets are written back to it
    under :func:`make_snippet_cache_key`. Cache errors are not swallowed.
    """

    def __init__(self, max_chars: int, cache: SnippetCache | None = None, ttl: int | None = None):
        self.max_chars = max_chars
        self.cache = cache
        self.ttl = ttl

    def produce(
        self,
        revision_id: int,
        rendered_html: str | None,
        cached_snippet: str | None = None,
    ) -> str:
        """Return the snippet for one revision of a page.

        Args:
            revision_id: Revision the HTML was rendered from
            rendered_html: Rendered page HTML (None is treated as empty)
            cached_snippet: Snippet already known for this revision

        Returns:
            The cached snippet unchanged if there is one, otherwise the first
            ``max_chars`` characters of the image-free HTML, repaired
        """
        if cached_snippet:
            logger.debug("Snippet cache hit for revision %s", revision_id)
            return cached_snippet

        html = strip_images(rendered_html or "")
        snippet = sanitize_html(html[:self.max_chars])

        if self.cache is not None:
            self.cache.set(make_snippet_cache_key(revision_id), snippet, self.ttl)
        return snippet
