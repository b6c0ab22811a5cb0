"""Bounded, sanitized HTML snippets of event pages."""

from event_calendar.snippets.cache import (
    FileSnippetCache,
    InMemorySnippetCache,
    SnippetCache,
    make_snippet_cache_key,
)
from event_calendar.snippets.html_sanitizer import sanitize_html, strip_images
from event_calendar.snippets.producer import SnippetProducer

__all__ = [
    "FileSnippetCache",
    "InMemorySnippetCache",
    "SnippetCache",
    "SnippetProducer",
    "make_snippet_cache_key",
    "sanitize_html",
    "strip_images",
]
