"""Turning page identifiers into links."""

from __future__ import annotations

from typing import Protocol
from urllib.parse import quote

from event_calendar.config import NAMESPACE_NAMES


# Characters MediaWiki leaves unescaped in article paths.
_URL_SAFE = ";@$!*(),/~:"


class UrlResolver(Protocol):
    def __call__(self, namespace: int, title: str) -> str:
        ...


class WikiUrlResolver:
    """Builds short article links such as ``/wiki/Template:Today_in_History/April,_12``."""

    def __init__(self, article_path: str = "/wiki/$1", namespace_names: dict[int, str] | None = None):
        self.article_path = article_path
        self.namespace_names = NAMESPACE_NAMES if namespace_names is None else namespace_names

    def full_title(self, namespace: int, title: str) -> str:
        ns_name = self.namespace_names.get(namespace, "")
        return f"{ns_name}:{title}" if ns_name else title

    def __call__(self, namespace: int, title: str) -> str:
        full_title = self.full_title(namespace, title.replace(" ", "_"))
        return self.article_path.replace("$1", quote(full_title, safe=_URL_SAFE))
