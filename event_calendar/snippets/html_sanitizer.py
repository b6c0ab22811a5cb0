"""Clean up rendered page HTML for use as an event snippet.

Removing images leaves orphaned wrappers behind, and truncating HTML at an
arbitrary character leaves unterminated tags and half-written attributes.
Everything here is tolerant of malformed input and never raises for bad markup.
"""

import re

from bs4 import BeautifulSoup, Doctype, NavigableString


# A tag cut off by truncation, e.g. '<a href="/wiki/Fo'.
_DANGLING_TAG_RE = re.compile(r"<[^<>]*$")

# Wrappers that image markup leaves behind once the <img> itself is gone.
WRAPPER_TAGS = ["a", "span", "figure", "div", "figcaption", "p"]

# Image containers used by the different MediaWiki rendering conventions.
_IMAGE_CONTAINER_CLASSES = {"thumb", "thumbinner", "floatleft", "floatright", "gallery"}


def _is_image_container(tag) -> bool:
    if tag.name == "figure":
        return bool(tag.find("img")) or str(tag.get("typeof", "")).startswith("mw:File")
    if tag.name == "div":
        classes = set(tag.get("class") or [])
        return bool(classes & _IMAGE_CONTAINER_CLASSES)
    if tag.name == "ul":
        return "gallery" in (tag.get("class") or [])
    return False


def _is_empty(tag) -> bool:
    return not tag.get_text(strip=True) and tag.find(True) is None


def _remove_with_empty_wrappers(tag) -> None:
    """Remove ``tag``, then each enclosing wrapper that removal left empty."""
    parent = tag.parent
    tag.decompose()
    while parent is not None and parent.name in WRAPPER_TAGS and _is_empty(parent):
        grandparent = parent.parent
        parent.decompose()
        parent = grandparent


def strip_images(html: str) -> str:
    """Remove images and the containers that exist only to hold them.

    Handles bare ``<img>`` tags, ``<a class="image">`` wrappers, legacy
    ``<div class="thumb">`` frames (with their captions), ``<figure
    typeof="mw:File/...">`` blocks and galleries. Wrappers emptied by the
    removal go too; empty elements written by the page author are kept.
    """
    if not html:
        return ""
    soup = BeautifulSoup(html, "html.parser")
    for container in soup.find_all(_is_image_container):
        if container.decomposed:
            continue
        _remove_with_empty_wrappers(container)
    for img in soup.find_all("img"):
        if img.decomposed:
            continue
        _remove_with_empty_wrappers(img)
    return str(soup)


def _remove_outside_body(soup: BeautifulSoup):
    """Return the node whose children make up the fragment, dropping doctype and head."""
    for node in list(soup.contents):
        if isinstance(node, Doctype):
            node.extract()
    if soup.body is not None:
        return soup.body
    for head in soup.find_all("head"):
        head.decompose()
    for html_tag in soup.find_all("html"):
        html_tag.unwrap()
    return soup


def _trim_paragraph_newlines(root) -> None:
    for p in root.find_all("p"):
        if not p.contents:
            continue
        last = p.contents[-1]
        if type(last) is NavigableString and last.endswith("\n"):
            trimmed = str(last)[:-1]
            if trimmed:
                last.replace_with(NavigableString(trimmed))
            else:
                last.extract()


def sanitize_html(html: str) -> str:
    """Repair truncated or malformed HTML into a well-formed fragment.

    - drops ``<!DOCTYPE>`` and everything outside ``<body>``
    - drops a tag cut in half at the end of the input
    - closes tags left open
    - trims one trailing newline inside each paragraph

    Args:
        html: Possibly broken HTML

    Returns:
        Well-formed HTML fragment (empty string for empty input)
    """
    if not html:
        return ""
    html = _DANGLING_TAG_RE.sub("", html)
    soup = BeautifulSoup(html, "html.parser")
    root = _remove_outside_body(soup)
    _trim_paragraph_newlines(root)
    return root.decode_contents()
