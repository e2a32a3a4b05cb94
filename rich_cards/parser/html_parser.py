"""HTML parsing utilities for RichCards.

Two jobs, both for pages that were rendered outside of a live wiki:

* :func:`parse_html` recovers what the rendering context would have recorded:
  the page title and the images its content references, in order.
* :func:`inject_head_items` writes keyed head items into ``<head>``. Every
  injected element carries ``data-head-item="<key>"`` so running it again
  replaces the earlier element instead of adding a second one.

Only the parser output (``#mw-content-text`` or ``.mw-parser-output``) is
searched when present, so skin images such as the header logo are ignored.
Image names come from file description links (``/wiki/File:Foo.png``); when
there are none, from ``<img src>`` basenames with MediaWiki's ``NNNpx-``
thumbnail prefix removed.
"""
from __future__ import annotations

import posixpath
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from urllib.parse import parse_qs, unquote, urlparse

from bs4 import BeautifulSoup

from rich_cards.providers import file_key

__all__: Sequence[str] = ("HEAD_ITEM_ATTR", "ParsedPage", "parse_html", "inject_head_items")

HEAD_ITEM_ATTR = "data-head-item"

_THUMB_PREFIX_RE = re.compile(r"^\d+px-")
_FILE_PREFIX_RE = re.compile(r"^(?:File|Image):", re.IGNORECASE)


@dataclass(slots=True)
class ParsedPage:
    """Title text and referenced image names (DB-key form, first-seen order)."""

    title: str
    images: list[str]


def _file_from_link(href: str) -> str | None:
    parsed = urlparse(href)
    # /index.php?title=File:Foo.png
    candidates = parse_qs(parsed.query).get("title", [])
    candidates.append(posixpath.basename(parsed.path))
    for candidate in candidates:
        name = unquote(candidate)
        if _FILE_PREFIX_RE.match(name):
            return _FILE_PREFIX_RE.sub("", name)
    return None


def _file_from_src(src: str) -> str | None:
    parsed = urlparse(src)
    if parsed.scheme == "data":
        return None
    name = unquote(posixpath.basename(parsed.path))
    if not name:
        return None
    return _THUMB_PREFIX_RE.sub("", name)


def _content_root(soup: BeautifulSoup):
    """Parser output of the page; skin chrome (logo, sidebar) lies outside it."""
    for selector in ("#mw-content-text", ".mw-parser-output"):
        root = soup.select_one(selector)
        if root is not None:
            return root
    return soup.body or soup


def _collect(names, seen: set[str], images: list[str]) -> None:
    for name in names:
        if not name:
            continue
        key = file_key(name)
        if key not in seen:
            seen.add(key)
            images.append(key)


def _page_title(soup: BeautifulSoup) -> str:
    heading = soup.select_one("#firstHeading")
    if heading is not None:
        return heading.get_text(strip=True)
    title_tag = soup.find("title")
    return title_tag.get_text(strip=True) if title_tag else ""


def parse_html(html: str) -> ParsedPage:
    """Extract the page title and the images its content references.

    File description links are what the parser records for ``[[File:...]]``;
    bare ``<img>`` tags are only used when the content has no such link.
    """
    soup = BeautifulSoup(html, "html.parser")
    root = _content_root(soup)

    seen: set[str] = set()
    images: list[str] = []
    _collect((_file_from_link(a["href"]) for a in root.find_all("a", href=True)), seen, images)
    if not images:
        _collect((_file_from_src(img["src"]) for img in root.find_all("img", src=True)), seen, images)

    return ParsedPage(title=_page_title(soup), images=images)


def inject_head_items(html: str, items: Mapping[str, str]) -> str:
    """Insert *items* into ``<head>``, replacing earlier items with the same key."""
    soup = BeautifulSoup(html, "html.parser")

    head = soup.head
    if head is None:
        head = soup.new_tag("head")
        if soup.html is not None:
            soup.html.insert(0, head)
        else:
            soup.insert(0, head)

    for key, markup in items.items():
        for old in head.find_all(attrs={HEAD_ITEM_ATTR: key}):
            old.decompose()
        fragment = BeautifulSoup(markup, "html.parser")
        for element in list(fragment.find_all(recursive=False)):
            element[HEAD_ITEM_ATTR] = key
            head.append(element.extract())

    return str(soup)
