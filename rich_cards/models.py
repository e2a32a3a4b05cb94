# File: rich_cards/models.py
"""
Data models for RichCards: host-platform records (title, revision, file)
and the :class:`ArticleMetadata` record serialized into JSON-LD.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Collection, Optional
from urllib.parse import quote

if TYPE_CHECKING:
    from rich_cards.config import SiteConfig

__all__ = (
    "NAMESPACE_NAMES",
    "Title",
    "Revision",
    "File",
    "ArticleMetadata",
    "normalize_db_key",
)

#: Canonical MediaWiki namespace names (index → prefix).
NAMESPACE_NAMES: dict[int, str] = {
    -2: "Media",
    -1: "Special",
    0: "",
    1: "Talk",
    2: "User",
    3: "User talk",
    4: "Project",
    5: "Project talk",
    6: "File",
    7: "File talk",
    8: "MediaWiki",
    9: "MediaWiki talk",
    10: "Template",
    11: "Template talk",
    12: "Help",
    13: "Help talk",
    14: "Category",
    15: "Category talk",
}

# characters wfUrlencode() leaves untouched in page URLs
_URL_SAFE = ";@$!*(),/~:"


def normalize_db_key(name: str) -> str:
    """Spaces to underscores, first letter upper-cased (``foo bar`` → ``Foo_bar``)."""
    key = name.strip().replace(" ", "_")
    return key[:1].upper() + key[1:]


@dataclass(frozen=True, slots=True)
class Title:
    """Page identity: display text plus namespace index."""

    text: str
    namespace: int = 0

    @property
    def db_key(self) -> str:
        return normalize_db_key(self.text)

    @property
    def namespace_name(self) -> str:
        return NAMESPACE_NAMES.get(self.namespace, f"Namespace {self.namespace}")

    @property
    def prefixed_text(self) -> str:
        if self.namespace == 0:
            return self.text
        return f"{self.namespace_name}:{self.text}"

    @property
    def is_talk_page(self) -> bool:
        return self.namespace >= 0 and self.namespace % 2 == 1

    @property
    def can_have_talk_page(self) -> bool:
        return self.namespace >= 0

    def is_content_page(self, content_namespaces: Collection[int]) -> bool:
        return self.namespace in content_namespaces

    def talk_page(self) -> Optional[Title]:
        """Associated talk page; a talk page is its own talk page."""
        if not self.can_have_talk_page:
            return None
        if self.is_talk_page:
            return self
        return Title(self.text, self.namespace + 1)

    def full_url(self, config: SiteConfig) -> str:
        """Absolute URL built from ``server`` and ``article_path``."""
        prefixed_key = self.db_key
        if self.namespace != 0:
            prefixed_key = f"{normalize_db_key(self.namespace_name)}:{prefixed_key}"
        path = config.article_path.replace("$1", quote(prefixed_key, safe=_URL_SAFE))
        return config.server + path


@dataclass(frozen=True, slots=True)
class Revision:
    """One stored version of a page. ``timestamp`` is ``YYYYMMDDHHMMSS``."""

    timestamp: Optional[str]
    author_name: str


@dataclass(frozen=True, slots=True)
class File:
    """An uploaded file known to the file repository."""

    name: str
    url: str
    width: Optional[int] = None
    height: Optional[int] = None


@dataclass(frozen=True, slots=True)
class ArticleMetadata:
    """Everything needed for one ``NewsArticle`` JSON-LD document."""

    page_url: str
    headline: str
    description: str
    date_published: str
    date_modified: str
    author_name: str
    discussion_url: str
    image_url: str
    image_width: int
    image_height: int
    publisher_name: str
    publisher_logo_url: str

    def to_jsonld(self) -> dict[str, Any]:
        return {
            "@context": "http://schema.org",
            "@type": "NewsArticle",
            "mainEntityOfPage": {
                "@type": "WebPage",
                "@id": self.page_url,
            },
            "author": {
                "@type": "Person",
                "name": self.author_name,
            },
            "headline": self.headline,
            "datePublished": self.date_published,
            "dateModified": self.date_modified,
            "discussionUrl": self.discussion_url,
            "image": {
                "@type": "ImageObject",
                "url": self.image_url,
                "width": self.image_width,
                "height": self.image_height,
            },
            "publisher": {
                "@type": "Organization",
                "name": self.publisher_name,
                "logo": {
                    "@type": "ImageObject",
                    "url": self.publisher_logo_url,
                },
            },
            "description": self.description,
        }
