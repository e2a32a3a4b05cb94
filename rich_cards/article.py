"""
Google Rich Cards metadata for articles.

:class:`ArticleMetadataBuilder` turns the page being rendered into a
Schema.org ``NewsArticle`` JSON-LD document and puts it into the page head.
Every lookup that cannot be resolved falls back to a fixed value instead of
failing the render:

* no revision / bad timestamp  → ``"0"``
* no first revision            → author ``"None"``
* no talk page                 → ``""``
* no image on the page         → site logo, 135×135
* image without known size     → 0 for the missing dimension
"""
from __future__ import annotations

import json
from datetime import datetime
from typing import Any, Optional, Tuple

from rich_cards.config import SiteConfig
from rich_cards.logger import get_logger
from rich_cards.models import ArticleMetadata, Revision, Title
from rich_cards.output import OutputPage
from rich_cards.providers import FileRepository, RevisionLookup

__all__ = [
    "HEAD_ITEM_KEY",
    "LOGO_WIDTH",
    "LOGO_HEIGHT",
    "ArticleMetadataBuilder",
    "format_timestamp",
    "to_script_tag",
]

log = get_logger("article")

HEAD_ITEM_KEY = "GoogleRichCardsArticle"
LOGO_WIDTH = 135
LOGO_HEIGHT = 135

_TS_FORMAT = "%Y%m%d%H%M%S"


def format_timestamp(timestamp: Optional[str], config: SiteConfig) -> str:
    """``YYYYMMDDHHMMSS`` → ISO-8601 with the site's UTC offset, or ``"0"``."""
    if not timestamp:
        return "0"
    try:
        dt = datetime.strptime(timestamp, _TS_FORMAT)
    except (TypeError, ValueError):
        log.warning("Unparsable revision timestamp: %r", timestamp)
        return "0"
    return dt.replace(tzinfo=config.tzinfo).isoformat()


def to_script_tag(document: dict[str, Any]) -> str:
    """Serialize like PHP ``json_encode`` (``\\uXXXX`` and ``\\/`` escapes)."""
    payload = json.dumps(document, separators=(",", ":")).replace("/", "\\/")
    return f'<script type="application/ld+json">{payload}</script>'


class ArticleMetadataBuilder:
    """Builds :class:`ArticleMetadata` for the page an :class:`OutputPage` renders."""

    def __init__(
        self,
        config: SiteConfig,
        revisions: RevisionLookup,
        files: FileRepository,
    ) -> None:
        self.config = config
        self.revisions = revisions
        self.files = files

    # -- lookups ---------------------------------------------------------

    def _revision_time(self, revision: Optional[Revision]) -> str:
        if revision is None:
            return "0"
        return format_timestamp(revision.timestamp, self.config)

    def creation_time(self, title: Title) -> str:
        return self._revision_time(self.revisions.first_revision(title))

    def modification_time(self, title: Title) -> str:
        return self._revision_time(self.revisions.latest_revision(title))

    def author_name(self, title: Title) -> str:
        first = self.revisions.first_revision(title)
        return first.author_name if first is not None else "None"

    def illustration(self, out: OutputPage) -> Tuple[str, int, int]:
        """First image referenced by the page, else the site logo."""
        image = next(iter(out.file_search_options), None)
        if image:
            found = self.files.find_file(image)
            if found is not None:
                return found.url, found.width or 0, found.height or 0
            log.debug("Image %s not in file repository, using logo", image)
        return self.config.logo_url, LOGO_WIDTH, LOGO_HEIGHT

    def discussion_url(self, title: Title) -> str:
        talk = title.talk_page()
        return talk.full_url(self.config) if talk is not None else ""

    # -- public API ------------------------------------------------------

    def build(self, out: OutputPage) -> Optional[ArticleMetadata]:
        """Return the metadata record, or None for pages that get no card."""
        title = out.title
        if title is None or not title.is_content_page(self.config.content_namespaces):
            log.debug("Skipping non-content page %r", title)
            return None

        image_url, width, height = self.illustration(out)
        return ArticleMetadata(
            page_url=title.full_url(self.config),
            headline=title.text,
            description=title.text,
            date_published=self.creation_time(title),
            date_modified=self.modification_time(title),
            author_name=self.author_name(title),
            discussion_url=self.discussion_url(title),
            image_url=image_url,
            image_width=width,
            image_height=height,
            publisher_name=self.config.site_name,
            publisher_logo_url=self.config.logo_url,
        )

    def render(self, out: OutputPage) -> Optional[ArticleMetadata]:
        """Build the record and inject it into the head of *out*."""
        metadata = self.build(out)
        if metadata is None:
            return None
        out.add_head_item(HEAD_ITEM_KEY, to_script_tag(metadata.to_jsonld()))
        log.info("Annotated %s", out.title.prefixed_text)
        return metadata
