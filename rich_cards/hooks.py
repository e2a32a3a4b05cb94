"""Page-display hook that wires the article builder into rendering."""
from __future__ import annotations

from rich_cards.article import ArticleMetadataBuilder
from rich_cards.output import OutputPage

__all__ = ["on_before_page_display"]


def on_before_page_display(out: OutputPage, builder: ArticleMetadataBuilder) -> bool:
    """Annotate *out* when ``annotate_articles`` is enabled.

    Always returns True so that rendering carries on.
    """
    if builder.config.annotate_articles:
        builder.render(out)
    return True
