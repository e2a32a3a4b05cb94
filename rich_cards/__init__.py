# rich_cards/__init__.py
"""
RichCards package initializer.
Schema.org NewsArticle (JSON-LD) metadata for wiki pages.
"""
__version__ = "0.1.0"

from rich_cards.article import ArticleMetadataBuilder
from rich_cards.config import SiteConfig, load_config
from rich_cards.hooks import on_before_page_display
from rich_cards.output import OutputPage

__all__ = [
    "__version__",
    "ArticleMetadataBuilder",
    "OutputPage",
    "SiteConfig",
    "load_config",
    "on_before_page_display",
]
