"""HTML helpers for annotating already-rendered pages."""

from rich_cards.parser.html_parser import HEAD_ITEM_ATTR, ParsedPage, inject_head_items, parse_html

__all__ = ["HEAD_ITEM_ATTR", "ParsedPage", "inject_head_items", "parse_html"]
