"""Rendering context handed to page-display hooks."""
from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Optional

from rich_cards.models import Title
from rich_cards.providers import file_key

__all__ = ["OutputPage"]


class OutputPage:
    """The page being rendered: its title, referenced images and head items.

    ``file_search_options`` keeps images in the order they were first
    referenced. Head items are keyed, so adding an item under an existing key
    replaces it in place.
    """

    def __init__(self, title: Optional[Title] = None) -> None:
        self.title = title
        self._file_search_options: dict[str, dict[str, Any]] = {}
        self._head_items: dict[str, str] = {}

    def add_image(self, name: str, **options: Any) -> None:
        key = file_key(name)
        if key and key not in self._file_search_options:
            self._file_search_options[key] = dict(options)

    @property
    def file_search_options(self) -> Mapping[str, Mapping[str, Any]]:
        return MappingProxyType(self._file_search_options)

    def add_head_item(self, key: str, value: str) -> None:
        self._head_items[key] = value

    @property
    def head_items(self) -> Mapping[str, str]:
        return MappingProxyType(self._head_items)

    def head_html(self) -> str:
        return "\n".join(self._head_items.values())

    def __repr__(self) -> str:
        return (
            f"OutputPage(title={self.title!r}, images={len(self._file_search_options)}, "
            f"head_items={list(self._head_items)})"
        )
