# File: rich_cards/wiki.py
"""rich_cards.wiki: загрузка снимка вики (страницы, ревизии, файлы) из YAML/JSON.

Снимок заменяет платформу MediaWiki при запуске из командной строки:
из него строятся in-memory реализации RevisionLookup и FileRepository.
"""
from __future__ import annotations

import errno
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from rich_cards.config import read_mapping
from rich_cards.logger import logger
from rich_cards.models import File, Revision, Title, normalize_db_key
from rich_cards.providers import InMemoryFileRepository, InMemoryRevisionLookup

__all__ = ["WikiDataError", "PageEntry", "WikiSnapshot", "load_wiki"]


class WikiDataError(ValueError):
    """Снимок синтаксически корректен, но противоречив (например, дубликаты страниц)."""


class RevisionEntry(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    timestamp: Optional[str] = None
    author: str = Field(..., min_length=1)

    @field_validator("timestamp", mode="before")
    def _coerce_timestamp(cls, v):
        # YAML превращает 20230101123456 без кавычек в int
        return str(v) if isinstance(v, int) else v


class FileEntry(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(..., min_length=1)
    url: str = Field(..., min_length=1)
    width: Optional[int] = Field(None, ge=0)
    height: Optional[int] = Field(None, ge=0)


class PageEntry(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    title: str = Field(..., min_length=1)
    namespace: int = 0
    revisions: list[RevisionEntry] = Field(default_factory=list)
    images: list[str] = Field(default_factory=list)

    def to_title(self) -> Title:
        return Title(self.title, self.namespace)


class WikiData(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    pages: list[PageEntry] = Field(default_factory=list)
    files: list[FileEntry] = Field(default_factory=list)


@dataclass(slots=True)
class WikiSnapshot:
    """Проверенный снимок вики с готовыми провайдерами."""

    pages: dict[str, PageEntry] = field(default_factory=dict)
    revisions: InMemoryRevisionLookup = field(default_factory=InMemoryRevisionLookup)
    files: InMemoryFileRepository = field(default_factory=InMemoryFileRepository)

    def find_page(self, name: str) -> Optional[PageEntry]:
        """Ищет страницу по полному имени (``User:Foo``, ``Main Page``)."""
        return self.pages.get(normalize_db_key(name))


def _build_snapshot(data: WikiData) -> WikiSnapshot:
    snapshot = WikiSnapshot()
    for page in data.pages:
        title = page.to_title()
        key = normalize_db_key(title.prefixed_text)
        if key in snapshot.pages:
            raise WikiDataError(f"Страница указана дважды: {title.prefixed_text}")
        snapshot.pages[key] = page
        for rev in page.revisions:
            snapshot.revisions.add(title, Revision(timestamp=rev.timestamp, author_name=rev.author))
    for entry in data.files:
        snapshot.files.add(File(name=entry.name, url=entry.url, width=entry.width, height=entry.height))
    return snapshot


def load_wiki(path: Union[str, Path]) -> WikiSnapshot:
    """Читает снимок вики; ошибки формата — ValueError/TypeError/ValidationError."""
    path_obj = Path(path).expanduser().resolve()
    if not path_obj.is_file():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    data = WikiData(**read_mapping(path_obj))
    snapshot = _build_snapshot(data)
    logger.debug(
        "Loaded wiki snapshot %s: %d pages, %d files", path_obj, len(snapshot.pages), len(snapshot.files)
    )
    return snapshot
