"""Read-only lookups the article builder depends on.

The wiki platform owns revision history and the file repository; the builder
only sees the two small protocols below. In-memory implementations back the
CLI (loaded from a wiki snapshot) and the tests.
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Optional, Protocol

from rich_cards.models import File, Revision, Title, normalize_db_key

__all__ = (
    "RevisionLookup",
    "FileRepository",
    "InMemoryRevisionLookup",
    "InMemoryFileRepository",
    "file_key",
)


class RevisionLookup(Protocol):
    def first_revision(self, title: Title) -> Optional[Revision]: ...

    def latest_revision(self, title: Title) -> Optional[Revision]: ...


class FileRepository(Protocol):
    def find_file(self, name: str) -> Optional[File]: ...


def file_key(name: str) -> str:
    """Repository key of a file name: ``File:`` prefix dropped, DB-key form."""
    name = name.strip()
    prefix, sep, rest = name.partition(":")
    if sep and prefix.strip().lower() in ("file", "image", "media"):
        name = rest
    return normalize_db_key(name)


class InMemoryRevisionLookup:
    """Revision history keyed by prefixed title text, oldest revision first."""

    def __init__(self, history: Optional[Mapping[str, Sequence[Revision]]] = None) -> None:
        self._history: dict[str, list[Revision]] = {}
        for key, revisions in (history or {}).items():
            self._history[normalize_db_key(key)] = list(revisions)

    def add(self, title: Title, revision: Revision) -> None:
        self._history.setdefault(normalize_db_key(title.prefixed_text), []).append(revision)

    def _revisions(self, title: Title) -> list[Revision]:
        return self._history.get(normalize_db_key(title.prefixed_text), [])

    def first_revision(self, title: Title) -> Optional[Revision]:
        revisions = self._revisions(title)
        return revisions[0] if revisions else None

    def latest_revision(self, title: Title) -> Optional[Revision]:
        revisions = self._revisions(title)
        return revisions[-1] if revisions else None


class InMemoryFileRepository:
    """Files addressable by name the way MediaWiki normalizes them."""

    def __init__(self, files: Iterable[File] = ()) -> None:
        self._files: dict[str, File] = {}
        for f in files:
            self.add(f)

    def add(self, file: File) -> None:
        self._files[file_key(file.name)] = file

    def __len__(self) -> int:
        return len(self._files)

    def find_file(self, name: str) -> Optional[File]:
        if not name:
            return None
        return self._files.get(file_key(name))
