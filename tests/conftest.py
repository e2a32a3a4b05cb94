# File: tests/conftest.py
from pathlib import Path

import pytest

from rich_cards.article import ArticleMetadataBuilder
from rich_cards.config import SiteConfig
from rich_cards.models import File, Revision, Title
from rich_cards.output import OutputPage
from rich_cards.providers import InMemoryFileRepository, InMemoryRevisionLookup


@pytest.fixture()
def site_config() -> SiteConfig:
    """
    Return a basic valid SiteConfig.
    """
    return SiteConfig(
        site_name="Example Wiki",
        server="https://wiki.example.org",
        logo="/images/logo.png",
    )


@pytest.fixture()
def revisions() -> InMemoryRevisionLookup:
    """
    History for "Main Page": two revisions, oldest first.
    """
    return InMemoryRevisionLookup(
        {
            "Main Page": [
                Revision(timestamp="20230101123456", author_name="Alice"),
                Revision(timestamp="20240315080000", author_name="Bob"),
            ]
        }
    )


@pytest.fixture()
def files() -> InMemoryFileRepository:
    return InMemoryFileRepository(
        [
            File(name="Example.jpg", url="https://wiki.example.org/images/Example.jpg", width=800, height=600),
            File(name="No size.svg", url="https://wiki.example.org/images/No_size.svg"),
        ]
    )


@pytest.fixture()
def builder(site_config, revisions, files) -> ArticleMetadataBuilder:
    return ArticleMetadataBuilder(site_config, revisions, files)


@pytest.fixture()
def main_page_out() -> OutputPage:
    """
    Rendering context for the main page with no images.
    """
    return OutputPage(Title("Main Page"))


@pytest.fixture()
def config_file(tmp_path) -> Path:
    path = tmp_path / "site.yaml"
    path.write_text(
        "site_name: Example Wiki\n"
        "server: https://wiki.example.org/\n"
        "logo: /images/logo.png\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture()
def wiki_file(tmp_path) -> Path:
    path = tmp_path / "wiki.yaml"
    path.write_text(
        """
pages:
  - title: Main Page
    revisions:
      - {timestamp: "20230101123456", author: Alice}
      - {timestamp: 20240315080000, author: Bob}
    images: [Example.jpg]
  - title: Empty Page
  - title: Alice
    namespace: 2
    revisions:
      - {timestamp: "20220505050505", author: Alice}
files:
  - {name: Example.jpg, url: "https://wiki.example.org/images/Example.jpg", width: 800, height: 600}
""",
        encoding="utf-8",
    )
    return path
