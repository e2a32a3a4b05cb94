# File: tests/test_article.py
"""Tests for the NewsArticle metadata builder and the page-display hook."""
import json
import re
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import pytest

from rich_cards.article import HEAD_ITEM_KEY, ArticleMetadataBuilder, format_timestamp, to_script_tag
from rich_cards.config import SiteConfig
from rich_cards.hooks import on_before_page_display
from rich_cards.models import File, Revision, Title
from rich_cards.output import OutputPage
from rich_cards.providers import InMemoryFileRepository, InMemoryRevisionLookup


def _payload(out: OutputPage) -> dict:
    markup = out.head_items[HEAD_ITEM_KEY]
    match = re.fullmatch(r'<script type="application/ld\+json">(.*)</script>', markup)
    assert match is not None
    return json.loads(match.group(1))


# --------------------------------------------------------------------------- #
#                               Timestamps                                    #
# --------------------------------------------------------------------------- #


@pytest.mark.parametrize(
    "timestamp,expected",
    [
        ("20230101123456", "2023-01-01T12:34:56+00:00"),
        ("19991231235959", "1999-12-31T23:59:59+00:00"),
        (None, "0"),
        ("", "0"),
        ("not-a-date", "0"),
        ("20231301000000", "0"),
    ],
)
def test_format_timestamp(site_config, timestamp, expected):
    assert format_timestamp(timestamp, site_config) == expected


def test_format_timestamp_uses_site_timezone():
    try:
        ZoneInfo("Etc/GMT-3")
    except ZoneInfoNotFoundError:
        pytest.skip("tz database not available")
    cfg = SiteConfig(site_name="Wiki", server="https://w.example", timezone="Etc/GMT-3")
    assert format_timestamp("20230101123456", cfg) == "2023-01-01T12:34:56+03:00"


# --------------------------------------------------------------------------- #
#                               Builder                                       #
# --------------------------------------------------------------------------- #


def test_build_main_page(builder, main_page_out):
    meta = builder.build(main_page_out)
    assert meta is not None
    assert meta.page_url == "https://wiki.example.org/wiki/Main_Page"
    assert meta.headline == "Main Page"
    assert meta.date_published == "2023-01-01T12:34:56+00:00"
    assert meta.date_modified == "2024-03-15T08:00:00+00:00"
    assert meta.author_name == "Alice"
    assert meta.discussion_url == "https://wiki.example.org/wiki/Talk:Main_Page"
    assert meta.publisher_name == "Example Wiki"
    assert meta.publisher_logo_url == "https://wiki.example.org/images/logo.png"


def test_page_without_revisions(builder):
    meta = builder.build(OutputPage(Title("Fresh")))
    assert meta.date_published == "0"
    assert meta.date_modified == "0"
    assert meta.author_name == "None"


def test_description_equals_headline(builder):
    meta = builder.build(OutputPage(Title("Some article")))
    assert meta.description == meta.headline == "Some article"


@pytest.mark.parametrize(
    "title",
    [None, Title("Main Page", 1), Title("Alice", 2), Title("Search", -1), Title("Logo.png", 6)],
)
def test_non_content_pages_are_skipped(builder, title):
    out = OutputPage(title)
    assert builder.render(out) is None
    assert dict(out.head_items) == {}


def test_extra_content_namespace(revisions, files):
    cfg = SiteConfig(site_name="Wiki", server="https://w.example", content_namespaces=[0, 12])
    meta = ArticleMetadataBuilder(cfg, revisions, files).build(OutputPage(Title("Editing", 12)))
    assert meta.page_url == "https://w.example/wiki/Help:Editing"
    assert meta.discussion_url == "https://w.example/wiki/Help_talk:Editing"


def test_talk_page_of_talk_page_is_itself(revisions, files):
    cfg = SiteConfig(site_name="Wiki", server="https://w.example", content_namespaces=[0, 1])
    meta = ArticleMetadataBuilder(cfg, revisions, files).build(OutputPage(Title("Main Page", 1)))
    assert meta.discussion_url == meta.page_url == "https://w.example/wiki/Talk:Main_Page"


# --------------------------------------------------------------------------- #
#                               Illustration                                  #
# --------------------------------------------------------------------------- #


def test_no_image_falls_back_to_logo(builder, main_page_out):
    assert builder.illustration(main_page_out) == ("https://wiki.example.org/images/logo.png", 135, 135)


def test_first_image_dimensions(builder, main_page_out):
    main_page_out.add_image("Example.jpg")
    main_page_out.add_image("No size.svg")
    meta = builder.build(main_page_out)
    assert meta.image_url == "https://wiki.example.org/images/Example.jpg"
    assert (meta.image_width, meta.image_height) == (800, 600)


def test_file_without_size_uses_zero(builder, main_page_out):
    main_page_out.add_image("No_size.svg")
    assert builder.illustration(main_page_out) == ("https://wiki.example.org/images/No_size.svg", 0, 0)


def test_file_with_one_known_dimension(site_config, revisions, main_page_out):
    files = InMemoryFileRepository([File(name="Wide.png", url="https://wiki.example.org/images/Wide.png", width=800)])
    builder = ArticleMetadataBuilder(site_config, revisions, files)
    main_page_out.add_image("Wide.png")
    assert builder.illustration(main_page_out) == ("https://wiki.example.org/images/Wide.png", 800, 0)


def test_unknown_first_image_falls_back_to_logo(builder, main_page_out):
    # only the first referenced image is considered
    main_page_out.add_image("Missing.png")
    main_page_out.add_image("Example.jpg")
    assert builder.illustration(main_page_out) == ("https://wiki.example.org/images/logo.png", 135, 135)


# --------------------------------------------------------------------------- #
#                               Rendering                                     #
# --------------------------------------------------------------------------- #


def test_render_injects_jsonld(builder, main_page_out):
    main_page_out.add_image("Example.jpg")
    builder.render(main_page_out)
    data = _payload(main_page_out)
    assert data == {
        "@context": "http://schema.org",
        "@type": "NewsArticle",
        "mainEntityOfPage": {"@type": "WebPage", "@id": "https://wiki.example.org/wiki/Main_Page"},
        "author": {"@type": "Person", "name": "Alice"},
        "headline": "Main Page",
        "datePublished": "2023-01-01T12:34:56+00:00",
        "dateModified": "2024-03-15T08:00:00+00:00",
        "discussionUrl": "https://wiki.example.org/wiki/Talk:Main_Page",
        "image": {
            "@type": "ImageObject",
            "url": "https://wiki.example.org/images/Example.jpg",
            "width": 800,
            "height": 600,
        },
        "publisher": {
            "@type": "Organization",
            "name": "Example Wiki",
            "logo": {"@type": "ImageObject", "url": "https://wiki.example.org/images/logo.png"},
        },
        "description": "Main Page",
    }


def test_render_twice_overwrites(builder, revisions, main_page_out):
    builder.render(main_page_out)
    revisions.add(Title("Main Page"), Revision(timestamp="20250101000000", author_name="Carol"))
    builder.render(main_page_out)
    assert list(main_page_out.head_items) == [HEAD_ITEM_KEY]
    assert _payload(main_page_out)["dateModified"] == "2025-01-01T00:00:00+00:00"


def test_script_tag_escapes_like_json_encode():
    tag = to_script_tag({"url": "https://x.org/a", "name": "Ünïcode</script>"})
    assert tag == (
        '<script type="application/ld+json">'
        '{"url":"https:\\/\\/x.org\\/a","name":"\\u00dcn\\u00efcode<\\/script>"}'
        "</script>"
    )


# --------------------------------------------------------------------------- #
#                               Hook                                          #
# --------------------------------------------------------------------------- #


def test_hook_renders_when_enabled(builder, main_page_out):
    assert on_before_page_display(main_page_out, builder) is True
    assert HEAD_ITEM_KEY in main_page_out.head_items


def test_hook_disabled_by_flag(revisions, files, main_page_out):
    cfg = SiteConfig(site_name="Wiki", server="https://w.example", annotate_articles=False)
    builder = ArticleMetadataBuilder(cfg, revisions, files)
    assert on_before_page_display(main_page_out, builder) is True
    assert dict(main_page_out.head_items) == {}


def test_hook_on_empty_history():
    cfg = SiteConfig(site_name="Wiki", server="https://w.example", logo="/logo.svg")
    builder = ArticleMetadataBuilder(cfg, InMemoryRevisionLookup(), InMemoryFileRepository())
    out = OutputPage(Title("Anything"))
    on_before_page_display(out, builder)
    data = _payload(out)
    assert data["author"]["name"] == "None"
    assert data["image"] == {"@type": "ImageObject", "url": "https://w.example/logo.svg", "width": 135, "height": 135}
