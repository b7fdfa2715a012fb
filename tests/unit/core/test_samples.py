"""Sample catalog: each archetype document maps to its expected slide type"""

import pytest
from markdown_it import MarkdownIt

from slidemark.core.mapper import map_tokens_to_slides
from slidemark.core.models import SlideType
from slidemark.core.parse import parse_markdown
from slidemark.core.samples import (
    ALL_SAMPLES,
    SAMPLE_COMPREHENSIVE,
    get_sample_by_type,
    get_sample_names,
)


# markdown-it block tokens at nesting level 0, by our token kind
_MD_IT_KINDS = {
    "heading_open": "heading",
    "paragraph_open": "paragraph",
    "bullet_list_open": "list",
    "ordered_list_open": "list",
    "blockquote_open": "blockquote",
    "fence": "code_block",
    "code_block": "code_block",
    "hr": "horizontal_rule",
    "table_open": "table",
}


@pytest.fixture(name="parser")
def parser_fixture():
    return MarkdownIt("gfm-like", options_update={"linkify": False})


def _single(name):
    results = map_tokens_to_slides(parse_markdown(ALL_SAMPLES[name]))
    assert len(results) == 1
    return results[0]


def test_sample_names():
    assert get_sample_names() == list(ALL_SAMPLES)
    assert get_sample_by_type("quote_slide") == ALL_SAMPLES["quote_slide"]
    assert get_sample_by_type("nope") is None


@pytest.mark.parametrize("name, expected", [
    ("title_slide", SlideType.title),
    ("comparison_slide", SlideType.comparison),
    ("timeline_slide", SlideType.timeline),
    ("quote_slide", SlideType.quote),
    ("table_slide", SlideType.table),
    ("process_steps", SlideType.timeline),
])
def test_sample_maps_to_type(name, expected):
    result = _single(name)
    assert result.type is expected
    assert not result.fallback


@pytest.mark.parametrize("name, cols", [
    ("card_grid_2_cols", 2),
    ("card_grid_3_cols", 3),
    ("card_grid_4_cols", 4),
    ("descriptive_list", 4),
])
def test_card_grid_samples_pick_cols(name, cols):
    result = _single(name)
    assert result.type is SlideType.card_grid
    assert result.content["cols"] == cols
    assert len(result.content["cards"]) == cols


def test_title_sample_content():
    assert _single("title_slide").content == {
        "title": "Presentation Title",
        "subtitle": "This is the subtitle. It sums up the core message in a single line.",
        "presenter": "Jane Doe",
        "date": "January 15, 2024",
    }


def test_quote_sample_content():
    content = _single("quote_slide").content
    assert content["author"] == "Steve Jobs"
    assert content["quote"].startswith("A good presentation")
    assert not content["quote"].endswith('"')


def test_table_sample_alignments():
    content = _single("table_slide").content
    assert [c["align"] for c in content["rows"][0]["cells"]] == ["left", "center", "center", "right"]
    assert len(content["rows"]) == 4


def test_comparison_sample_sides():
    content = _single("comparison_slide").content
    assert content["title"] == "Manual vs Automated"
    assert content["leftSide"]["title"] == "Manual"
    assert content["rightSide"]["title"] == "Automated"


def test_comprehensive_deck():
    """The full deck maps to eight slides of the expected types, in order."""
    results = map_tokens_to_slides(parse_markdown(SAMPLE_COMPREHENSIVE))
    assert [r.type for r in results] == [
        SlideType.title,
        SlideType.card_grid,
        SlideType.card_grid,
        SlideType.comparison,
        SlideType.timeline,
        SlideType.quote,
        SlideType.table,
        SlideType.card_grid,
    ]
    assert [r.content["cols"] for r in results if r.type is SlideType.card_grid] == [3, 3, 3]
    assert results[3].content["leftSide"]["items"] == ["manual work", "4-6 hours", "design skills required"]
    assert results[5].content["author"] == "Chris Kim"
    assert results[5].content["source"] == "Head of Marketing"
    assert not any(r.fallback for r in results)


@pytest.mark.parametrize("name", list(ALL_SAMPLES))
def test_sample_mapping_is_deterministic(name):
    text = ALL_SAMPLES[name]
    assert map_tokens_to_slides(parse_markdown(text)) == map_tokens_to_slides(parse_markdown(text))


@pytest.mark.parametrize("name", list(ALL_SAMPLES))
def test_block_structure_matches_markdown_it(parser, name):
    """Top-level blocks and list item counts agree with a CommonMark parser."""
    text = ALL_SAMPLES[name]
    md_tokens = parser.parse(text)
    expected = [_MD_IT_KINDS[t.type] for t in md_tokens if t.level == 0 and t.type in _MD_IT_KINDS]
    ours = parse_markdown(text).tokens
    assert [t.kind for t in ours] == expected

    md_items = sum(1 for t in md_tokens if t.type == "list_item_open")
    assert sum(len(t.items) for t in ours if t.kind == "list") == md_items
