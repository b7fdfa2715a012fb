"""Unit tests for core/classify.py"""

import pytest

from slidemark.config import Settings
from slidemark.core.analyze import analyze_content_pattern
from slidemark.core.classify import (
    GENERIC_DESCRIPTION,
    MAPPING_RULES,
    card_grid_cols,
    determine_slide_type,
    get_slide_type_description,
)
from slidemark.core.models import ContentPattern, SlideType


def _decide(tokens_of, text, settings=None):
    return determine_slide_type(analyze_content_pattern(tokens_of(text)), settings)


def test_rule_order():
    """Rules are tried table, quote, timeline, comparison, card-grid, title."""
    assert [r.name for r in MAPPING_RULES] == ["table", "quote", "timeline", "comparison", "card-grid", "title"]


def test_table_beats_numbered_list(tokens_of):
    """A run with a table and a numbered list is a table slide."""
    d = _decide(tokens_of, "## Plan\n\n1. a\n2. b\n3. c\n\n| x | y |\n|---|---|\n| 1 | 2 |")
    assert d.type is SlideType.table
    assert d.confidence == pytest.approx(0.95)
    assert not d.fallback


def test_quote(tokens_of):
    d = _decide(tokens_of, "> Simplicity is the soul of efficiency.\n>\n> — Austin Freeman")
    assert d.type is SlideType.quote


def test_quote_with_list_items_is_not_quote(tokens_of):
    """A quote holding list items does not qualify."""
    d = _decide(tokens_of, "> - one\n> - two")
    assert d.type is not SlideType.quote


def test_timeline_needs_three_numbered_items(tokens_of):
    assert _decide(tokens_of, "1. a\n2. b\n3. c").type is SlideType.timeline
    assert _decide(tokens_of, "1. a\n2. b").type is SlideType.card_grid


def test_comparison_from_two_lists(tokens_of):
    d = _decide(tokens_of, "## A or B\n\n### A\n- a1\n\n### B\n- b1")
    assert d.type is SlideType.comparison
    assert d.cols is None


@pytest.mark.parametrize("n", [2, 3, 4])
def test_card_grid_cols_follow_item_count(tokens_of, n):
    text = "\n".join(f"- item {i}" for i in range(n))
    d = _decide(tokens_of, text)
    assert d.type is SlideType.card_grid
    assert d.cols == n
    assert not d.fallback


def test_long_items_are_not_card_grid(tokens_of):
    """Items longer than short_item_length on average fall through."""
    text = "- " + "x" * 90 + "\n- " + "y" * 90
    d = _decide(tokens_of, text)
    assert d.fallback
    assert _decide(tokens_of, text, Settings(short_item_length=100)).type is SlideType.card_grid


def test_title(tokens_of):
    d = _decide(tokens_of, "# Welcome\n\nA short subtitle.")
    assert d.type is SlideType.title
    assert d.confidence == pytest.approx(0.7)


def test_heading_alone_is_title(tokens_of):
    assert _decide(tokens_of, "## Part Two").type is SlideType.title


def test_long_text_is_not_title(tokens_of):
    d = _decide(tokens_of, "# Essay\n\n" + "word " * 80)
    assert d.fallback


def test_fallback_is_low_confidence_card_grid(tokens_of):
    """Nothing matches a bare paragraph; the default is a flagged two-column card grid."""
    d = _decide(tokens_of, "Just some text without a heading.")
    assert d.type is SlideType.card_grid
    assert d.fallback
    assert d.cols == 2
    assert d.confidence < min(r.confidence for r in MAPPING_RULES)


def test_fallback_on_empty_pattern():
    d = determine_slide_type(ContentPattern())
    assert d.fallback


def test_card_grid_cols_clamped():
    assert card_grid_cols(ContentPattern(top_level_item_count=1)) == 2
    assert card_grid_cols(ContentPattern(top_level_item_count=9)) == 4


def test_card_grid_counts_top_level_items(tokens_of):
    """Nested items do not add columns; cols matches the number of cards."""
    d = _decide(tokens_of, "## Stack\n\n- Web\n  - React\n  - Vue\n- API\n  - FastAPI\n- Data")
    assert d.type is SlideType.card_grid
    assert d.cols == 3


def test_single_item_with_children_is_not_card_grid(tokens_of):
    """One top-level item is too few for a card grid, however many sub-items it has."""
    d = _decide(tokens_of, "## Tools\n\n- Editors\n  - Vim\n  - Emacs")
    assert d.fallback


# --- descriptions ---

@pytest.mark.parametrize("slide_type", list(SlideType))
def test_every_type_has_description(slide_type):
    assert get_slide_type_description(slide_type) != GENERIC_DESCRIPTION


def test_description_accepts_string_values():
    assert get_slide_type_description("card-grid") == get_slide_type_description(SlideType.card_grid)


def test_unknown_type_gets_generic_description():
    assert get_slide_type_description("hologram") == GENERIC_DESCRIPTION
