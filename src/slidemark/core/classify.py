"""Slide type classification: an ordered, first-match-wins rule list"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Optional

from slidemark.config import Settings
from slidemark.core.models import ContentPattern, SlideDecision, SlideType


logger = logging.getLogger(__name__)

FALLBACK_COLS = 2
FALLBACK_CONFIDENCE = 0.4


@dataclass(frozen=True)
class SlideMappingRule:
    """A predicate over a ContentPattern and the slide type it selects."""
    name:       str
    type:       SlideType
    predicate:  Callable[[ContentPattern, Settings], bool]
    rationale:  str
    confidence: float


def _is_card_grid(p: ContentPattern, s: Settings) -> bool:
    return (
        p.list_group_count == 1
        and 2 <= p.top_level_item_count <= 4
        and p.average_item_length <= s.short_item_length
    )


def _is_title(p: ContentPattern, s: Settings) -> bool:
    return (
        p.has_heading
        and p.shape in ("heading", "text")
        and p.paragraph_count <= s.title_max_paragraphs
        and p.paragraph_length <= s.title_max_length
    )


# Order is the contract: reordering changes classification results.
MAPPING_RULES: tuple[SlideMappingRule, ...] = (
    SlideMappingRule(
        "table", SlideType.table,
        lambda p, s: p.has_table,
        "Run contains a table", 0.95,
    ),
    SlideMappingRule(
        "quote", SlideType.quote,
        lambda p, s: p.has_quote and p.item_count == 0,
        "Block quote dominates the run and there are no list items", 0.9,
    ),
    SlideMappingRule(
        "timeline", SlideType.timeline,
        lambda p, s: p.has_numbered_list and p.item_count >= 3,
        "Numbered list with three or more steps", 0.8,
    ),
    SlideMappingRule(
        "comparison", SlideType.comparison,
        lambda p, s: p.list_group_count == 2,
        "Two list groups to set side by side", 0.85,
    ),
    SlideMappingRule(
        "card-grid", SlideType.card_grid,
        _is_card_grid,
        "Single list of two to four short items", 0.75,
    ),
    SlideMappingRule(
        "title", SlideType.title,
        _is_title,
        "Heading with at most a short paragraph", 0.7,
    ),
)

SLIDE_TYPE_DESCRIPTIONS = MappingProxyType({
    SlideType.title:      "Title slide - opens the presentation or a new section",
    SlideType.card_grid:  "Card grid - a set of items or features laid out as cards",
    SlideType.comparison: "Comparison slide - two options or ideas side by side",
    SlideType.timeline:   "Timeline - a step-by-step process or chronological sequence",
    SlideType.quote:      "Quote slide - a highlighted quotation or key statement",
    SlideType.table:      "Table slide - data or information in rows and columns",
})
GENERIC_DESCRIPTION = "Slide - general presentation content"


def card_grid_cols(pattern: ContentPattern) -> int:
    """Column count for a card grid: one per top-level item, clamped to 2..4."""
    return min(max(pattern.top_level_item_count, 2), 4)


def determine_slide_type(pattern: ContentPattern, settings: Optional[Settings] = None) -> SlideDecision:
    """Return the decision of the first matching rule, or the card-grid fallback."""
    settings = settings or Settings()
    for rule in MAPPING_RULES:
        if rule.predicate(pattern, settings):
            logger.debug("Rule %r matched (shape=%s)", rule.name, pattern.shape)
            return SlideDecision(
                type=rule.type,
                rationale=rule.rationale,
                confidence=rule.confidence,
                cols=card_grid_cols(pattern) if rule.type is SlideType.card_grid else None,
            )

    logger.debug("No rule matched (shape=%s); using card-grid fallback", pattern.shape)
    return SlideDecision(
        type=SlideType.card_grid,
        rationale="No rule matched; low-confidence card-grid default",
        confidence=FALLBACK_CONFIDENCE,
        fallback=True,
        cols=FALLBACK_COLS,
    )


def get_slide_type_description(slide_type) -> str:
    """Describe a slide type; values outside SlideType get a generic description."""
    try:
        return SLIDE_TYPE_DESCRIPTIONS[SlideType(slide_type)]
    except ValueError:
        return GENERIC_DESCRIPTION
