"""Slide mapping: segment tokens into runs, classify each, aggregate statistics"""

import logging
from typing import Optional

from slidemark.config import Settings
from slidemark.core.analyze import analyze_content_pattern
from slidemark.core.classify import determine_slide_type
from slidemark.core.content import build_content
from slidemark.core.models import (
    Heading,
    HorizontalRule,
    MappingStatistics,
    ParseResult,
    SlideData,
    SlideMappingResult,
    SlideType,
)


logger = logging.getLogger(__name__)


def segment_tokens(tokens, max_level: int = 2) -> list[list]:
    """Split tokens into runs at horizontal rules and at headings <= max_level.

    Rules are dropped; a heading that opens the current run does not split it.
    Empty runs (e.g. consecutive rules) are discarded.
    """
    runs: list[list] = [[]]

    for tok in tokens:
        if isinstance(tok, HorizontalRule):
            runs.append([])
            continue
        if isinstance(tok, Heading) and tok.level <= max_level and runs[-1]:
            runs.append([])
        runs[-1].append(tok)

    return [r for r in runs if r]


def map_tokens_to_slides(parse_result, settings: Optional[Settings] = None) -> list[SlideMappingResult]:
    """Classify every run of a ParseResult (or bare token sequence) in document order."""
    settings = settings or Settings()
    tokens = parse_result.tokens if isinstance(parse_result, ParseResult) else tuple(parse_result)
    results = []

    for position, run in enumerate(segment_tokens(tokens, settings.max_level)):
        pattern = analyze_content_pattern(run)
        decision = determine_slide_type(pattern, settings)
        logger.debug("Slide %d -> %s (%.2f): %s", position, decision.type.value, decision.confidence, decision.rationale)
        results.append(SlideMappingResult(
            type=decision.type,
            pattern=pattern,
            rationale=decision.rationale,
            confidence=decision.confidence,
            fallback=decision.fallback,
            content=build_content(decision, run),
            tokens=tuple(run),
        ))

    return results


def get_mapping_statistics(results: list[SlideMappingResult]) -> MappingStatistics:
    """Counts per slide type (zeros included), total, fallbacks, and mean confidence."""
    counts = {slide_type: 0 for slide_type in SlideType}
    for result in results:
        counts[result.type] += 1
    return MappingStatistics(
        counts_by_type=counts,
        total=len(results),
        fallback_count=sum(1 for r in results if r.fallback),
        average_confidence=sum(r.confidence for r in results) / len(results) if results else 0.0,
    )


def to_slide_data(results: list[SlideMappingResult]) -> list[SlideData]:
    """Boundary records {type, content, order}; order is the index in the output."""
    return [
        SlideData(type=result.type, content=result.content, order=order)
        for order, result in enumerate(results)
    ]
