"""Content pattern analysis: structural fingerprint of a run of tokens"""

import re
from collections import Counter

from slidemark.core.models import (
    Blockquote,
    CodeBlock,
    ContentPattern,
    Heading,
    List,
    ListItem,
    Paragraph,
    Table,
)


COMPARISON_RE = re.compile(r'\b(?:vs|versus)\b', re.IGNORECASE)

# Top-level block categories used for dominance; headings are excluded.
_CATEGORY = {Paragraph: "text", List: "list", Blockquote: "quote", Table: "table", CodeBlock: "code"}


def _walk_items(tokens) -> list[ListItem]:
    """List items at every depth, including lists nested in block quotes."""
    items: list[ListItem] = []
    for tok in tokens:
        if isinstance(tok, List):
            items.extend(tok.items)
        elif isinstance(tok, Blockquote):
            items.extend(_walk_items(tok.children))
    return items


def _contains(tokens, kind: type) -> bool:
    for tok in tokens:
        if isinstance(tok, kind):
            return True
        if isinstance(tok, Blockquote) and _contains(tok.children, kind):
            return True
    return False


def _has_two_nested_groups(lst: List) -> bool:
    """Exactly two top-level items, each followed by deeper sub-items."""
    tops = [n for n, item in enumerate(lst.items) if item.depth == 0]
    if len(tops) != 2:
        return False
    bounds = tops + [len(lst.items)]
    return all(bounds[k + 1] - bounds[k] > 1 for k in range(2))


def _group_count(lists: list[List], heading_text: str) -> int:
    if len(lists) != 1:
        return len(lists)
    lst = lists[0]
    if _has_two_nested_groups(lst):
        return 2
    tops = [item for item in lst.items if item.depth == 0]
    if len(tops) == 2 and COMPARISON_RE.search(heading_text):
        return 2
    return 1


def _shape(counts: Counter, has_table: bool, has_heading: bool, list_count: int) -> str:
    if has_table:
        return "table"
    if not counts:
        return "heading" if has_heading else "empty"
    ranked = counts.most_common()
    if len(ranked) > 1 and ranked[0][1] == ranked[1][1]:
        return "mixed"
    top = ranked[0][0]
    if top == "list":
        return "list" if list_count == 1 else "lists"
    return top


def analyze_content_pattern(tokens) -> ContentPattern:
    """Summarize a run of top-level tokens into a ContentPattern.

    Pure and deterministic. List items are counted recursively; has_quote
    requires block quotes to outnumber every other non-heading block kind;
    has_numbered_list requires every top-level list to be ordered.
    """
    tokens = list(tokens)
    headings = [t for t in tokens if isinstance(t, Heading)]
    lists = [t for t in tokens if isinstance(t, List)]
    paragraphs = [t for t in tokens if isinstance(t, Paragraph)]
    counts = Counter(_CATEGORY[type(t)] for t in tokens if type(t) in _CATEGORY)

    items = _walk_items(tokens)
    lengths = [len(item.text) for item in items]
    has_table = _contains(tokens, Table)
    has_heading = bool(headings)

    quotes = counts.get("quote", 0)
    has_quote = quotes > 0 and all(quotes > n for kind, n in counts.items() if kind != "quote")

    return ContentPattern(
        item_count=len(items),
        top_level_item_count=sum(1 for lst in lists for item in lst.items if item.depth == 0),
        average_item_length=sum(lengths) / len(lengths) if lengths else 0.0,
        max_nesting_depth=max((item.depth for item in items), default=0),
        list_count=len(lists),
        list_group_count=_group_count(lists, headings[0].text if headings else ""),
        paragraph_count=len(paragraphs),
        paragraph_length=sum(len(p.text) for p in paragraphs),
        heading_count=len(headings),
        title_level=headings[0].level if headings else None,
        has_table=has_table,
        has_quote=has_quote,
        has_numbered_list=bool(lists) and all(lst.ordered for lst in lists),
        has_heading=has_heading,
        has_code=_contains(tokens, CodeBlock),
        shape=_shape(counts, has_table, has_heading, len(lists)),
    )
