"""Slide content payloads: one builder per slide type

Each builder turns a run of tokens into the `content` mapping the renderer
expects for that slide type. Keys follow the renderer's camelCase props and
ids are positional, so the same run always yields the same payload.
"""

import re
from typing import Any, Callable, Optional

from slidemark.core.inline import strip_markdown_formatting
from slidemark.core.models import (
    Blockquote,
    Heading,
    List,
    ListItem,
    Paragraph,
    SlideDecision,
    SlideType,
    Table,
)
from slidemark.core.parse import plain_text


LEADING_BOLD_RE = re.compile(r'^(?:\*\*(.+?)\*\*|__(.+?)__)')
SEPARATOR_RE = re.compile(r'^(.+?)(?::\s+|\s+[-–—]\s+)(.+)$')
LEADING_SEPARATOR_RE = re.compile(r'^[:\-–—]\s*')
PRESENTER_RE = re.compile(r'^(?:presenter|speaker|author|presented by)(?:\s*[:：]\s*|\s+)(.+)$', re.IGNORECASE)
DATE_RE = re.compile(r'^date\s*[:：]\s*(.+)$', re.IGNORECASE)
ISO_DATE_RE = re.compile(r'^\d{4}[-/.]\d{1,2}[-/.]\d{1,2}\b')
QUOTE_MARKS = '"\'“”‘’«»'
TIMELINE_VERTICAL_AFTER = 4


def _plain(text: str) -> str:
    return " ".join(strip_markdown_formatting(text).split())


def _compact(content: dict[str, Any]) -> dict[str, Any]:
    """Drop optional fields that have no value."""
    return {k: v for k, v in content.items() if v is not None}


def split_label(content: str) -> tuple[str, str]:
    """Split '**Label**: description' or 'Label - description' into (title, description)."""
    content = content.strip()
    m = LEADING_BOLD_RE.match(content)
    if m:
        rest = LEADING_SEPARATOR_RE.sub('', content[m.end():].strip())
        return _plain(m.group(1) or m.group(2)), _plain(rest)
    m = SEPARATOR_RE.match(content)
    if m:
        return _plain(m.group(1)), _plain(m.group(2))
    return _plain(content), ""


def _first_heading(tokens) -> Optional[Heading]:
    return next((t for t in tokens if isinstance(t, Heading)), None)


def _title(tokens) -> Optional[str]:
    heading = _first_heading(tokens)
    return heading.text if heading else None


def _grouped_items(tokens) -> list[tuple[ListItem, list[ListItem]]]:
    """Top-level list items paired with the nested items that follow them."""
    groups: list[tuple[ListItem, list[ListItem]]] = []
    for tok in tokens:
        if not isinstance(tok, List):
            continue
        for item in tok.items:
            if item.depth == 0 or not groups:
                groups.append((item, []))
            else:
                groups[-1][1].append(item)
    return groups


def _with_children(description: str, children: list[ListItem]) -> str:
    extra = ", ".join(child.text for child in children if child.text)
    if not extra:
        return description
    return f"{description} ({extra})" if description else extra


# --- builders ---

def build_title(tokens) -> dict[str, Any]:
    presenter = date = None
    subtitle = []
    for tok in tokens:
        if not isinstance(tok, Paragraph):
            continue
        for line in tok.content.split("\n"):
            line = _plain(line)
            if (m := PRESENTER_RE.match(line)) and presenter is None:
                presenter = m.group(1).strip()
            elif (m := DATE_RE.match(line)) and date is None:
                date = m.group(1).strip()
            elif ISO_DATE_RE.match(line) and date is None:
                date = line
            elif line:
                subtitle.append(line)
    return _compact({
        "title": _title(tokens) or "",
        "subtitle": " ".join(subtitle) or None,
        "presenter": presenter,
        "date": date,
    })


def build_card_grid(tokens, cols: int = 2) -> dict[str, Any]:
    cards = []
    for item, children in _grouped_items(tokens):
        title, description = split_label(item.content)
        cards.append((title, _with_children(description, children)))

    if not cards:
        for tok in tokens:
            if isinstance(tok, Heading):
                continue
            if isinstance(tok, Paragraph):
                cards.append(split_label(tok.content))
            elif text := plain_text([tok]):
                cards.append(("", text))

    return _compact({
        "title": _title(tokens),
        "cards": [
            {"id": f"card-{n}", "title": title, "description": description}
            for n, (title, description) in enumerate(cards, start=1)
        ],
        "cols": cols,
    })


def _side_from_item(item: ListItem, children: list[ListItem]) -> dict[str, Any]:
    if children:
        return {"title": item.text, "items": [child.text for child in children]}
    title, description = split_label(item.content)
    return {"title": title, "items": [part.strip() for part in re.split(r'[,，]', description) if part.strip()]}


def build_comparison(tokens) -> dict[str, Any]:
    tokens = list(tokens)
    lists = [t for t in tokens if isinstance(t, List)]
    labels = {
        n + 1: tok.text
        for n, tok in enumerate(tokens[:-1])
        if isinstance(tok, Heading) and isinstance(tokens[n + 1], List)
    }
    side_headings = set(labels.values()) if len(labels) >= 2 else set()
    title = next((t.text for t in tokens if isinstance(t, Heading) and t.text not in side_headings), None)

    empty = {"title": "", "items": []}
    if len(lists) >= 2:
        index = [n for n, tok in enumerate(tokens) if isinstance(tok, List)]
        left, right = (
            {
                "title": labels.get(n, "") if side_headings else "",
                "items": [item.text for item in tokens[n].items],
            }
            for n in index[:2]
        )
    else:
        groups = _grouped_items(tokens)
        if len(groups) >= 2:
            left, right = (_side_from_item(item, children) for item, children in groups[:2])
        else:
            left = right = empty

    return _compact({
        "title": title,
        "leftSide": left,
        "rightSide": right,
        "vsText": "VS",
    })


def build_timeline(tokens) -> dict[str, Any]:
    items = []
    for n, (item, children) in enumerate(_grouped_items(tokens), start=1):
        title, description = split_label(item.content)
        items.append(_compact({
            "id": f"step-{n}",
            "step": item.ordinal if item.ordinal is not None else n,
            "title": title,
            "description": _with_children(description, children) or None,
        }))
    return _compact({
        "title": _title(tokens),
        "items": items,
        "direction": "vertical" if len(items) > TIMELINE_VERTICAL_AFTER else "horizontal",
    })


def build_quote(tokens) -> dict[str, Any]:
    quote = next((t for t in tokens if isinstance(t, Blockquote)), None)
    text = quote.content if quote else plain_text(tokens)
    author = source = None
    if quote and quote.author:
        author, _, source = (part.strip() for part in quote.author.partition(","))
    return _compact({
        "quote": text.strip().strip(QUOTE_MARKS).strip(),
        "author": author or None,
        "source": source or None,
        "showQuotationMarks": True,
    })


def _find_table(tokens) -> Optional[Table]:
    for tok in tokens:
        if isinstance(tok, Table):
            return tok
        if isinstance(tok, Blockquote) and (found := _find_table(tok.children)):
            return found
    return None


def build_table(tokens) -> dict[str, Any]:
    table = _find_table(tokens)
    headers = list(table.headers) if table else []
    rows = [
        {
            "id": f"row-{n}",
            "cells": [{"content": cell, "align": table.alignments[i]} for i, cell in enumerate(row)],
        }
        for n, row in enumerate(table.rows if table else (), start=1)
    ]
    return _compact({
        "title": _title(tokens),
        "headers": headers,
        "rows": rows,
        "striped": True,
        "bordered": True,
    })


CONTENT_BUILDERS: dict[SlideType, Callable[..., dict[str, Any]]] = {
    SlideType.title: build_title,
    SlideType.card_grid: build_card_grid,
    SlideType.comparison: build_comparison,
    SlideType.timeline: build_timeline,
    SlideType.quote: build_quote,
    SlideType.table: build_table,
}


def build_content(decision: SlideDecision, tokens) -> dict[str, Any]:
    """Build the content payload for a run according to its classified type."""
    if decision.type is SlideType.card_grid:
        return build_card_grid(tokens, decision.cols or 2)
    return CONTENT_BUILDERS[decision.type](tokens)
