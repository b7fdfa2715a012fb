"""Line-oriented markdown tokenizer: raw text to typed block tokens

The parser is total: any string yields a ParseResult. Lines that fit no
block rule, and constructs that are left unterminated, degrade to paragraphs.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Optional

from slidemark.core.inline import parse_inline, strip_markdown_formatting
from slidemark.core.models import (
    Blockquote,
    CodeBlock,
    Heading,
    HorizontalRule,
    Image,
    Link,
    List,
    ListItem,
    Paragraph,
    ParseResult,
    Table,
    Token,
)


logger = logging.getLogger(__name__)

INDENT_UNIT = 2          # spaces per list nesting level
TAB_SIZE = 4
MAX_QUOTE_DEPTH = 32     # deeper '>' nesting is kept as paragraph text

FENCE_RE = re.compile(r'^ {0,3}(?P<fence>`{3,}|~{3,})[ \t]*(?P<info>[^`]*?)[ \t]*$')
FENCE_CLOSE_RE = re.compile(r'^ {0,3}(?P<fence>`{3,}|~{3,})[ \t]*$')
HR_RE = re.compile(r'^ {0,3}([-*_])(?:[ \t]*\1){2,}[ \t]*$')
HEADING_RE = re.compile(r'^ {0,3}(#{1,6})[ \t]+(.+?)(?:[ \t]+#+)?[ \t]*$')
QUOTE_RE = re.compile(r'^ {0,3}> ?(.*)$')
ITEM_RE = re.compile(r'^(?P<indent>[ \t]*)(?P<marker>[-*+]|\d{1,9}[.)])[ \t]+(?P<body>.*)$')
TABLE_SEP_RE = re.compile(r'^[ \t]*\|?[ \t]*:?-+:?[ \t]*(?:\|[ \t]*:?-+:?[ \t]*)*\|?[ \t]*$')
CELL_SPLIT_RE = re.compile(r'(?<!\\)\|')
ATTRIBUTION_RE = re.compile(r'^(?:—|–|―|--)[ \t]*(.+)$')


@dataclass
class _ItemDraft:
    """Mutable list item state while its continuation lines are collected."""
    depth: int
    ordinal: Optional[int]
    body: list[str] = field(default_factory=list)
    raw: list[str] = field(default_factory=list)

    def freeze(self) -> ListItem:
        content = " ".join(part for part in self.body if part)
        return ListItem(
            content=content,
            text=_plain(content),
            depth=self.depth,
            ordinal=self.ordinal,
            children=parse_inline(content),
            raw="\n".join(self.raw),
        )


def _plain(content: str) -> str:
    """Stripped text collapsed to a single line."""
    return " ".join(strip_markdown_formatting(content).split())


def _indent(prefix: str) -> int:
    """Column width of a line's leading whitespace (tabs expanded)."""
    expanded = prefix.expandtabs(TAB_SIZE)
    return len(expanded) - len(expanded.lstrip(' \t'))


def _is_ordered(marker: str) -> bool:
    return marker[0].isdigit()


def _item_match(line: str) -> Optional[re.Match]:
    """ITEM_RE match for list item lines; thematic breaks like '* * *' are not items."""
    if HR_RE.match(line):
        return None
    return ITEM_RE.match(line)


def _next_nonblank(lines: list[str], i: int) -> Optional[int]:
    while i < len(lines):
        if lines[i].strip():
            return i
        i += 1
    return None


def plain_text(tokens) -> str:
    """Concatenate the plain text of block tokens (recursing into quotes)."""
    parts = []
    for tok in tokens:
        if isinstance(tok, (Heading, Paragraph, ListItem)):
            parts.append(tok.text)
        elif isinstance(tok, List):
            parts.extend(item.text for item in tok.items)
        elif isinstance(tok, Blockquote):
            parts.append(tok.content)
        elif isinstance(tok, Table):
            parts.extend(_plain(cell) for row in (tok.headers, *tok.rows) for cell in row)
        elif isinstance(tok, CodeBlock):
            parts.append(tok.code)
    return " ".join(p for p in parts if p)


# --- block predicates ---

def _is_table_start(lines: list[str], i: int) -> bool:
    if '|' not in lines[i] or i + 1 >= len(lines):
        return False
    sep = lines[i + 1]
    return '|' in sep and bool(TABLE_SEP_RE.match(sep))


def _starts_block(lines: list[str], i: int) -> bool:
    """True when line i would open a non-paragraph block (ends a paragraph)."""
    line = lines[i]
    return bool(
        FENCE_RE.match(line)
        or HR_RE.match(line)
        or _is_table_start(lines, i)
        or _heading(line)
        or QUOTE_RE.match(line)
        or _item_match(line)
    )


# --- block builders ---

def _heading(line: str) -> Optional[Heading]:
    m = HEADING_RE.match(line)
    if not m or not m.group(2).strip():
        return None
    content = m.group(2).strip()
    return Heading(
        level=len(m.group(1)),
        content=content,
        text=_plain(content),
        children=parse_inline(content),
        raw=line,
    )


def _make_paragraph(stripped: list[str], raw: list[str]) -> Paragraph:
    content = "\n".join(stripped)
    return Paragraph(
        content=content,
        text=_plain(content),
        children=parse_inline(content),
        raw="\n".join(raw),
    )


def _parse_paragraph(lines: list[str], i: int) -> tuple[Paragraph, int]:
    start = i
    while i < len(lines) and lines[i].strip() and (i == start or not _starts_block(lines, i)):
        i += 1
    return _make_paragraph([l.strip() for l in lines[start:i]], lines[start:i]), i


def _closing_fences(lines: list[str]) -> list[dict[str, int]]:
    """For each line, the longest bare closing fence of each character after it."""
    longest = {'`': 0, '~': 0}
    reach = []
    for line in reversed(lines):
        reach.append(dict(longest))
        m = FENCE_CLOSE_RE.match(line)
        if m:
            fence = m.group('fence')
            longest[fence[0]] = max(longest[fence[0]], len(fence))
    reach.reverse()
    return reach


def _find_fence_close(lines: list[str], i: int, fence: str) -> Optional[int]:
    for j in range(i + 1, len(lines)):
        m = FENCE_CLOSE_RE.match(lines[j])
        if m and m.group('fence')[0] == fence[0] and len(m.group('fence')) >= len(fence):
            return j
    return None


def _parse_fence(lines: list[str], i: int, m: re.Match, closes: list[dict[str, int]]) -> tuple[Token, int]:
    fence = m.group('fence')
    end = None
    if closes[i][fence[0]] >= len(fence):
        end = _find_fence_close(lines, i, fence)
    if end is None:
        logger.debug("Unterminated %s fence at line %d kept as paragraph", fence, i + 1)
        return _parse_paragraph(lines, i)
    info = m.group('info').strip()
    token = CodeBlock(
        language=info.split()[0] if info else None,
        code="\n".join(lines[i + 1:end]),
        fence=fence,
        raw="\n".join(lines[i:end + 1]),
    )
    return token, end + 1


def _split_row(line: str) -> list[str]:
    """Split a pipe row into trimmed cells; outer pipes optional, '\\|' kept literal."""
    s = line.strip()
    if s.startswith('|'):
        s = s[1:]
    if s.endswith('|') and not s.endswith('\\|'):
        s = s[:-1]
    return [c.strip().replace('\\|', '|') for c in CELL_SPLIT_RE.split(s)]


def _alignment(cell: str) -> str:
    cell = cell.strip()
    if cell.startswith(':') and cell.endswith(':') and len(cell) > 1:
        return "center"
    if cell.endswith(':'):
        return "right"
    return "left"


def _fit_row(cells: list[str], width: int, line_no: int) -> tuple[str, ...]:
    """Pad short rows with empty cells; truncate long rows (logged, raw keeps them)."""
    if len(cells) > width:
        logger.warning(
            "Table row at line %d has %d cells, header has %d; dropping %r",
            line_no, len(cells), width, cells[width:],
        )
        return tuple(cells[:width])
    return tuple(cells + [""] * (width - len(cells)))


def _parse_table(lines: list[str], i: int) -> tuple[Table, int]:
    start = i
    headers = _split_row(lines[i])
    width = len(headers)
    aligns = [_alignment(c) for c in _split_row(lines[i + 1])][:width]
    aligns += ["left"] * (width - len(aligns))

    rows = []
    i += 2
    while i < len(lines) and lines[i].strip() and '|' in lines[i]:
        rows.append(_fit_row(_split_row(lines[i]), width, i + 1))
        i += 1

    token = Table(
        headers=tuple(headers),
        rows=tuple(rows),
        alignments=tuple(aligns),
        raw="\n".join(lines[start:i]),
    )
    return token, i


def _parse_blockquote(lines: list[str], i: int, depth: int) -> tuple[Blockquote, int]:
    start = i
    inner = []
    while i < len(lines):
        m = QUOTE_RE.match(lines[i])
        if not m:
            break
        inner.append(m.group(1))
        i += 1

    author = None
    last = max((n for n, l in enumerate(inner) if l.strip()), default=None)
    if last:
        m = ATTRIBUTION_RE.match(inner[last].strip())
        if m and any(l.strip() for l in inner[:last]):
            author = m.group(1).strip()
            inner = inner[:last]

    if depth >= MAX_QUOTE_DEPTH:
        kept = [l.strip() for l in inner if l.strip()]
        children = (_make_paragraph(kept, inner),) if kept else ()
    else:
        children = tuple(_parse_blocks(inner, depth + 1))

    token = Blockquote(
        children=children,
        content=plain_text(children),
        author=author,
        raw="\n".join(lines[start:i]),
    )
    return token, i


def _continues_list(line: str, base: int, ordered: bool) -> bool:
    """Whether a line after a blank gap still belongs to the list being built."""
    m = _item_match(line)
    if m:
        return _indent(m.group('indent')) > base or _is_ordered(m.group('marker')) == ordered
    return _indent(line) >= base + INDENT_UNIT


def _parse_list(lines: list[str], i: int) -> tuple[List, int]:
    """Collect a list block; depth is indentation in INDENT_UNIT steps, at most one deeper than the previous item."""
    first = _item_match(lines[i])
    ordered = _is_ordered(first.group('marker'))
    base = _indent(first.group('indent'))
    start = i
    drafts: list[_ItemDraft] = []

    while i < len(lines):
        line = lines[i]
        if not line.strip():
            nxt = _next_nonblank(lines, i)
            if nxt is None or not _continues_list(lines[nxt], base, ordered):
                break
            i = nxt
            continue

        m = _item_match(line)
        if m:
            indent = _indent(m.group('indent'))
            marker = m.group('marker')
            if indent <= base and _is_ordered(marker) != ordered:
                break
            prev = drafts[-1].depth if drafts else -1
            depth = max(0, min((indent - base) // INDENT_UNIT, prev + 1))
            ordinal = int(marker[:-1]) if _is_ordered(marker) else None
            drafts.append(_ItemDraft(depth=depth, ordinal=ordinal, body=[m.group('body').strip()], raw=[line]))
        elif drafts and _indent(line) >= base + INDENT_UNIT:
            drafts[-1].body.append(line.strip())
            drafts[-1].raw.append(line)
        else:
            break
        i += 1

    token = List(
        ordered=ordered,
        items=tuple(d.freeze() for d in drafts),
        raw="\n".join(lines[start:i]).rstrip("\n"),
    )
    return token, i


# --- driver ---

def _parse_block(lines: list[str], i: int, depth: int, closes: list[dict[str, int]]) -> tuple[Token, int]:
    line = lines[i]
    fence = FENCE_RE.match(line)
    if fence:
        return _parse_fence(lines, i, fence, closes)
    if HR_RE.match(line):
        return HorizontalRule(raw=line), i + 1
    if _is_table_start(lines, i):
        return _parse_table(lines, i)
    heading = _heading(line)
    if heading:
        return heading, i + 1
    if QUOTE_RE.match(line):
        return _parse_blockquote(lines, i, depth)
    if _item_match(line):
        return _parse_list(lines, i)
    return _parse_paragraph(lines, i)


def _parse_blocks(lines: list[str], depth: int = 0) -> list[Token]:
    tokens = []
    closes = _closing_fences(lines)
    i = 0
    while i < len(lines):
        if not lines[i].strip():
            i += 1
            continue
        token, i = _parse_block(lines, i, depth, closes)
        tokens.append(token)
    return tokens


def _inventory(tokens) -> tuple[list[Link], list[Image]]:
    """Collect links and images from every inline position, in document order."""
    links: list[Link] = []
    images: list[Image] = []

    def _take(children) -> None:
        for child in children:
            if isinstance(child, Link):
                links.append(child)
            elif isinstance(child, Image):
                images.append(child)

    def _walk(toks) -> None:
        for tok in toks:
            if isinstance(tok, (Heading, Paragraph, ListItem)):
                _take(tok.children)
            elif isinstance(tok, List):
                _walk(tok.items)
            elif isinstance(tok, Blockquote):
                _walk(tok.children)
            elif isinstance(tok, Table):
                for row in (tok.headers, *tok.rows):
                    for cell in row:
                        _take(parse_inline(cell))

    _walk(tokens)
    return links, images


def parse_markdown(text: str) -> ParseResult:
    """Parse markdown text into top-level block tokens plus link/image inventories."""
    tokens = _parse_blocks(text.splitlines())
    links, images = _inventory(tokens)
    logger.debug("Parsed %d top-level tokens, %d links, %d images", len(tokens), len(links), len(images))
    return ParseResult(tokens=tuple(tokens), links=tuple(links), images=tuple(images), raw=text)
