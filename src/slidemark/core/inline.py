"""Inline markdown scanning: links, images, and plain-text extraction"""

import re

from slidemark.core.models import Image, Inline, Link, Text


# Alternation order matters: code spans hide their contents, images win over links.
# Backtick runs match only at their exact length and link brackets do not nest.
INLINE_RE = re.compile(
    r'(?P<code>(?<!`)(?P<ticks>`+)(?!`)(?P<code_body>.+?)(?<!`)(?P=ticks)(?!`))'
    r'|(?P<image>!\[(?P<alt>[^\[\]]*)\]\((?P<src>[^)\s]+)(?:\s+"[^"]*")?\s*\))'
    r'|(?P<link>\[(?P<label>[^\[\]]+)\]\((?P<href>[^)\s]+)(?:\s+"[^"]*")?\s*\))'
)

_STRIP_RULES: tuple[tuple[re.Pattern, str], ...] = (
    (re.compile(r'!\[([^\[\]]*)\]\([^)]*\)'), r'\1'),   # image -> alt text
    (re.compile(r'\[([^\[\]]+)\]\([^)]*\)'), r'\1'),    # link -> label
    (re.compile(r'(?<!`)(`+)(?!`)(.+?)(?<!`)\1(?!`)'), r'\2'),  # inline code
    (re.compile(r'\*\*(.+?)\*\*'), r'\1'),              # bold
    (re.compile(r'__(.+?)__'), r'\1'),
    (re.compile(r'~~(.+?)~~'), r'\1'),                  # strike-through
    (re.compile(r'(?<![\w*\\])\*(?!\s)(.+?)(?<![\s\\])\*(?![\w*])'), r'\1'),  # italic
    (re.compile(r'(?<![\w_\\])_(?!\s)(.+?)(?<![\s\\])_(?![\w_])'), r'\1'),
    (re.compile(r'\\([\\`*_{}\[\]()#+\-.!|~>])'), r'\1'),                # escapes
)


def parse_inline(text: str) -> tuple[Inline, ...]:
    """Split raw inline markdown into Text, Link, and Image tokens in order."""
    out: list[Inline] = []
    pos = 0
    for m in INLINE_RE.finditer(text):
        if m.group('code'):
            continue
        if m.start() > pos:
            out.append(Text(content=text[pos:m.start()]))
        if m.group('image'):
            out.append(Image(alt=m.group('alt'), src=m.group('src')))
        else:
            out.append(Link(text=m.group('label'), href=m.group('href')))
        pos = m.end()
    if pos < len(text):
        out.append(Text(content=text[pos:]))
    return tuple(out)


def extract_links(text: str) -> list[Link]:
    """Return every [text](href) in document order; images and code spans excluded."""
    return [
        Link(text=m.group('label'), href=m.group('href'))
        for m in INLINE_RE.finditer(text) if m.group('link')
    ]


def extract_images(text: str) -> list[Image]:
    """Return every ![alt](src) in document order; code spans excluded."""
    return [
        Image(alt=m.group('alt'), src=m.group('src'))
        for m in INLINE_RE.finditer(text) if m.group('image')
    ]


def strip_markdown_formatting(text: str) -> str:
    """Remove inline markup and return plain text.

    The rewrites are applied until nothing changes, so the result is a fixed
    point and stripping it again is a no-op. Every rewrite shortens the string,
    which bounds the loop.
    """
    while True:
        stripped = text
        for pattern, repl in _STRIP_RULES:
            stripped = pattern.sub(repl, stripped)
        if stripped == text:
            return stripped
        text = stripped
