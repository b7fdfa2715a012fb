"""Markdown source loading: file discovery, YAML frontmatter, and slugs"""

import re
from pathlib import Path
from typing import Any

import yaml


FRONTMATTER_RE = re.compile(r'^---\s*\n(.*?)\n---\s*(?:\n|$)', re.DOTALL)
MD_EXTENSIONS = {'.md', '.mdx', '.markdown'}


def strip_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Return (frontmatter_dict, body) with a leading YAML header removed.

    A leading '---' block that is valid YAML but not a mapping (or is empty)
    is slide content from a deck opening with a rule, so the text is returned
    untouched.
    """
    m = FRONTMATTER_RE.match(text)
    if not m:
        return {}, text
    try:
        fm = yaml.safe_load(m.group(1))
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML frontmatter: {e}") from e
    if not isinstance(fm, dict):
        return {}, text
    return fm, text[m.end():]


def discover_files(path: Path) -> list[Path]:
    """Return sorted markdown files under path, or [path] if it is a single markdown file."""
    if path.is_file():
        return [path] if path.suffix in MD_EXTENSIONS else []
    return sorted(p for p in path.rglob('*') if p.suffix in MD_EXTENSIONS)


def slugify(text: str) -> str:
    """Lowercase, hyphen-separated identifier used for output file names."""
    text = re.sub(r'[^\w\s-]', '', text.lower())
    text = re.sub(r'[\s_]+', '-', text)
    return re.sub(r'-+', '-', text).strip('-') or "deck"


def load_source(path: Path) -> tuple[dict[str, Any], str]:
    """Read a markdown file and split off its frontmatter."""
    return strip_frontmatter(path.read_text(encoding='utf-8'))
