"""Pipeline step functions: markdown file -> slide records, and batch output"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

from slidemark.config import Settings
from slidemark.core.mapper import get_mapping_statistics, map_tokens_to_slides, to_slide_data
from slidemark.core.models import SlideData, SlideMappingResult
from slidemark.core.parse import parse_markdown
from slidemark.core.source import discover_files, load_source, slugify


@dataclass
class MappedDoc:
    """One source file after mapping; not persisted."""
    path:        Path
    slug:        str
    frontmatter: dict[str, Any]
    results:     list[SlideMappingResult]


def markdown_to_slides(text: str, settings: Optional[Settings] = None) -> list[SlideData]:
    """Parse and map a markdown string straight to ordered slide records."""
    return to_slide_data(map_tokens_to_slides(parse_markdown(text), settings))


def map_file(path: Path, settings: Settings) -> MappedDoc:
    """Load a markdown file (frontmatter stripped) and map its body to slides."""
    frontmatter, body = load_source(path)
    slug = frontmatter.get('slug') or slugify(path.stem)
    return MappedDoc(
        path=path,
        slug=str(slug),
        frontmatter=frontmatter,
        results=map_tokens_to_slides(parse_markdown(body), settings),
    )


def build_payload(doc: MappedDoc) -> dict[str, Any]:
    """Serializable document payload: slide records plus mapping statistics."""
    return {
        "slug": doc.slug,
        "path": str(doc.path),
        "frontmatter": doc.frontmatter,
        "slides": [s.model_dump(mode="json") for s in to_slide_data(doc.results)],
        "statistics": get_mapping_statistics(doc.results).model_dump(mode="json"),
    }


def dump_payload(payload: dict[str, Any], fmt: str = "json") -> str:
    if fmt == "yaml":
        return yaml.safe_dump(payload, sort_keys=False, allow_unicode=True)
    return json.dumps(payload, indent=2, ensure_ascii=False, default=str)


def run_map(path: str, settings: Settings, output_dir: Path) -> list[tuple[Path, Path]]:
    """Map every markdown file under path and write one file per document. Returns (source, output) pairs."""
    output_dir.mkdir(parents=True, exist_ok=True)
    results = []
    for p in discover_files(Path(path)):
        try:
            doc = map_file(p, settings)
            out_file = output_dir / f"{doc.slug}.{settings.output_format}"
            out_file.write_text(dump_payload(build_payload(doc), settings.output_format), encoding='utf-8')
            results.append((p, out_file))
        except Exception as e:
            raise RuntimeError(f"Failed to map {p}: {e}") from e
    return results
