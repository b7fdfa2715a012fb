"""Value objects for the parse, analyze, and map pipeline"""

from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class SlideType(str, Enum):
    """Restrict slides to the presentation archetypes the renderer knows"""
    title = "title"
    card_grid = "card-grid"
    comparison = "comparison"
    timeline = "timeline"
    quote = "quote"
    table = "table"


class Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


# --- inline tokens ---

class Text(Frozen):
    kind: Literal["text"] = "text"
    content: str


class Link(Frozen):
    kind: Literal["link"] = "link"
    text: str
    href: str


class Image(Frozen):
    kind: Literal["image"] = "image"
    alt: str
    src: str


Inline = Annotated[Union[Text, Link, Image], Field(discriminator="kind")]


# --- block tokens ---

class Heading(Frozen):
    kind: Literal["heading"] = "heading"
    level: int = Field(..., ge=1, le=6)
    content: str                    # raw inline markdown
    text: str                       # formatting stripped
    children: tuple[Inline, ...] = ()
    raw: str = ""


class Paragraph(Frozen):
    kind: Literal["paragraph"] = "paragraph"
    content: str                    # source lines joined with "\n"
    text: str                       # stripped, single line
    children: tuple[Inline, ...] = ()
    raw: str = ""


class ListItem(Frozen):
    kind: Literal["list_item"] = "list_item"
    content: str
    text: str
    depth: int = Field(default=0, ge=0)
    ordinal: Optional[int] = None   # number prefix for ordered items
    children: tuple[Inline, ...] = ()
    raw: str = ""


class List(Frozen):
    kind: Literal["list"] = "list"
    ordered: bool
    items: tuple[ListItem, ...]
    raw: str = ""


class Blockquote(Frozen):
    kind: Literal["blockquote"] = "blockquote"
    children: tuple["Token", ...] = ()
    content: str = ""               # plain text of the quoted blocks
    author: Optional[str] = None
    raw: str = ""


class CodeBlock(Frozen):
    kind: Literal["code_block"] = "code_block"
    language: Optional[str] = None
    code: str
    fence: str = "```"
    raw: str = ""


class HorizontalRule(Frozen):
    kind: Literal["horizontal_rule"] = "horizontal_rule"
    raw: str = ""


Alignment = Literal["left", "center", "right"]


class Table(Frozen):
    """A pipe table; every row holds exactly len(headers) cells."""
    kind: Literal["table"] = "table"
    headers: tuple[str, ...]
    rows: tuple[tuple[str, ...], ...] = ()
    alignments: tuple[Alignment, ...] = ()
    raw: str = ""


Token = Annotated[
    Union[Text, Heading, Paragraph, List, ListItem, Blockquote, CodeBlock, HorizontalRule, Table, Link, Image],
    Field(discriminator="kind"),
]

Blockquote.model_rebuild()


class ParseResult(Frozen):
    """Top-level tokens in document order plus flat link and image inventories."""
    tokens: tuple[Token, ...] = ()
    links: tuple[Link, ...] = ()
    images: tuple[Image, ...] = ()
    raw: str = ""


# --- mapping ---

Shape = Literal["empty", "heading", "text", "list", "lists", "table", "quote", "code", "mixed"]


class ContentPattern(Frozen):
    """Structural fingerprint of one run of tokens; input to the classifier."""
    item_count:           int = 0       # list items at every depth
    top_level_item_count: int = 0
    average_item_length:  float = 0.0   # over stripped item text
    max_nesting_depth:    int = 0
    list_count:           int = 0       # top-level List tokens
    list_group_count:     int = 0
    paragraph_count:      int = 0
    paragraph_length:     int = 0       # total stripped paragraph characters
    heading_count:        int = 0
    title_level:          Optional[int] = None
    has_table:            bool = False
    has_quote:            bool = False
    has_numbered_list:    bool = False
    has_heading:          bool = False
    has_code:             bool = False
    shape:                Shape = "empty"


class SlideDecision(Frozen):
    type: SlideType
    rationale: str
    confidence: float = Field(..., ge=0.0, le=1.0)
    fallback: bool = False
    cols: Optional[int] = None      # card-grid column hint


class SlideMappingResult(Frozen):
    type: SlideType
    pattern: ContentPattern
    rationale: str
    confidence: float
    fallback: bool = False
    content: dict[str, Any] = {}
    tokens: tuple[Token, ...] = ()


class SlideData(Frozen):
    """Serialized slide record handed to the rendering and storage layers."""
    type: SlideType
    content: dict[str, Any]
    order: int


class MappingStatistics(Frozen):
    counts_by_type: dict[SlideType, int]
    total: int = 0
    fallback_count: int = 0
    average_confidence: float = 0.0
