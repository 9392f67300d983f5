"""Typed block elements produced by the parser, plus parse and task reports"""

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, TypeAdapter, model_validator

from notemark.core import limits


def _capped(limit: int):
    """String type truncated to limit characters at construction."""
    return Annotated[str, AfterValidator(lambda s: limits.cap(s, limit))]


HeadingText   = _capped(limits.MAX_HEADING_LENGTH)
QuoteText     = _capped(limits.MAX_QUOTE_LENGTH)
ParagraphText = _capped(limits.MAX_PARAGRAPH_LENGTH)
SpanText      = _capped(limits.MAX_SPAN_LENGTH)
CodeText      = _capped(limits.MAX_CODE_BLOCK_LENGTH)
LanguageText  = _capped(limits.MAX_LANGUAGE_LENGTH)
CellText      = _capped(limits.MAX_CELL_LENGTH)
ItemText      = _capped(limits.MAX_LIST_ITEM_LENGTH)
FootnoteId    = _capped(limits.MAX_FOOTNOTE_ID_LENGTH)
FootnoteText  = _capped(limits.MAX_FOOTNOTE_LENGTH)
LinkText      = _capped(limits.MAX_LINK_TEXT_LENGTH)
UrlText       = _capped(limits.MAX_URL_LENGTH)
MathText      = _capped(limits.MAX_MATH_LENGTH)


class TableAlignment(str, Enum):
    """Horizontal alignment of a table column"""
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class Element(BaseModel):
    """Base for all parsed elements: immutable value objects."""
    model_config = ConfigDict(frozen=True)


class Heading(Element):
    kind: Literal["heading"] = "heading"
    level: int = Field(..., ge=1, le=6)
    text: HeadingText


class Bold(Element):
    kind: Literal["bold"] = "bold"
    text: SpanText


class Italic(Element):
    kind: Literal["italic"] = "italic"
    text: SpanText


class Strikethrough(Element):
    kind: Literal["strikethrough"] = "strikethrough"
    text: SpanText


class Highlight(Element):
    kind: Literal["highlight"] = "highlight"
    text: SpanText


class Paragraph(Element):
    """Fallback element; also carries diagnostic notices."""
    kind: Literal["paragraph"] = "paragraph"
    text: ParagraphText


class Link(Element):
    kind: Literal["link"] = "link"
    text: LinkText
    url: UrlText


class Image(Element):
    kind: Literal["image"] = "image"
    url: UrlText
    alt: LinkText = ""


class Code(Element):
    """Inline code span"""
    kind: Literal["code"] = "code"
    text: SpanText


class CodeBlock(Element):
    kind: Literal["code_block"] = "code_block"
    text: CodeText
    language: LanguageText = ""     # empty when the fence has no tag


class BlockQuote(Element):
    kind: Literal["block_quote"] = "block_quote"
    text: QuoteText
    level: int = Field(default=1, ge=1)    # count of leading '>' markers


class Table(Element):
    kind: Literal["table"] = "table"
    headers: tuple[CellText, ...]
    rows: tuple[tuple[CellText, ...], ...] = ()
    alignments: tuple[TableAlignment, ...]

    @model_validator(mode="after")
    def _alignments_match_headers(self) -> "Table":
        if len(self.alignments) != len(self.headers):
            raise ValueError(
                f"Table has {len(self.headers)} headers but {len(self.alignments)} alignments"
            )
        return self


class UnorderedList(Element):
    kind: Literal["unordered_list"] = "unordered_list"
    items: tuple[ItemText, ...]
    level: int = Field(default=1, ge=1)


class OrderedList(Element):
    kind: Literal["ordered_list"] = "ordered_list"
    items: tuple[ItemText, ...]
    level: int = Field(default=1, ge=1)


class TaskList(Element):
    """A single task item; tasks are never grouped."""
    kind: Literal["task_list"] = "task_list"
    text: ItemText
    checked: bool
    level: int = Field(default=1, ge=1)


class Footnote(Element):
    kind: Literal["footnote"] = "footnote"
    id: FootnoteId
    text: FootnoteText = ""         # empty for references
    is_reference: bool = True


class Superscript(Element):
    kind: Literal["superscript"] = "superscript"
    text: SpanText


class Subscript(Element):
    kind: Literal["subscript"] = "subscript"
    text: SpanText


class Math(Element):
    kind: Literal["math"] = "math"
    expression: MathText
    is_inline: bool = True


class Divider(Element):
    kind: Literal["divider"] = "divider"


DIVIDER = Divider()


MarkdownElement = Annotated[
    Union[
        Heading, Bold, Italic, Strikethrough, Highlight, Paragraph, Link, Image,
        Code, CodeBlock, BlockQuote, Table, UnorderedList, OrderedList, TaskList,
        Footnote, Superscript, Subscript, Math, Divider,
    ],
    Field(discriminator="kind"),
]

ElementList = TypeAdapter(list[MarkdownElement])


class ParseReport(BaseModel):
    """Elements of one parse call together with its recovery diagnostics."""
    model_config = ConfigDict(frozen=True)
    elements:    tuple[MarkdownElement, ...] = ()
    error_count: int = 0
    last_error:  Optional[str] = None
    from_cache:  bool = False


class TaskInfo(BaseModel):
    """Addressing data for one task item within a parse result."""
    index:   int
    text:    str
    checked: bool
    level:   int
