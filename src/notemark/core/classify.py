"""Single-line classifiers: each takes one stripped, escape-masked line"""

from dataclasses import dataclass
from typing import Optional

from notemark.core import patterns as p
from notemark.core.limits import MAX_LINK_TEXT_LENGTH, MAX_URL_LENGTH
from notemark.core.models import (
    BlockQuote, Bold, Code, Footnote, Heading, Highlight, Image, Italic, Link,
    Math, MarkdownElement, Strikethrough, Subscript, Superscript,
)


TASK = "task"
UNORDERED = "unordered"
ORDERED = "ordered"


@dataclass(frozen=True)
class ListLine:
    """A physical line recognised as a list item."""
    level:   int
    family:  str            # TASK, UNORDERED or ORDERED
    text:    str
    checked: bool = False


def indent_level(width: int, max_level: int) -> int:
    """Map leading indentation (in spaces) to a 1-based nesting level, capped."""
    return min(width // 4 + 1, max_level)


def indent_width(line: str) -> int:
    """Width of the leading whitespace, tabs counting as four spaces."""
    indent = line[:len(line) - len(line.lstrip())]
    return len(indent.expandtabs(4))


def heading(line: str) -> Optional[Heading]:
    m = p.HEADING_RE.match(line)
    if m is None:
        return None
    return Heading(level=len(m.group(1)), text=p.unmask(m.group(2).strip()))


def extended(line: str) -> Optional[MarkdownElement]:
    """Footnotes, math, superscript and subscript, in that priority."""
    if m := p.FOOTNOTE_DEF_RE.match(line):
        return Footnote(id=m.group(1), text=p.unmask(m.group(2).strip()), is_reference=False)
    if m := p.FOOTNOTE_REF_RE.search(line):
        return Footnote(id=m.group(1))
    if m := p.BLOCK_MATH_RE.match(line):
        return Math(expression=p.unmask(m.group(1).strip()), is_inline=False)
    if m := p.INLINE_MATH_RE.search(line):
        return Math(expression=p.unmask(m.group(1)))
    if m := p.SUPERSCRIPT_RE.search(line):
        return Superscript(text=p.unmask(m.group(1)))
    if m := p.SUBSCRIPT_RE.search(line):
        return Subscript(text=p.unmask(m.group(1)))
    return None


def inline_format(line: str) -> Optional[MarkdownElement]:
    """First emphasis span on the line wins; the rest of the line is dropped."""
    if m := p.HIGHLIGHT_RE.search(line):
        return Highlight(text=p.unmask(m.group(1)))
    if m := p.STRIKETHROUGH_RE.search(line):
        return Strikethrough(text=p.unmask(m.group(1)))
    if m := p.BOLD_RE.search(line):
        return Bold(text=p.unmask(m.group(1) or m.group(2)))
    if m := p.ITALIC_RE.search(line):
        return Italic(text=p.unmask(m.group(1)))
    return None


def media(line: str) -> Optional[MarkdownElement]:
    """Image when the line starts with '!', otherwise a balanced [text](url) link.

    An image URL is everything between the parentheses, stripped. A link
    whose text or URL is longer than its cap does not match.
    """
    if '](' not in line:
        return None
    if line.startswith('!'):
        m = p.IMAGE_RE.match(line)
        if m is None or not m.group(2).strip():
            return None
        return Image(url=p.unmask(m.group(2).strip()), alt=p.unmask(m.group(1)))
    m = p.LINK_RE.search(line)
    if m is None:
        return None
    text, url = p.unmask(m.group(1)), p.unmask(m.group(2))
    if len(text) > MAX_LINK_TEXT_LENGTH or len(url) > MAX_URL_LENGTH:
        return None
    return Link(text=text, url=url)


def inline_code(line: str) -> Optional[Code]:
    m = p.INLINE_CODE_RE.search(line)
    if m is None:
        return None
    return Code(text=p.unmask(m.group(1)))


def quote(line: str, max_level: int) -> Optional[BlockQuote]:
    """One quote element per line; quotes deeper than max_level do not match."""
    m = p.QUOTE_RE.match(line)
    if m is None:
        return None
    level = len(m.group(1))
    if level > max_level:
        return None
    return BlockQuote(text=p.unmask(m.group(2).strip()), level=level)


def _list_item(line: str) -> Optional[tuple[str, str, bool]]:
    """(family, masked text, checked) for a stripped masked line, else None."""
    if m := p.TASK_RE.match(line):
        return TASK, (m.group(2) or "").strip(), m.group(1) in "xX"
    if m := p.UNORDERED_RE.match(line):
        return UNORDERED, m.group(1).strip(), False
    if m := p.ORDERED_RE.match(line):
        return ORDERED, m.group(2).strip(), False
    return None


def list_line(raw: str, max_level: int) -> Optional[ListLine]:
    """Classify a raw (unstripped) line as a list item with its nesting level."""
    stripped = raw.strip()
    if not stripped:
        return None
    found = _list_item(p.mask_escapes(stripped))
    if found is None:
        return None
    family, text, checked = found
    return ListLine(
        level=indent_level(indent_width(raw), max_level),
        family=family,
        text=p.unmask(text),
        checked=checked,
    )


def opens_code_fence(line: str) -> bool:
    return line.startswith(p.FENCE)


def is_divider(line: str) -> bool:
    return line in p.DIVIDER_LINES


def looks_tabular(line: str) -> bool:
    return line.startswith('|')


def opens_block(line: str) -> bool:
    """True when the line starts a fence, quote, table or list item.

    Such lines are never classified by the extended, inline-format, media or
    inline-code rules, so a list item or quote keeps its structure even when
    its text contains emphasis markers.
    """
    return line.startswith((p.FENCE, '>', '|')) or _list_item(line) is not None
