"""Fenced code block consumer and the fence extent rule shared with chunking and task patching"""

import logging

from notemark.core.limits import MAX_CODE_LINE_LENGTH, MAX_LANGUAGE_LENGTH, Limits, cap
from notemark.core.models import CodeBlock, MarkdownElement, Paragraph
from notemark.core.patterns import FENCE, mask_escapes


logger = logging.getLogger(__name__)


def fence_language(fence_line: str) -> str:
    """Language tag following the opening fence ('' when absent), capped."""
    tag = fence_line.strip()[len(FENCE):].strip()
    return cap(tag.split()[0], MAX_LANGUAGE_LENGTH) if tag else ""


def opens_fence(line: str) -> bool:
    """True for a raw line that starts a fence (an escaped '\\`' does not)."""
    return mask_escapes(line.strip()).startswith(FENCE)


def is_closing_fence(line: str) -> bool:
    return line.strip().startswith(FENCE)


def fence_extent(lines: list[str], start: int, max_lines: int) -> tuple[int, bool]:
    """Index just past the fence opened at start, and whether it was closed.

    The scan stops at the first closing fence or after max_lines body lines,
    whichever comes first; an unclosed region ends there and the next line
    is classified afresh.
    """
    end = min(len(lines), start + 1 + max_lines)
    for i in range(start + 1, end):
        if is_closing_fence(lines[i]):
            return i + 1, True
    return end, False


def consume_code_block(lines: list[str], start: int, limits: Limits) -> tuple[list[MarkdownElement], int]:
    """Consume from the fence at start through its closing fence.

    Returns (elements, next_index). A block with no closing fence before the
    end of input or the line cap becomes a Paragraph of the raw scanned text.
    """
    next_i, closed = fence_extent(lines, start, limits.max_code_block_lines)
    if not closed:
        logger.warning("Unterminated code fence at line %d; kept as paragraph", start + 1)
        return [Paragraph(text='\n'.join(lines[start:next_i]))], next_i

    body = [cap(line, MAX_CODE_LINE_LENGTH) for line in lines[start + 1:next_i - 1]]
    return [CodeBlock(text='\n'.join(body), language=fence_language(lines[start]))], next_i
