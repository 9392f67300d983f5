"""Line-by-line dispatch: try each rule in priority order and advance the cursor"""

import logging

from notemark.core import classify
from notemark.core.consumers.code import consume_code_block
from notemark.core.consumers.lists import consume_list
from notemark.core.consumers.table import consume_table
from notemark.core.models import DIVIDER, MarkdownElement, Paragraph
from notemark.core.patterns import mask_escapes, unmask
from notemark.core.state import ParseState


logger = logging.getLogger(__name__)


def split_lines(text: str) -> list[str]:
    """Split on '\\n', dropping the '\\r' of CRLF line endings."""
    return [line[:-1] if line.endswith('\r') else line for line in text.split('\n')]


def _dispatch_line(lines: list[str], i: int, state: ParseState) -> tuple[list[MarkdownElement], int]:
    """Classify lines[i] (consuming more lines if needed). Returns (elements, next_index)."""
    limits = state.limits
    stripped = lines[i].strip()
    if not stripped:
        return [], i + 1
    line = mask_escapes(stripped)

    if element := classify.heading(line):
        return [element], i + 1

    block = classify.opens_block(line)
    if not block:
        element = classify.extended(line) or classify.inline_format(line) or classify.media(line)
        if element:
            return [element], i + 1

    if classify.opens_code_fence(line):
        return consume_code_block(lines, i, limits)

    if not block and (element := classify.inline_code(line)):
        return [element], i + 1

    if line.startswith('>') and (element := classify.quote(line, limits.max_nesting_level)):
        return [element], i + 1

    if classify.list_line(lines[i], limits.max_nesting_level):
        return consume_list(lines, i, state)

    if classify.is_divider(line):
        return [DIVIDER], i + 1

    if classify.looks_tabular(line) and (consumed := consume_table(lines, i, limits)):
        return consumed

    return [Paragraph(text=unmask(line))], i + 1


def parse_lines(text: str, state: ParseState) -> list[MarkdownElement]:
    """Parse text line by line, appending to state.elements.

    A failure while handling one line skips that line only. Memory and
    recursion failures are left to the caller's recovery ladder.
    """
    lines = split_lines(text)
    i = 0
    while i < len(lines) and not state.halted:
        try:
            elements, next_i = _dispatch_line(lines, i, state)
        except (MemoryError, RecursionError):
            raise
        except Exception as e:
            logger.warning("Skipping line %d after parse error: %s", i + 1, e)
            state.record_error(f"line {i + 1}: {e}")
            i += 1
            continue
        for element in elements:
            if not state.emit(element):
                break
        i = max(next_i, i + 1)
    return state.elements
