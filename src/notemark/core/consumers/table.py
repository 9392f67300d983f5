"""Pipe table consumer with column alignment"""

import logging
from typing import Optional

from notemark.core import patterns as p
from notemark.core.limits import Limits
from notemark.core.models import MarkdownElement, Paragraph, Table, TableAlignment


logger = logging.getLogger(__name__)


def split_row(line: str) -> list[str]:
    """Split '| a | b |' into ['a', 'b'] (escape-masked cells are restored)."""
    row = p.mask_escapes(line.strip())
    if row.startswith('|'):
        row = row[1:]
    if row.endswith('|'):
        row = row[:-1]
    return [p.unmask(cell.strip()) for cell in row.split('|')]


def is_alignment_row(cells: list[str]) -> bool:
    return all(p.ALIGN_CELL_RE.match(cell) for cell in cells)


def cell_alignment(cell: str) -> TableAlignment:
    if p.ALIGN_CENTER_RE.match(cell):
        return TableAlignment.CENTER
    if p.ALIGN_RIGHT_RE.match(cell):
        return TableAlignment.RIGHT
    # ':---', plain '---' and anything malformed
    return TableAlignment.LEFT


def parse_alignments(cells: list[str], columns: int) -> tuple[TableAlignment, ...]:
    """One alignment per header column; missing cells default to LEFT."""
    padded = cells[:columns] + [''] * (columns - len(cells))
    return tuple(cell_alignment(cell) for cell in padded)


def consume_table(
    lines: list[str],
    start: int,
    limits: Limits,
    ) -> Optional[tuple[list[MarkdownElement], int]]:
    """Consume contiguous '|' lines starting at start.

    Returns (elements, next_index), or None when the block is a single line
    and so not a table. A header wider than the column cap degrades to a
    Paragraph of the raw scanned lines.
    """
    block: list[str] = []
    i = start
    while i < len(lines) and lines[i].strip().startswith('|'):
        if len(block) < limits.max_table_rows:
            block.append(lines[i].strip())
        i += 1
    if len(block) < 2:
        return None
    if i - start > len(block):
        logger.warning("Table at line %d exceeds %d rows; extra rows dropped",
                       start + 1, limits.max_table_rows)

    headers = split_row(block[0])
    if len(headers) > limits.max_table_columns:
        logger.warning("Table at line %d has %d columns (limit %d); kept as paragraph",
                       start + 1, len(headers), limits.max_table_columns)
        return [Paragraph(text='\n'.join(block))], i

    body = [split_row(line) for line in block[1:]]
    if is_alignment_row(body[0]):
        alignments = parse_alignments(body.pop(0), len(headers))
    else:
        alignments = (TableAlignment.LEFT,) * len(headers)

    table = Table(
        headers=tuple(headers),
        rows=tuple(tuple(cells[:limits.max_table_columns]) for cells in body),
        alignments=alignments,
    )
    return [table], i
