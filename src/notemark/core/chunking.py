"""Chunked parsing for large documents"""

import logging

from notemark.core.consumers.code import fence_extent, opens_fence
from notemark.core.dispatch import parse_lines
from notemark.core.limits import MAX_CODE_BLOCK_LINES
from notemark.core.models import Paragraph
from notemark.core.state import ParseState


logger = logging.getLogger(__name__)

PARTIAL_NOTICE = "Document partially parsed; content after {chunks} chunks was omitted"


def split_chunks(text: str, chunk_size: int, max_code_block_lines: int = MAX_CODE_BLOCK_LINES) -> list[str]:
    """Split text on blank lines into chunks of roughly chunk_size characters.

    A chunk only ends on a blank line outside a code fence. Fence regions
    are measured with fence_extent, so a fence that runs past the line cap
    ends exactly where the code block consumer gives up on it.
    """
    lines = text.split('\n')
    chunks: list[str] = []
    current: list[str] = []
    size = 0

    i = 0
    while i < len(lines):
        if opens_fence(lines[i]):
            end, _ = fence_extent(lines, i, max_code_block_lines)
            region = lines[i:end]
            current.extend(region)
            size += sum(len(line) + 1 for line in region)
            i = end
            continue
        current.append(lines[i])
        size += len(lines[i]) + 1
        if not lines[i].strip() and size >= chunk_size:
            chunks.append('\n'.join(current))
            current, size = [], 0
        i += 1

    if current:
        chunks.append('\n'.join(current))
    return chunks


def parse_chunked(text: str, state: ParseState) -> None:
    """Parse each chunk independently into the shared state.

    A failing chunk is replaced by a Paragraph of its raw text; after
    max_chunks a notice is appended and the remaining chunks are skipped.
    """
    limits = state.limits
    chunks = split_chunks(text, limits.chunk_size, limits.max_code_block_lines)
    logger.debug("Parsing %d characters in %d chunks", len(text), len(chunks))

    for n, chunk in enumerate(chunks):
        if state.halted:
            break
        if n >= limits.max_chunks:
            logger.warning("Chunk limit of %d reached; %d chunks skipped",
                           limits.max_chunks, len(chunks) - n)
            state.record_error(f"chunk limit {limits.max_chunks} reached")
            state.emit(Paragraph(text=PARTIAL_NOTICE.format(chunks=limits.max_chunks)))
            break

        mark = len(state.elements)
        try:
            parse_lines(chunk, state)
        except (MemoryError, RecursionError):
            raise
        except Exception as e:
            logger.warning("Chunk %d failed to parse (%s); kept as raw text", n + 1, e)
            state.record_error(f"chunk {n + 1}: {e}")
            state.rollback(mark)
            state.emit(Paragraph(text=chunk.strip()))
