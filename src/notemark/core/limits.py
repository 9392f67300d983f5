"""Resource caps bounding the cost of a single parse"""

from pydantic import BaseModel, Field


# Document-level guards
MAX_TEXT_LENGTH = 1_000_000
MAX_NESTING_LEVEL = 6
MAX_TABLE_COLUMNS = 50
MAX_TABLE_ROWS = 1_000
MAX_LIST_ITEMS = 1_000
MAX_ELEMENTS = 10_000
MAX_CODE_BLOCK_LINES = 1_000
MAX_FALLBACK_BLOCKS = 1_000

# Chunked parsing and caching
CHUNK_THRESHOLD = 50_000
CHUNK_SIZE = 10_000
MAX_CHUNKS = 100
CACHE_CAPACITY = 50

# Per-field text caps, applied when an element is constructed
MAX_HEADING_LENGTH = 500
MAX_QUOTE_LENGTH = 2_000
MAX_PARAGRAPH_LENGTH = 10_000
MAX_SPAN_LENGTH = 1_000
MAX_CODE_LINE_LENGTH = 1_000
MAX_CODE_BLOCK_LENGTH = 50_000
MAX_LANGUAGE_LENGTH = 20
MAX_CELL_LENGTH = 500
MAX_LIST_ITEM_LENGTH = 1_000
MAX_FOOTNOTE_ID_LENGTH = 50
MAX_FOOTNOTE_LENGTH = 1_000
MAX_LINK_TEXT_LENGTH = 500
MAX_URL_LENGTH = 2_048
MAX_MATH_LENGTH = 1_000


class Limits(BaseModel):
    """Tunable document-level guards; defaults are the module constants."""
    max_text_length:      int = Field(default=MAX_TEXT_LENGTH,      ge=1, description="Longest input parsed at all")
    max_nesting_level:    int = Field(default=MAX_NESTING_LEVEL,    ge=1, description="Deepest quote or list level")
    max_table_columns:    int = Field(default=MAX_TABLE_COLUMNS,    ge=1, description="Widest accepted table header")
    max_table_rows:       int = Field(default=MAX_TABLE_ROWS,       ge=1, description="Rows scanned per table")
    max_list_items:       int = Field(default=MAX_LIST_ITEMS,       ge=1, description="List items kept per document")
    max_elements:         int = Field(default=MAX_ELEMENTS,         ge=1, description="Elements emitted per document")
    max_code_block_lines: int = Field(default=MAX_CODE_BLOCK_LINES, ge=1, description="Lines scanned per code block")
    max_fallback_blocks:  int = Field(default=MAX_FALLBACK_BLOCKS,  ge=1, description="Blocks kept in fallback mode")
    chunk_threshold:      int = Field(default=CHUNK_THRESHOLD,      ge=1, description="Input size that switches to chunking")
    chunk_size:           int = Field(default=CHUNK_SIZE,           ge=1, description="Target characters per chunk")
    max_chunks:           int = Field(default=MAX_CHUNKS,           ge=1, description="Chunks parsed before giving up")


def cap(text: str, limit: int) -> str:
    """Truncate text to at most limit characters."""
    return text if len(text) <= limit else text[:limit]
