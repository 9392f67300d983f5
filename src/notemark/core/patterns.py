"""Precompiled line patterns and the escape table"""

import re


# Extended syntax
FOOTNOTE_DEF_RE = re.compile(r'^\[\^([\w-]+)\]:\s*(.*)$')
FOOTNOTE_REF_RE = re.compile(r'\[\^([\w-]+)\](?!:)')
BLOCK_MATH_RE   = re.compile(r'^\$\$(.+?)\$\$$')
INLINE_MATH_RE  = re.compile(r'(?<!\$)\$([^$\n]+)\$(?!\$)')
SUPERSCRIPT_RE  = re.compile(r'\^([^\^\s][^\^]*)\^')
SUBSCRIPT_RE    = re.compile(r'(?<!~)~([^~\s][^~]*)~(?!~)')

# Inline formats, tried in this order
HIGHLIGHT_RE     = re.compile(r'(?<!=)==([^=]+)==(?!=)')
STRIKETHROUGH_RE = re.compile(r'~~([^~]+)~~')
BOLD_RE          = re.compile(r'\*\*([^*]+)\*\*|__([^_]+)__')
ITALIC_RE        = re.compile(r'(?<!\*)\*([^*\s][^*]*)\*(?!\*)')

# Media and code
IMAGE_RE       = re.compile(r'^!\[([^\[\]]*)\]\(([^)]*)\)')
LINK_RE        = re.compile(r'\[([^\[\]]+)\]\(([^()\s]+)\)')
INLINE_CODE_RE = re.compile(r'`([^`]+)`')
FENCE          = '```'

# Block structure
HEADING_RE   = re.compile(r'^(#{1,6}) (\S.*)$')
QUOTE_RE     = re.compile(r'^(>+)\s?(.*)$')
TASK_RE      = re.compile(r'^- \[([ xX])\](?:\s+(.*))?$')
UNORDERED_RE = re.compile(r'^[-*+]\s+(.*)$')
ORDERED_RE   = re.compile(r'^(\d+)\.\s+(.*)$')
DIVIDER_LINES = frozenset({'---', '***', '___'})

# Tables
ALIGN_CELL_RE   = re.compile(r'^:?-*:?$')
ALIGN_CENTER_RE = re.compile(r'^:-{3,}:$')
ALIGN_RIGHT_RE  = re.compile(r'^-{3,}:$')

# Escapes: each supported '\c' is masked to a private-use placeholder while
# a line is classified, then restored to the literal character.
ESCAPABLE = '\\*#[](){}_`~'
ESCAPE_RE = re.compile(r'\\([\\*#\[\](){}_`~])')
_MASK_BASE = 0xE000
_MASK = {c: chr(_MASK_BASE + i) for i, c in enumerate(ESCAPABLE)}
_UNMASK = str.maketrans({v: k for k, v in _MASK.items()})


def mask_escapes(line: str) -> str:
    """Replace supported escape pairs with placeholders; other backslashes stay."""
    if '\\' not in line:
        return line
    return ESCAPE_RE.sub(lambda m: _MASK[m.group(1)], line)


def unmask(text: str) -> str:
    """Turn placeholders back into the literal characters they stand for."""
    return text.translate(_UNMASK)
