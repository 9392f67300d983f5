"""Public parse entry point: size guard, cache, recovery ladder"""

import logging
import re
from typing import Optional

from notemark.core.cache import ResultCache
from notemark.core.chunking import parse_chunked
from notemark.core.dispatch import parse_lines
from notemark.core.limits import Limits
from notemark.core.models import Heading, MarkdownElement, Paragraph, ParseReport
from notemark.core.state import ParseState
from notemark.core.utils.hashing import text_key


logger = logging.getLogger(__name__)

TOO_LARGE_NOTICE = "Document too large to display ({length} characters; limit is {limit})"
OUT_OF_MEMORY_NOTICE = "Out of memory while parsing document"
TOO_DEEP_NOTICE = "Document nesting too deep to parse"
UNPARSEABLE_NOTICE = "Document could not be parsed"

BLANK_LINE_RE = re.compile(r'\n[ \t\r]*\n')


def fallback_blocks(text: str, max_blocks: int) -> list[MarkdownElement]:
    """Simple recovery mode: each blank-line block is a Heading or a Paragraph."""
    blocks = [b.strip() for b in BLANK_LINE_RE.split(text)]
    elements: list[MarkdownElement] = []
    for block in [b for b in blocks if b][:max_blocks]:
        if block.startswith('#'):
            hashes = len(block) - len(block.lstrip('#'))
            level = min(max(hashes, 1), 6)
            elements.append(Heading(level=level, text=block.lstrip('#').strip()))
        else:
            elements.append(Paragraph(text=block))
    return elements


def _notice(message: str, error_count: int = 1) -> ParseReport:
    return ParseReport(
        elements=(Paragraph(text=message),),
        error_count=error_count,
        last_error=message,
    )


class MarkdownParser:
    """Parses note text into elements; total, deterministic and memoized.

    The cache is owned by the parser instance (or injected), so separate
    parsers with different limits never share results by accident.
    """

    def __init__(self, limits: Optional[Limits] = None, cache: Optional[ResultCache] = None):
        self.limits = limits or Limits()
        self.cache = cache if cache is not None else ResultCache()

    @classmethod
    def from_settings(cls, settings) -> "MarkdownParser":
        """Build a parser from notemark.config.Settings (limits + cache capacity)."""
        return cls(limits=settings, cache=ResultCache(settings.cache_capacity))

    def parse(self, text: str) -> list[MarkdownElement]:
        """Parse text into elements. Never raises."""
        return list(self.parse_report(text).elements)

    def parse_report(self, text: str) -> ParseReport:
        """Parse text, returning elements together with recovery diagnostics."""
        if not text or not text.strip():
            return ParseReport()
        if len(text) > self.limits.max_text_length:
            logger.warning("Rejected document of %d characters (limit %d)",
                           len(text), self.limits.max_text_length)
            return _notice(TOO_LARGE_NOTICE.format(length=len(text), limit=self.limits.max_text_length))

        key = text_key(text)
        cached = self.cache.lookup(key)
        if cached is not None:
            return cached.model_copy(update={"from_cache": True})

        try:
            report = self._parse_uncached(text)
        except MemoryError:
            self.cache.clear()
            logger.error("Out of memory parsing %d characters; cache cleared", len(text))
            return _notice(OUT_OF_MEMORY_NOTICE)
        except RecursionError:
            logger.error("Recursion limit hit parsing %d characters", len(text))
            return _notice(TOO_DEEP_NOTICE)

        self.cache.store(key, report)
        return report

    def _parse_uncached(self, text: str) -> ParseReport:
        state = ParseState(self.limits)
        try:
            if len(text) > self.limits.chunk_threshold:
                parse_chunked(text, state)
            else:
                parse_lines(text, state)
            return state.report()
        except (MemoryError, RecursionError):
            raise
        except Exception as e:
            logger.error("Parse failed (%s); falling back to paragraph mode", e)
            state.record_error(str(e))

        try:
            elements = fallback_blocks(text, self.limits.max_fallback_blocks)
        except (MemoryError, RecursionError):
            raise
        except Exception as e:
            logger.exception("Fallback parse failed")
            state.record_error(str(e))
            elements = [Paragraph(text=UNPARSEABLE_NOTICE)]
        return ParseReport(
            elements=tuple(elements),
            error_count=state.error_count,
            last_error=state.last_error,
        )

    def clear_cache(self) -> None:
        self.cache.clear()


_default_parser = MarkdownParser()


def default_parser() -> MarkdownParser:
    """Process-wide parser used by the module-level helpers."""
    return _default_parser


def parse(text: str) -> list[MarkdownElement]:
    """Parse text with the default parser and its shared cache."""
    return _default_parser.parse(text)


def parse_report(text: str) -> ParseReport:
    return _default_parser.parse_report(text)


def clear_cache() -> None:
    _default_parser.clear_cache()
