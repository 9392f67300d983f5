"""Per-call parse state: element accumulator, budgets and diagnostics"""

import logging
from typing import Optional

from notemark.core.limits import Limits
from notemark.core.models import MarkdownElement, Paragraph, ParseReport


logger = logging.getLogger(__name__)

TOO_COMPLEX_NOTICE = "Document too complex; output truncated after {limit} elements"


class ParseState:
    """Mutable state owned by a single parse call; never shared between calls."""

    def __init__(self, limits: Limits):
        self.limits = limits
        self.elements: list[MarkdownElement] = []
        self.list_items = 0
        self.error_count = 0
        self.last_error: Optional[str] = None
        self.halted = False
        self._list_overflow = False

    def record_error(self, message: str) -> None:
        self.error_count += 1
        self.last_error = message

    def emit(self, element: MarkdownElement) -> bool:
        """Append an element; on reaching the element cap append a notice and halt."""
        if self.halted:
            return False
        if len(self.elements) >= self.limits.max_elements:
            limit = self.limits.max_elements
            logger.warning("Element limit of %d reached; truncating document", limit)
            self.record_error(f"element limit {limit} reached")
            self.elements.append(Paragraph(text=TOO_COMPLEX_NOTICE.format(limit=limit)))
            self.halted = True
            return False
        self.elements.append(element)
        return True

    def take_list_item(self) -> bool:
        """Reserve one list item from the document-wide budget."""
        if self.list_items >= self.limits.max_list_items:
            if not self._list_overflow:
                self._list_overflow = True
                logger.warning("List item limit of %d reached; dropping further items",
                               self.limits.max_list_items)
                self.record_error(f"list item limit {self.limits.max_list_items} reached")
            return False
        self.list_items += 1
        return True

    def rollback(self, mark: int) -> None:
        """Discard elements emitted after mark (used when a chunk fails)."""
        del self.elements[mark:]
        self.halted = False

    def report(self) -> ParseReport:
        return ParseReport(
            elements=tuple(self.elements),
            error_count=self.error_count,
            last_error=self.last_error,
        )
