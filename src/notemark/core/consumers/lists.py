"""Nested list consumer for task, unordered and ordered items"""

from dataclasses import dataclass, field

from notemark.core.classify import ORDERED, TASK, ListLine, list_line
from notemark.core.models import MarkdownElement, OrderedList, TaskList, UnorderedList
from notemark.core.state import ParseState


@dataclass
class _Frame:
    """One open list run: a nesting level and the family being collected."""
    level:  int
    family: str
    items:  list[str] = field(default_factory=list)

    def flush(self, out: list[MarkdownElement]) -> None:
        """Emit the collected run as one grouped element and start a new run."""
        if not self.items:
            return
        model = OrderedList if self.family == ORDERED else UnorderedList
        out.append(model(items=tuple(self.items), level=self.level))
        self.items = []


def _task(item: ListLine) -> TaskList:
    return TaskList(text=item.text, checked=item.checked, level=item.level)


def consume_list(lines: list[str], start: int, state: ParseState) -> tuple[list[MarkdownElement], int]:
    """Consume a run of list lines beginning at start.

    Nesting is tracked with an explicit stack of frames rather than recursion:
    a deeper line pushes a frame, a shallower line or a change of family at
    the same level pops one. Levels are capped by indent_level, so the stack
    never grows past the nesting limit. Returns (elements, next_index).
    """
    max_level = state.limits.max_nesting_level
    first = list_line(lines[start], max_level)
    frames = [_Frame(first.level, first.family)]
    out: list[MarkdownElement] = []

    i = start
    while i < len(lines) and frames:
        item = list_line(lines[i], max_level)
        if item is None:
            break
        top = frames[-1]
        if item.level == top.level and item.family == top.family:
            if state.take_list_item():
                if item.family == TASK:
                    out.append(_task(item))
                else:
                    top.items.append(item.text)
            i += 1
        elif item.level > top.level:
            top.flush(out)
            frames.append(_Frame(item.level, item.family))
        else:
            top.flush(out)
            frames.pop()

    for frame in reversed(frames):
        frame.flush(out)
    return out, i
