"""Toggle task checkboxes directly in note source text"""

import logging
from typing import Optional

from notemark.core.classify import TASK, list_line
from notemark.core.consumers.code import fence_extent, opens_fence
from notemark.core.limits import MAX_LIST_ITEM_LENGTH, cap
from notemark.core.models import TaskInfo, TaskList
from notemark.core.parser import MarkdownParser, default_parser


logger = logging.getLogger(__name__)

# Offset of the check mark within a stripped task line: '- [' then the mark
_MARK_OFFSET = 3


def _task_elements(content: str, parser: MarkdownParser) -> list[TaskList]:
    return [e for e in parser.parse(content) if isinstance(e, TaskList)]


def list_tasks(content: str, parser: Optional[MarkdownParser] = None) -> list[TaskInfo]:
    """Index, text, state and level of every task item in content."""
    if not content or not content.strip():
        return []
    tasks = _task_elements(content, parser or default_parser())
    return [
        TaskInfo(index=n, text=t.text, checked=t.checked, level=t.level)
        for n, t in enumerate(tasks)
    ]


def toggle_task_state(
    content: str,
    task_index: int,
    task_text: str,
    current_checked: bool,
    parser: Optional[MarkdownParser] = None,
    ) -> str:
    """Flip the checkbox of the task_index-th task and return the new content.

    The caller's task_text and current_checked must match a fresh parse of
    content, which guards against patching a stale snapshot. Any validation
    failure returns content unchanged; nothing is raised.
    """
    if not content or not content.strip() or task_index < 0:
        return content

    parser = parser or default_parser()
    tasks = _task_elements(content, parser)
    if task_index >= len(tasks):
        logger.info("Task index %d out of range (%d tasks)", task_index, len(tasks))
        return content

    target = tasks[task_index]
    if target.text != task_text or target.checked != current_checked:
        logger.info("Task %d mismatch: expected (%r, %s), found (%r, %s)",
                    task_index, task_text, current_checked, target.text, target.checked)
        return content

    return _replace_task(content, task_index, target, parser)


def _replace_task(content: str, task_index: int, target: TaskList, parser: MarkdownParser) -> str:
    """Rescan raw lines, counting tasks the way the parser does, and flip the target."""
    limits = parser.limits
    lines = content.split('\n')
    counter = 0

    n = 0
    while n < len(lines):
        if opens_fence(lines[n]):
            n, _ = fence_extent(lines, n, limits.max_code_block_lines)
            continue
        line = lines[n]
        body = line[:-1] if line.endswith('\r') else line
        n += 1

        item = list_line(body, limits.max_nesting_level)
        if item is None or item.family != TASK:
            continue
        if counter < task_index:
            counter += 1
            continue

        if item.level != target.level or cap(item.text, MAX_LIST_ITEM_LENGTH) != target.text:
            break
        pos = len(body) - len(body.lstrip()) + _MARK_OFFSET
        mark = ' ' if target.checked else 'x'
        lines[n - 1] = line[:pos] + mark + line[pos + 1:]
        return '\n'.join(lines)

    logger.warning("Could not locate task %d (%r) in content; left unchanged",
                   task_index, target.text)
    return content
