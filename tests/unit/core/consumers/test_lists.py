"""Unit tests for core/consumers/lists.py"""

from notemark.core.consumers.lists import consume_list
from notemark.core.limits import Limits
from notemark.core.models import OrderedList, TaskList, UnorderedList
from notemark.core.state import ParseState


def _consume(md: str, limits: Limits = None):
    state = ParseState(limits or Limits())
    elements, next_i = consume_list(md.split("\n"), 0, state)
    return elements, next_i, state


def test_flat_unordered_run_is_grouped():
    elements, next_i, _ = _consume("- a\n- b\n* c")
    assert elements == [UnorderedList(items=("a", "b", "c"), level=1)]
    assert next_i == 3


def test_ordered_run():
    elements, _, _ = _consume("1. one\n2. two\n10. ten")
    assert elements == [OrderedList(items=("one", "two", "ten"), level=1)]


def test_tasks_are_one_element_each():
    elements, _, _ = _consume("- [ ] first\n- [x] second")
    assert elements == [
        TaskList(text="first", checked=False, level=1),
        TaskList(text="second", checked=True, level=1),
    ]


def test_nested_levels_keep_source_order():
    """A deeper run closes the current group; later siblings start a new one."""
    elements, next_i, _ = _consume("- a\n    - b\n        - c\n- d")
    assert elements == [
        UnorderedList(items=("a",), level=1),
        UnorderedList(items=("b",), level=2),
        UnorderedList(items=("c",), level=3),
        UnorderedList(items=("d",), level=1),
    ]
    assert next_i == 4


def test_nested_tasks():
    elements, _, _ = _consume("- [ ] main\n    - [x] sub 1\n    - [ ] sub 2")
    assert [(e.text, e.checked, e.level) for e in elements] == [
        ("main", False, 1), ("sub 1", True, 2), ("sub 2", False, 2),
    ]


def test_mixed_families_nest():
    """Different families at a deeper level each get their own element."""
    md = "- [ ] task\n    - bullet\n    1. numbered\n        - [x] deep task"
    elements, next_i, _ = _consume(md)
    assert elements == [
        TaskList(text="task", checked=False, level=1),
        UnorderedList(items=("bullet",), level=2),
        OrderedList(items=("numbered",), level=2),
        TaskList(text="deep task", checked=True, level=3),
    ]
    assert next_i == 4


def test_family_change_at_same_level_stops():
    """The consumer hands control back when the family changes at its level."""
    elements, next_i, _ = _consume("- [ ] task\n- bullet")
    assert elements == [TaskList(text="task", checked=False, level=1)]
    assert next_i == 1


def test_stops_at_non_list_line():
    _, next_i, _ = _consume("- a\nplain text\n- b")
    assert next_i == 1


def test_two_space_indent_stays_at_same_level():
    """Indentation is measured in steps of four spaces."""
    elements, _, _ = _consume("- item\n  - two spaces\n    - four spaces")
    assert elements == [
        UnorderedList(items=("item", "two spaces"), level=1),
        UnorderedList(items=("four spaces",), level=2),
    ]


def test_levels_capped_at_nesting_limit():
    """Lines deeper than the nesting limit join the deepest allowed level."""
    elements, _, _ = _consume("- a\n    - b\n        - c", Limits(max_nesting_level=2))
    assert elements == [
        UnorderedList(items=("a",), level=1),
        UnorderedList(items=("b", "c"), level=2),
    ]


def test_item_budget_drops_extra_items():
    """Items beyond max_list_items are consumed but not emitted."""
    elements, next_i, state = _consume("- a\n- b\n- c", Limits(max_list_items=2))
    assert elements == [UnorderedList(items=("a", "b"), level=1)]
    assert next_i == 3
    assert state.error_count == 1


def test_escaped_item_text():
    elements, _, _ = _consume("- \\*not italic\\*")
    assert elements == [UnorderedList(items=("*not italic*",), level=1)]
