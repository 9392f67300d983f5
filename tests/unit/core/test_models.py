"""Unit tests for core/models.py"""

import pytest
from pydantic import ValidationError

from notemark.core import limits
from notemark.core.models import (
    DIVIDER, BlockQuote, CodeBlock, Divider, ElementList, Heading, Paragraph,
    Table, TableAlignment, TaskList, UnorderedList,
)


def test_heading_text_capped_at_construction():
    """Heading text longer than the cap is truncated when the element is built."""
    h = Heading(level=1, text="a" * (limits.MAX_HEADING_LENGTH + 100))
    assert len(h.text) == limits.MAX_HEADING_LENGTH


def test_code_block_language_capped():
    """CodeBlock language tag is truncated to the language cap."""
    block = CodeBlock(text="x", language="l" * 50)
    assert len(block.language) == limits.MAX_LANGUAGE_LENGTH


@pytest.mark.parametrize("level", [0, 7])
def test_heading_level_out_of_range(level):
    """Heading levels outside 1-6 are rejected."""
    with pytest.raises(ValidationError):
        Heading(level=level, text="x")


def test_list_and_quote_levels_start_at_one():
    """Level 0 is invalid for quotes and lists."""
    with pytest.raises(ValidationError):
        BlockQuote(text="q", level=0)
    with pytest.raises(ValidationError):
        UnorderedList(items=("a",), level=0)


def test_table_requires_one_alignment_per_header():
    """A Table with mismatched headers/alignments fails validation."""
    with pytest.raises(ValidationError, match="alignments"):
        Table(headers=("a", "b"), alignments=(TableAlignment.LEFT,))


def test_elements_are_frozen():
    """Elements cannot be mutated after creation."""
    p = Paragraph(text="hello")
    with pytest.raises(ValidationError):
        p.text = "changed"


def test_elements_compare_by_value():
    """Two elements with equal fields are equal; Divider is a value too."""
    assert TaskList(text="t", checked=False) == TaskList(text="t", checked=False, level=1)
    assert Divider() == DIVIDER


def test_element_list_json_round_trip():
    """ElementList serialises the discriminated union and reads it back."""
    elements = [
        Heading(level=2, text="Title"),
        Table(headers=("A",), rows=(("1",),), alignments=(TableAlignment.CENTER,)),
        DIVIDER,
    ]
    restored = ElementList.validate_json(ElementList.dump_json(elements))
    assert restored == elements
