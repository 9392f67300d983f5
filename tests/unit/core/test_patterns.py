"""Unit tests for core/patterns.py escape handling"""

import pytest

from notemark.core.patterns import mask_escapes, unmask


def test_mask_hides_escaped_delimiters():
    """Masked text contains no literal delimiter for an escaped character."""
    masked = mask_escapes(r"\*not bold\*")
    assert "*" not in masked
    assert unmask(masked) == "*not bold*"


def test_all_supported_escapes_unmask_to_literals():
    """Every entry of the escape table is restored as its literal character."""
    text = r"\* \# \[ \] \( \) \{ \} \_ \` \~ \\"
    assert unmask(mask_escapes(text)) == "* # [ ] ( ) { } _ ` ~ \\"


@pytest.mark.parametrize("text", [r"\z unsupported", r"\1 digit", "no escapes"])
def test_unsupported_escapes_kept_verbatim(text):
    """Backslashes before characters outside the table are left alone."""
    assert mask_escapes(text) == text
