"""Root test configuration: isolate the process-wide parse cache"""

import pytest

from notemark.core.parser import clear_cache


@pytest.fixture(autouse=True)
def fresh_default_cache():
    """Start and finish every test with an empty default-parser cache."""
    clear_cache()
    yield
    clear_cache()
