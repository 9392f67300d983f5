"""Shared fixtures for core unit tests"""

import pytest

from notemark.core.cache import ResultCache
from notemark.core.limits import Limits
from notemark.core.parser import MarkdownParser
from notemark.core.state import ParseState


SAMPLE_MD = """\
# Groceries

Weekly **shopping** list.

- [ ] buy milk
- [x] bread
    - [ ] rye

> remember the coupons

| Item | Price |
|:-----|------:|
| milk | 1.20 |

```python
print("done")
```

---
"""


@pytest.fixture(name="parser")
def parser_fixture():
    return MarkdownParser(cache=ResultCache())


@pytest.fixture(name="state")
def state_fixture():
    return ParseState(Limits())


@pytest.fixture(name="sample_md")
def sample_md_fixture():
    return SAMPLE_MD
