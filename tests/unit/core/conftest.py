"""Shared fixtures for core unit tests"""

import pytest

from slidemark.config import Settings
from slidemark.core.parse import parse_markdown


SAMPLE_MD = """\
# Heading 1

A paragraph with **bold** text and a [link](https://example.com).

## Heading 2

- item one
- item two

```python
print("hello")
```

---

Footer paragraph with ![logo](logo.png).
"""


@pytest.fixture(name="settings")
def settings_fixture():
    return Settings()


@pytest.fixture(name="sample_result")
def sample_result_fixture():
    return parse_markdown(SAMPLE_MD)


@pytest.fixture(name="tokens_of")
def tokens_of_fixture():
    """Parse a markdown string and return its top-level tokens as a list."""
    def _tokens(text):
        return list(parse_markdown(text).tokens)
    return _tokens
