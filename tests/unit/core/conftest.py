"""Shared fixtures for core unit tests"""

import pytest

from mdsite.core.metrics import extract_code_spans
from mdsite.core.models import Document
from mdsite.core.validate import validate_metadata


SAMPLE_BODY = """\
# Heading

One two three four five.

```python
print("not counted at all")
```

Six seven.
"""

SAMPLE_DOC = """\
---
title: Sample Post
date: 2025-03-01
summary: A short summary.
---
""" + SAMPLE_BODY


def build_doc(identity: str, date: str = None, draft: bool = False, body: str = "Body text.\n",
              source: str = None, **fields) -> Document:
    raw = {"title": fields.pop("title", identity.replace("-", " ").title()), "draft": draft, **fields}
    if date is not None:
        raw["date"] = date
    return Document(
        identity=identity,
        source=source or f"posts/{identity}.md",
        metadata=validate_metadata(raw, source),
        body=body,
        code_spans=tuple(extract_code_spans(body)),
        raw_hash=identity,
    )


@pytest.fixture(name="make_doc")
def make_doc_fixture():
    return build_doc


@pytest.fixture(name="sample_doc")
def sample_doc_fixture():
    return SAMPLE_DOC


@pytest.fixture(name="sample_body")
def sample_body_fixture():
    return SAMPLE_BODY
