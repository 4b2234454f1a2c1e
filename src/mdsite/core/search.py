"""Search index: visible published documents in corpus order"""

import json

from mdsite.core.metrics import excerpt
from mdsite.core.models import Corpus, SearchEntry


def build_search_index(corpus: Corpus, summary_length: int = 70) -> list[SearchEntry]:
    """One entry per searchable document, preserving corpus order (no ranking)."""
    return [
        SearchEntry(
            identity=doc.identity,
            title=doc.title,
            summary=doc.metadata.summary or excerpt(doc.body, summary_length, doc.code_spans),
            published_at=doc.published_at,
        )
        for doc in corpus
        if doc.searchable
    ]


def search_index_json(entries: list[SearchEntry]) -> str:
    """Serialize entries for a client-side search widget."""
    return json.dumps([e.model_dump(mode="json") for e in entries], indent=2, ensure_ascii=False)
