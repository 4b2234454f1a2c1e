"""Collection indexing: filter, deduplicate, and order the published corpus"""

import logging
from collections import defaultdict
from datetime import datetime
from typing import Iterable

from mdsite.core.models import Corpus, Document
from mdsite.core.utils.hashing import combined_hash
from mdsite.errors import DuplicateIdentity


logger = logging.getLogger(__name__)


def sort_key(doc: Document) -> tuple[float, str]:
    """Newest first, ties broken by identity ascending."""
    return (-doc.published_at.timestamp(), doc.identity)


def check_unique(claims: Iterable[tuple[str, str]]) -> None:
    """Raise DuplicateIdentity for the first identity claimed by two or more sources.

    claims are (identity, source) pairs.
    """
    sources: dict[str, list[str]] = defaultdict(list)
    for identity, source in claims:
        sources[identity].append(source)
    for identity, claimed in sources.items():
        if len(claimed) > 1:
            raise DuplicateIdentity(identity, claimed)


def is_indexed(doc: Document, include_drafts: bool = False) -> bool:
    """Whether doc belongs in the corpus: dated, and not a draft unless drafts are built."""
    if doc.metadata.draft and not include_drafts:
        return False
    return doc.published_at is not None


def build_corpus(documents: Iterable[Document], include_drafts: bool = False) -> Corpus:
    """Build the ordered corpus snapshot from validated documents.

    Drafts (unless include_drafts) and undated documents are left out.
    Raises DuplicateIdentity if two surviving documents share an identity.
    """
    survivors = []
    for doc in documents:
        if is_indexed(doc, include_drafts):
            survivors.append(doc)
        elif doc.metadata.draft and not include_drafts:
            logger.info("excluded from corpus: %s (draft)", doc.source)
        else:
            logger.info("excluded from corpus: %s (no publish date)", doc.source)

    check_unique((d.identity, d.source) for d in survivors)
    ordered = tuple(sorted(survivors, key=sort_key))
    logger.info("corpus built: %d document(s)", len(ordered))
    return Corpus(documents=ordered, content_hash=corpus_hash(ordered))


def corpus_hash(documents: Iterable[Document]) -> str:
    """Content hash of an ordered corpus; the only valid cache key for derived data."""
    parts = []
    for doc in documents:
        parts.extend([doc.identity, doc.raw_hash, _iso(doc.published_at)])
    return combined_hash(parts)


def _iso(ts: datetime) -> str:
    return ts.isoformat() if ts else ''
