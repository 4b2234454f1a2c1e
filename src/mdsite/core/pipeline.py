"""Pipeline orchestration: per-document stage, corpus barrier, and page assembly"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from mdsite.config import Settings
from mdsite.core.assemble import assemble_degraded, assemble_page
from mdsite.core.corpus import build_corpus, check_unique
from mdsite.core.metrics import compute_metrics, extract_code_spans
from mdsite.core.models import (
    Corpus,
    DerivedMetrics,
    Document,
    DocumentResult,
    NavigationLinks,
    PageContext,
    SearchEntry,
)
from mdsite.core.navigation import link_navigation
from mdsite.core.parse import discover_files, split_frontmatter
from mdsite.core.render import Renderer
from mdsite.core.search import build_search_index
from mdsite.core.utils.hashing import sha256
from mdsite.core.utils.slug import slugify
from mdsite.core.validate import validate_metadata
from mdsite.errors import MalformedDocument, MdsiteError


logger = logging.getLogger(__name__)


@dataclass
class BuildResult:
    corpus:     Corpus
    navigation: dict[str, NavigationLinks]
    search:     list[SearchEntry]
    pages:      list[PageContext]               # corpus order, then standalone, then degraded
    excluded:   list[tuple[str, str]] = field(default_factory=list)    # (source, reason)


def default_identity(source: str) -> str:
    return slugify(Path(source).stem)


def load_document(raw: str, source: str, settings: Settings) -> tuple[Document, DerivedMetrics]:
    """Parse, validate, and measure one document. Raises MdsiteError subclasses."""
    frontmatter, body = split_frontmatter(raw, source)
    metadata = validate_metadata(frontmatter, source)
    spans = extract_code_spans(body)
    doc = Document(
        identity=metadata.slug or default_identity(source),
        source=source,
        metadata=metadata,
        body=body,
        code_spans=tuple(spans),
        raw_hash=sha256(raw),
    )
    metrics = compute_metrics(body, settings.reading_speed, settings.count_code_words, spans)
    return doc, metrics


def process_file(path: Path, root: Path, settings: Settings) -> DocumentResult:
    """Per-document worker; failures are captured on the result, never raised."""
    source = _relative(path, root)
    data = path.read_bytes()
    try:
        raw = data.decode('utf-8').replace('\r\n', '\n').replace('\r', '\n')
        doc, metrics = load_document(raw, source, settings)
    except UnicodeDecodeError as e:
        error = MalformedDocument(f"not valid UTF-8: {e}", source)
        return DocumentResult(path=path, error=error, body=data.decode('utf-8', errors='replace'))
    except MalformedDocument as e:
        return DocumentResult(path=path, error=e, body=raw)
    except MdsiteError as e:
        _, body = split_frontmatter(raw, source)
        return DocumentResult(path=path, error=e, body=body)
    logger.debug("processed %s -> %s (%d words)", source, doc.identity, metrics.word_count)
    return DocumentResult(path=path, document=doc, metrics=metrics, body=doc.body)


def run_stage(paths: list[Path], root: Path, settings: Settings) -> list[DocumentResult]:
    """Run the per-document stage across worker threads; results keep input order."""
    with ThreadPoolExecutor(max_workers=settings.workers) as pool:
        return list(pool.map(lambda p: process_file(p, root, settings), paths))


def assemble_site(
    results: list[DocumentResult],
    settings: Settings,
    renderer: Optional[Renderer] = None,
    ) -> BuildResult:
    """Join point: build corpus, navigation, search, and page contexts.

    Raises the first document failure in strict mode, and DuplicateIdentity
    in any mode.
    """
    renderer = renderer or Renderer(settings.parser_config)
    failures = [r for r in results if r.error is not None]
    if failures and settings.strict:
        raise failures[0].error

    excluded: list[tuple[str, str]] = []
    for r in failures:
        logger.warning("degraded: %s", r.error)
        excluded.append((_source_of(r), str(r.error)))

    loaded = [r for r in results if r.document is not None]
    emitted = []
    for r in loaded:
        if r.document.metadata.draft and not settings.include_drafts:
            logger.info("not emitted: %s (draft)", r.document.source)
            excluded.append((r.document.source, "draft"))
        else:
            emitted.append(r)

    degraded_ids = [(default_identity(_source_of(r)), _source_of(r)) for r in failures]
    check_unique([(r.document.identity, r.document.source) for r in emitted] + degraded_ids)

    corpus = build_corpus([r.document for r in emitted], settings.include_drafts)
    navigation = link_navigation(corpus)
    search = build_search_index(corpus, settings.summary_length)

    metrics = {r.document.identity: r.metrics for r in emitted}
    in_corpus = set(corpus.identities)
    standalone = sorted(
        (r.document for r in emitted if r.document.identity not in in_corpus),
        key=lambda d: d.identity,
    )
    for doc in standalone:
        logger.info("standalone page: %s (no publish date)", doc.source)

    pages = [
        assemble_page(
            doc,
            metrics[doc.identity],
            navigation.get(doc.identity),
            renderer.render(doc.body, highlight=doc.flags.highlighting),
        )
        for doc in [*corpus, *standalone]
    ]
    pages.extend(
        assemble_degraded(identity, source, renderer.render(r.body, highlight=False), r.error)
        for (identity, source), r in zip(degraded_ids, failures)
    )
    return BuildResult(
        corpus=corpus, navigation=navigation, search=search, pages=pages, excluded=excluded,
    )


def run_build(path: str, settings: Settings, renderer: Optional[Renderer] = None) -> BuildResult:
    """Discover documents under path and run the whole pipeline once."""
    target = Path(path)
    root = target.parent if target.is_file() else target
    files = discover_files(target)
    logger.info("discovered %d document(s) under %s", len(files), target)
    return assemble_site(run_stage(files, root, settings), settings, renderer)


def _relative(path: Path, root: Path) -> str:
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return path.as_posix()


def _source_of(result: DocumentResult) -> str:
    return getattr(result.error, 'source', None) or result.path.as_posix()
