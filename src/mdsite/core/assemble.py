"""Page assembly: merge metadata, metrics, links, and rendered body into a context"""

from typing import Optional

from mdsite.core.models import DerivedMetrics, Document, NavigationLinks, PageContext
from mdsite.core.utils.slug import breadcrumbs


def _languages(doc: Document) -> list[str]:
    """Distinct fence languages, first occurrence order."""
    return list(dict.fromkeys(s.language for s in doc.code_spans if s.language))


def assemble_page(
    doc: Document,
    metrics: DerivedMetrics,
    links: Optional[NavigationLinks],
    body_html: str,
    ) -> PageContext:
    """Build the page context for a document.

    Fields gated by a disabled feature flag are left out of the context
    rather than computed and marked hidden. links is None for documents
    outside the corpus (standalone pages).
    """
    meta, flags = doc.metadata, doc.flags
    fields = {
        "identity": doc.identity,
        "title": doc.title,
        "body": body_html,
        "source": doc.source,
        "draft": meta.draft,
        "flags": flags.as_dict(),
        "description": meta.description,
    }

    if flags.show_meta:
        fields["published_at"] = meta.published_at
        fields["author"] = meta.author
    if flags.show_summary:
        fields["summary"] = meta.summary
    if flags.show_reading_time:
        fields["reading_time"] = metrics.reading_time
    if flags.show_word_count:
        fields["word_count"] = metrics.word_count
    if flags.show_post_nav_links and links is not None:
        fields["previous"] = links.previous
        fields["next"] = links.next
    if flags.show_breadcrumbs:
        fields["breadcrumbs"] = breadcrumbs(doc.source)
    if flags.highlighting:
        fields["code_languages"] = _languages(doc)
    if flags.comments:
        fields["comments"] = True
    if flags.show_share_buttons:
        fields["share_buttons"] = True
    if flags.show_rss_button:
        fields["rss_button"] = True

    return PageContext(**fields)


def assemble_degraded(identity: str, source: str, body_html: str, error: Exception) -> PageContext:
    """Reduced standalone context for a document that failed parsing or validation."""
    return PageContext(
        identity=identity,
        title=identity,
        body=body_html,
        source=source,
        error=str(error),
    )
