"""Previous/next linking over the ordered corpus"""

from mdsite.core.models import Corpus, Document, NavigationLinks, NavLink


def nav_link(doc: Document) -> NavLink:
    return NavLink(identity=doc.identity, title=doc.title)


def link_navigation(corpus: Corpus) -> dict[str, NavigationLinks]:
    """Map each identity to its neighbours: previous is older (i+1), next is newer (i-1)."""
    docs = corpus.documents
    links: dict[str, NavigationLinks] = {}
    for i, doc in enumerate(docs):
        links[doc.identity] = NavigationLinks(
            previous=nav_link(docs[i + 1]) if i + 1 < len(docs) else None,
            next=nav_link(docs[i - 1]) if i > 0 else None,
        )
    return links
