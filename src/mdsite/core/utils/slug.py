"""Identity and breadcrumb helpers for document paths"""

import re
from pathlib import PurePosixPath


def slugify(text: str) -> str:
    """Convert text to a lowercase, hyphen-separated URL-safe slug."""
    text = text.lower()
    text = re.sub(r'[^\w\s-]', '', text)
    text = re.sub(r'[\s_]+', '-', text)
    return re.sub(r'-+', '-', text).strip('-')


def breadcrumbs(source: str) -> list[str]:
    """Parent directory segments of a relative source path, outermost first."""
    return [p for p in PurePosixPath(source).parent.parts if p not in ('.', '/')]
