"""File discovery and front matter splitting"""

from datetime import date
from pathlib import Path
from typing import Any

import yaml

from mdsite.errors import MalformedDocument


DELIMITER = '---'
MD_EXTENSIONS = {'.md', '.mdx'}
SCALAR_TYPES = (str, bool, int, float, date)


def split_frontmatter(text: str, source: str = None) -> tuple[dict[str, Any], str]:
    """Return (frontmatter_dict, body) for a document with a leading YAML block.

    The block must open on the first line and close on a line of its own.
    Values must be scalars: the block is a flat key/value structure.
    """
    lines = text.lstrip('\ufeff').splitlines(keepends=True)
    if not lines or lines[0].strip() != DELIMITER:
        raise MalformedDocument("missing leading front matter delimiter", source)

    end = next((i for i in range(1, len(lines)) if lines[i].strip() == DELIMITER), None)
    if end is None:
        raise MalformedDocument("unterminated front matter block", source)

    block = ''.join(lines[1:end])
    try:
        fm = yaml.safe_load(block) if block.strip() else {}
    except yaml.YAMLError as e:
        raise MalformedDocument(f"invalid YAML front matter: {e}", source) from e
    if fm is None:
        fm = {}
    if not isinstance(fm, dict):
        raise MalformedDocument(
            f"front matter must be a mapping, got {type(fm).__name__}", source
        )

    for key, value in fm.items():
        if not isinstance(key, str):
            raise MalformedDocument(f"front matter key {key!r} is not a string", source)
        if value is not None and not isinstance(value, SCALAR_TYPES):
            raise MalformedDocument(
                f"front matter key '{key}' has a nested {type(value).__name__} value", source
            )

    return fm, ''.join(lines[end + 1:])


def discover_files(path: Path) -> list[Path]:
    """Return sorted .md/.mdx files under path, or [path] if a single file."""
    if path.is_file():
        return [path] if path.suffix in MD_EXTENSIONS else []
    return sorted(p for p in path.rglob('*') if p.is_file() and p.suffix in MD_EXTENSIONS)
