"""Export: write page contexts, rendered bodies, search index, and build manifest"""

import json
import shutil
from pathlib import Path

from mdsite.core.models import PageContext
from mdsite.core.pipeline import BuildResult
from mdsite.core.search import search_index_json


SEARCH_FILE = "search.json"
MANIFEST_FILE = "manifest.json"
PAGES_DIR = "pages"


def build_manifest(result: BuildResult) -> dict:
    """Corpus order, snapshot hash, and every exclusion with its cause."""
    return {
        "content_hash": result.corpus.content_hash,
        "corpus": result.corpus.identities,
        "pages": [p.identity for p in result.pages],
        "excluded": [{"source": src, "reason": reason} for src, reason in result.excluded],
    }


def write_page(page: PageContext, output_dir: Path) -> tuple[Path, Path]:
    """Write pages/<identity>.html (rendered body) and pages/<identity>.json (context minus body).

    Returns (html_path, json_path). Raises ValueError if the identity would
    place either file outside the pages directory.
    """
    pages_dir = output_dir / PAGES_DIR
    html_path = pages_dir / f"{page.identity}.html"
    json_path = pages_dir / f"{page.identity}.json"
    if json_path.resolve().parent != pages_dir.resolve():
        raise ValueError(f"page identity '{page.identity}' escapes {pages_dir}")
    html_path.parent.mkdir(parents=True, exist_ok=True)

    context = page.as_dict()
    context.pop("body", None)
    html_path.write_text(page.body, encoding='utf-8')
    json_path.write_text(json.dumps(context, indent=2, ensure_ascii=False), encoding='utf-8')
    return html_path, json_path


def write_build(result: BuildResult, output_dir: Path) -> list[tuple[str, Path]]:
    """Write every page plus search.json and manifest.json. Returns (identity, json_path) pairs.

    The pages directory is rebuilt from scratch, so pages of removed or
    newly excluded documents do not linger.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    if (output_dir / PAGES_DIR).exists():
        shutil.rmtree(output_dir / PAGES_DIR)
    written = []
    for page in result.pages:
        _, json_path = write_page(page, output_dir)
        written.append((page.identity, json_path))

    (output_dir / SEARCH_FILE).write_text(search_index_json(result.search), encoding='utf-8')
    (output_dir / MANIFEST_FILE).write_text(
        json.dumps(build_manifest(result), indent=2, ensure_ascii=False), encoding='utf-8',
    )
    return written
