"""Front matter validation: schema enforcement and flag defaults"""

from typing import Any

from pydantic import ValidationError

from mdsite.core.models import METADATA_KEYS, FeatureFlags, Metadata
from mdsite.errors import MissingRequiredField, SchemaError, TypeMismatch, UnknownField


FLAG_KEYS = FeatureFlags.keys()

_EXPECTED = {
    "title": "non-empty string",
    "slug": "slug of letters, digits, '-' or '_'",
    "date": "ISO-8601 timestamp",
    "publishedAt": "ISO-8601 timestamp",
    "draft": "boolean",
    "summary": "string",
    "description": "string",
    "author": "string",
    **{key: "boolean" for key in FLAG_KEYS},
}


def _problems(err: ValidationError, raw: dict[str, Any], source: str) -> list[SchemaError]:
    """Translate pydantic errors into schema errors keyed by front matter name."""
    problems: list[SchemaError] = []
    for e in err.errors():
        key = str(e["loc"][-1]) if e["loc"] else "?"
        if key == "published_at":
            key = "date" if "date" in raw else "publishedAt"
        if e["type"] == "extra_forbidden":
            # Only the unused timestamp alias can be extra here.
            other = "date" if key == "publishedAt" else "publishedAt"
            problems.append(SchemaError(f"field '{key}' conflicts with '{other}'", source, key))
            continue
        if e["type"] == "missing" or (key == "title" and raw.get("title") is None) \
                or (key == "title" and e["type"] == "string_too_short"):
            problems.append(MissingRequiredField(key, source))
        else:
            problems.append(TypeMismatch(key, _EXPECTED.get(key, "valid value"), raw.get(key), source))
    return problems


def validate_metadata(raw: dict[str, Any], source: str = None) -> Metadata:
    """Validate a raw front matter mapping into Metadata.

    Unknown keys fail closed. Either the whole record validates or a
    SchemaError is raised; the first problem (in key order) is raised and
    every problem is attached as `.problems`.
    """
    order = list(raw)
    problems: list[SchemaError] = [
        UnknownField(key, source) for key in raw
        if key not in METADATA_KEYS and key not in FLAG_KEYS
    ]

    flag_part = {k: v for k, v in raw.items() if k in FLAG_KEYS}
    meta_part = {k: v for k, v in raw.items() if k in METADATA_KEYS}
    # An explicit null means "use the default", same as omitting the key.
    flag_part = {k: v for k, v in flag_part.items() if v is not None}
    if meta_part.get("draft", False) is None:
        del meta_part["draft"]

    flags = None
    try:
        flags = FeatureFlags.model_validate(flag_part)
    except ValidationError as e:
        problems.extend(_problems(e, raw, source))

    try:
        if flags is not None:
            meta_part["flags"] = flags
        metadata = Metadata.model_validate(meta_part)
    except ValidationError as e:
        problems.extend(_problems(e, raw, source))

    if problems:
        problems.sort(key=lambda p: order.index(p.field) if p.field in order else len(order))
        first = problems[0]
        first.problems = problems
        raise first
    return metadata
