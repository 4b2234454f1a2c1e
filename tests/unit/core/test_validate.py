"""Unit tests for core/validate.py"""

from datetime import datetime, timezone

import pytest

from mdsite.core.models import FeatureFlags
from mdsite.core.validate import FLAG_KEYS, validate_metadata
from mdsite.errors import MissingRequiredField, SchemaError, TypeMismatch, UnknownField


DEFAULTS = {
    "showMeta": True,
    "comments": True,
    "highlighting": True,
    "showShareButtons": True,
    "showSummary": True,
    "searchHidden": False,
    "showReadingTime": True,
    "showBreadcrumbs": True,
    "showPostNavLinks": True,
    "showWordCount": True,
    "showRssButton": True,
}


def test_minimal_metadata_applies_defaults():
    """Only a title is required; every flag gets its default."""
    meta = validate_metadata({"title": "Hello"})
    assert meta.title == "Hello"
    assert meta.draft is False
    assert meta.published_at is None
    assert meta.flags.as_dict() == DEFAULTS


def test_flag_keys_cover_closed_set():
    """The validator knows exactly the enumerated flag keys."""
    assert set(FLAG_KEYS) == set(DEFAULTS)


def test_explicit_defaults_match_omitted():
    """Setting every flag to its default validates identically to omitting them."""
    explicit = validate_metadata({"title": "T", "draft": False, **DEFAULTS})
    omitted = validate_metadata({"title": "T"})
    assert explicit.model_dump() == omitted.model_dump()


def test_flag_override():
    """An explicit flag value replaces its default."""
    meta = validate_metadata({"title": "T", "showReadingTime": False, "searchHidden": True})
    assert meta.flags.show_reading_time is False
    assert meta.flags.search_hidden is True


# --- timestamps ---

@pytest.mark.parametrize("value", [
    "2025-01-01",
    "2025-01-01T00:00:00",
    "2025-01-01T00:00:00Z",
    datetime(2025, 1, 1),
])
def test_timestamp_forms(value):
    """Dates, naive datetimes, and ISO strings all normalize to UTC."""
    meta = validate_metadata({"title": "T", "date": value})
    assert meta.published_at == datetime(2025, 1, 1, tzinfo=timezone.utc)


def test_yaml_date_object():
    """A YAML date (datetime.date) is accepted."""
    from datetime import date
    meta = validate_metadata({"title": "T", "date": date(2025, 6, 1)})
    assert meta.published_at.date() == date(2025, 6, 1)


def test_published_at_alias():
    """publishedAt is accepted as an alternative to date."""
    meta = validate_metadata({"title": "T", "publishedAt": "2025-03-01"})
    assert meta.published_at.month == 3


def test_date_and_published_at_conflict():
    """Giving both timestamp keys is a conflict, not a type error."""
    with pytest.raises(SchemaError, match="conflicts with 'date'") as exc:
        validate_metadata({"title": "T", "date": "2020-01-01", "publishedAt": "2020-01-01"})
    assert not isinstance(exc.value, TypeMismatch)
    assert exc.value.field == "publishedAt"


def test_unparseable_timestamp():
    """A non-ISO date string is a TypeMismatch on the date field."""
    with pytest.raises(TypeMismatch) as exc:
        validate_metadata({"title": "T", "date": "next tuesday"}, "a.md")
    assert exc.value.field == "date"
    assert exc.value.actual == "next tuesday"


# --- failures ---

def test_unknown_field_named():
    """An unrecognized key fails closed with UnknownField naming it."""
    with pytest.raises(UnknownField) as exc:
        validate_metadata({"title": "T", "fooBar": True})
    assert exc.value.field == "fooBar"
    assert "fooBar" in str(exc.value)


def test_flag_typo_is_unknown():
    """A misspelled flag is rejected rather than ignored."""
    with pytest.raises(UnknownField, match="showReadingTim"):
        validate_metadata({"title": "T", "showReadingTim": False})


@pytest.mark.parametrize("key,value", [
    ("showMeta", "yes"),
    ("draft", 1),
    ("searchHidden", "false"),
])
def test_non_boolean_flag(key, value):
    """Flags and draft must be real booleans."""
    with pytest.raises(TypeMismatch) as exc:
        validate_metadata({"title": "T", key: value})
    assert exc.value.field == key
    assert exc.value.expected == "boolean"


def test_non_string_title():
    """A numeric title is a type mismatch, not a missing field."""
    with pytest.raises(TypeMismatch, match="title"):
        validate_metadata({"title": 2024})


@pytest.mark.parametrize("raw", [{}, {"title": ""}, {"title": "   "}, {"title": None}])
def test_missing_title(raw):
    """An absent, empty, or blank title is MissingRequiredField."""
    with pytest.raises(MissingRequiredField) as exc:
        validate_metadata(raw)
    assert exc.value.field == "title"


def test_all_problems_attached():
    """Every problem is collected; the first in key order is raised."""
    with pytest.raises(SchemaError) as exc:
        validate_metadata({"fooBar": 1, "title": "T", "comments": "no"})
    assert isinstance(exc.value, UnknownField)
    kinds = {type(p) for p in exc.value.problems}
    assert kinds == {UnknownField, TypeMismatch}


@pytest.mark.parametrize("slug", ["../../escaped", "a/b", "..", "", "has space"])
def test_slug_must_be_path_safe(slug):
    """A slug names output files, so separators, dots, and blanks are rejected."""
    with pytest.raises(TypeMismatch) as exc:
        validate_metadata({"title": "T", "slug": slug})
    assert exc.value.field == "slug"


def test_slug_accepts_slug_charset():
    assert validate_metadata({"title": "T", "slug": "post_a-2"}).slug == "post_a-2"


def test_null_flag_uses_default():
    """An explicit null flag behaves like an omitted one."""
    meta = validate_metadata({"title": "T", "comments": None})
    assert meta.flags.comments is True


def test_metadata_is_immutable():
    """Validated metadata cannot be mutated after the fact."""
    meta = validate_metadata({"title": "T"})
    with pytest.raises(Exception):
        meta.title = "Other"


def test_feature_flags_keys_order():
    """FeatureFlags.keys() returns front matter names in declaration order."""
    assert FeatureFlags.keys()[0] == "showMeta"
    assert FeatureFlags.keys()[-1] == "showRssButton"
