"""Data models for the parse, index, and assemble pipeline"""

from dataclasses import dataclass
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Annotated, Any, Iterator, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, StringConstraints, field_validator


class FeatureFlags(BaseModel):
    """Closed set of per-document display and behavior toggles."""
    model_config = ConfigDict(frozen=True, strict=True, extra="forbid", populate_by_name=True)

    show_meta:          bool = Field(default=True,  alias="showMeta")
    comments:           bool = Field(default=True,  alias="comments")
    highlighting:       bool = Field(default=True,  alias="highlighting")
    show_share_buttons: bool = Field(default=True,  alias="showShareButtons")
    show_summary:       bool = Field(default=True,  alias="showSummary")
    search_hidden:      bool = Field(default=False, alias="searchHidden")
    show_reading_time:  bool = Field(default=True,  alias="showReadingTime")
    show_breadcrumbs:   bool = Field(default=True,  alias="showBreadcrumbs")
    show_post_nav_links: bool = Field(default=True, alias="showPostNavLinks")
    show_word_count:    bool = Field(default=True,  alias="showWordCount")
    show_rss_button:    bool = Field(default=True,  alias="showRssButton")

    @classmethod
    def keys(cls) -> list[str]:
        """Front-matter keys, in declaration order."""
        return [f.alias for f in cls.model_fields.values()]

    def as_dict(self) -> dict[str, bool]:
        return self.model_dump(by_alias=True)


Title = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

# Identity override; it names output files, so no separators or dots.
Slug = Annotated[str, StringConstraints(strip_whitespace=True, pattern=r"^[\w-]+$")]


class Metadata(BaseModel):
    """Validated front matter. Flags live in a nested record; the source block is flat."""
    model_config = ConfigDict(frozen=True, strict=True, extra="forbid", populate_by_name=True)

    title:        Title
    slug:         Optional[Slug] = None
    published_at: Optional[datetime] = Field(
        default=None, validation_alias=AliasChoices("date", "publishedAt"),
    )
    draft:        bool = False
    summary:      Optional[str] = None
    description:  Optional[str] = None
    author:       Optional[str] = None
    flags:        FeatureFlags = Field(default_factory=FeatureFlags)

    @field_validator("published_at", mode="before")
    @classmethod
    def _coerce_timestamp(cls, value: Any) -> Any:
        """Accept YAML dates/datetimes and ISO-8601 strings; naive values are UTC."""
        if value is None:
            return None
        if isinstance(value, datetime):
            ts = value
        elif isinstance(value, date):
            ts = datetime(value.year, value.month, value.day)
        elif isinstance(value, str):
            try:
                ts = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
            except ValueError as e:
                raise ValueError(f"not an ISO-8601 timestamp: {value!r}") from e
        else:
            raise ValueError(f"not a timestamp: {value!r}")
        return ts if ts.tzinfo else ts.replace(tzinfo=timezone.utc)


# Front-matter keys accepted at the top level of a document.
METADATA_KEYS = ("title", "slug", "date", "publishedAt", "draft", "summary", "description", "author")


class CodeSpan(BaseModel):
    """A fenced code block inside a document body."""
    model_config = ConfigDict(frozen=True)

    language: str = ""
    content:  str
    start:    int                   # character offset of the opening fence
    end:      int                   # offset just past the closing fence (or end of body)
    closed:   bool = True


class Document(BaseModel):
    """A validated content item; exclusively owned by the build that parsed it."""
    model_config = ConfigDict(frozen=True)

    identity:   str
    source:     str
    metadata:   Metadata
    body:       str
    code_spans: tuple[CodeSpan, ...] = ()
    raw_hash:   str = ""

    @property
    def title(self) -> str:
        return self.metadata.title

    @property
    def published_at(self) -> Optional[datetime]:
        return self.metadata.published_at

    @property
    def flags(self) -> FeatureFlags:
        return self.metadata.flags

    @property
    def searchable(self) -> bool:
        """Drafts never reach search, whatever their flags say."""
        return not self.metadata.draft and not self.metadata.flags.search_hidden


class DerivedMetrics(BaseModel):
    model_config = ConfigDict(frozen=True)

    word_count:   int = Field(ge=0)
    reading_time: int = Field(ge=1)     # minutes, rounded up


class NavLink(BaseModel):
    """Weak reference to a sibling document."""
    model_config = ConfigDict(frozen=True)

    identity: str
    title:    str


class NavigationLinks(BaseModel):
    model_config = ConfigDict(frozen=True)

    previous: Optional[NavLink] = None  # older
    next:     Optional[NavLink] = None  # newer


class SearchEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    identity:     str
    title:        str
    summary:      str
    published_at: datetime


class PageContext(BaseModel):
    """Page-render context handed to the templating layer.

    Optional fields are left unset when a feature flag disables them;
    as_dict() drops them entirely.
    """
    model_config = ConfigDict(frozen=True)

    identity:       str
    title:          str
    body:           str
    source:         str
    draft:          bool = False
    flags:          dict[str, bool] = {}
    published_at:   Optional[datetime] = None
    author:         Optional[str] = None
    description:    Optional[str] = None
    summary:        Optional[str] = None
    reading_time:   Optional[int] = None
    word_count:     Optional[int] = None
    previous:       Optional[NavLink] = None
    next:           Optional[NavLink] = None
    breadcrumbs:    Optional[list[str]] = None
    code_languages: Optional[list[str]] = None
    comments:       Optional[bool] = None
    share_buttons:  Optional[bool] = None
    rss_button:     Optional[bool] = None
    error:          Optional[str] = None

    def as_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


@dataclass(frozen=True)
class Corpus:
    """Immutable, ordered snapshot of published documents for one build."""
    documents:    tuple[Document, ...] = ()
    content_hash: str = ""

    def __iter__(self) -> Iterator[Document]:
        return iter(self.documents)

    def __len__(self) -> int:
        return len(self.documents)

    def __getitem__(self, index: int) -> Document:
        return self.documents[index]

    @property
    def identities(self) -> list[str]:
        return [d.identity for d in self.documents]


@dataclass
class DocumentResult:
    """Outcome of the per-document stage; exactly one of document/error is set."""
    path:     Path
    document: Optional[Document] = None
    metrics:  Optional[DerivedMetrics] = None
    error:    Optional[Exception] = None
    body:     str = ""              # best-effort body for degraded pages
