"""Derived metrics: fenced code extraction, word count, reading time, excerpts"""

import math
import re
from typing import Optional, Sequence

from mdsite.core.models import CodeSpan, DerivedMetrics


DEFAULT_READING_SPEED = 200     # words per minute

OPEN_FENCE_RE = re.compile(r'^ {0,3}(?P<fence>`{3,}|~{3,})(?P<info>.*?)\s*$')
CLOSE_FENCE_RE = re.compile(r'^ {0,3}(?P<fence>`{3,}|~{3,})\s*$')
MARKUP_TOKEN_RE = re.compile(r'^[#>*+\-|=_`~]+$')


def _opening(line: str) -> Optional[tuple[str, str]]:
    """Return (fence, language) if line opens a fenced block, else None."""
    m = OPEN_FENCE_RE.match(line.rstrip('\r\n'))
    if not m:
        return None
    fence, info = m.group('fence'), m.group('info').strip()
    if fence[0] == '`' and '`' in info:
        return None
    return fence, info.split()[0] if info else ''


def _closes(line: str, fence: str) -> bool:
    m = CLOSE_FENCE_RE.match(line.rstrip('\r\n'))
    return bool(m) and m.group('fence')[0] == fence[0] and len(m.group('fence')) >= len(fence)


def extract_code_spans(body: str) -> list[CodeSpan]:
    """Find fenced code blocks in body, in order.

    A fence left open runs to the end of the body and is marked closed=False.
    """
    spans: list[CodeSpan] = []
    lines = body.splitlines(keepends=True)
    offset = 0
    i = 0
    while i < len(lines):
        opened = _opening(lines[i])
        if opened is None:
            offset += len(lines[i])
            i += 1
            continue

        fence, language = opened
        start = offset
        offset += len(lines[i])
        content: list[str] = []
        i += 1
        closed = False
        while i < len(lines):
            line = lines[i]
            offset += len(line)
            i += 1
            if _closes(line, fence):
                closed = True
                break
            content.append(line)
        spans.append(CodeSpan(
            language=language,
            content=''.join(content),
            start=start,
            end=offset,
            closed=closed,
        ))
    return spans


def strip_code_spans(body: str, spans: Sequence[CodeSpan]) -> str:
    """Return body with every span replaced by a blank line."""
    parts = []
    cursor = 0
    for span in spans:
        parts.append(body[cursor:span.start])
        parts.append('\n')
        cursor = span.end
    parts.append(body[cursor:])
    return ''.join(parts)


def count_words(text: str) -> int:
    return len(text.split())


def reading_time(word_count: int, reading_speed: int = DEFAULT_READING_SPEED) -> int:
    """Minutes to read word_count words, rounded up, never less than 1."""
    if reading_speed < 1:
        raise ValueError(f"reading_speed must be >= 1, got {reading_speed}")
    return max(1, math.ceil(word_count / reading_speed))


def compute_metrics(
    body: str,
    reading_speed: int = DEFAULT_READING_SPEED,
    count_code: bool = False,
    spans: Sequence[CodeSpan] = None,
    ) -> DerivedMetrics:
    """Word count and reading time for a body; code spans are excluded unless count_code."""
    if count_code:
        words = count_words(body)
    else:
        if spans is None:
            spans = extract_code_spans(body)
        words = count_words(strip_code_spans(body, spans))
    return DerivedMetrics(word_count=words, reading_time=reading_time(words, reading_speed))


def excerpt(body: str, length: int = 70, spans: Sequence[CodeSpan] = None) -> str:
    """First `length` prose words of body, without code or bare markup tokens."""
    if spans is None:
        spans = extract_code_spans(body)
    words = [w for w in strip_code_spans(body, spans).split() if not MARKUP_TOKEN_RE.match(w)]
    if len(words) <= length:
        return ' '.join(words)
    return ' '.join(words[:length]) + '...'
