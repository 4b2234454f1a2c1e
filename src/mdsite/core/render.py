"""Markdown rendering collaborator built on markdown-it"""

from typing import Callable, Optional

from markdown_it import MarkdownIt


# (code, language, attrs) -> markup, or "" to fall back to escaped output
Highlighter = Callable[[str, str, str], str]


def _make_parser(preset: str, highlighter: Optional[Highlighter] = None) -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name."""
    options = {"linkify": False}
    if highlighter is not None:
        options["highlight"] = highlighter
    return MarkdownIt(preset, options_update=options)


class Renderer:
    """Pure text -> markup function with optional per-document highlighting."""

    def __init__(self, preset: str = 'gfm-like', highlighter: Optional[Highlighter] = None):
        self.preset = preset
        self._plain = _make_parser(preset)
        self._highlighted = _make_parser(preset, highlighter) if highlighter else self._plain

    def render(self, text: str, highlight: bool = True) -> str:
        parser = self._highlighted if highlight else self._plain
        return parser.render(text)

    __call__ = render
