"""Unit tests for core/render.py"""

from mdsite.core.render import Renderer


FENCED = "```python\nx = 1\n```\n"


def _marker(code: str, lang: str, attrs: str) -> str:
    return f'<pre class="hl-{lang}">{code}</pre>'


def test_render_markdown():
    """The default renderer turns markdown into HTML."""
    html = Renderer().render("# Title\n\nText with **bold**.\n")
    assert "<h1>Title</h1>" in html
    assert "<strong>bold</strong>" in html


def test_renderer_is_callable():
    assert Renderer()("plain\n") == "<p>plain</p>\n"


def test_highlighter_applied_when_enabled():
    html = Renderer(highlighter=_marker).render(FENCED, highlight=True)
    assert 'class="hl-python"' in html


def test_highlighter_suppressed_per_document():
    """highlight=False renders plain escaped code even with a highlighter."""
    html = Renderer(highlighter=_marker).render(FENCED, highlight=False)
    assert "hl-python" not in html
    assert "<code" in html


def test_gfm_tables():
    html = Renderer("gfm-like").render("| a | b |\n| - | - |\n| 1 | 2 |\n")
    assert "<table>" in html
