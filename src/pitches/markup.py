"""
Pitch markdown rendering.

Turns the markdown source of a pitch into HTML for the detail page. The
transform is deterministic and has no side effects. Raw HTML in the
source is escaped rather than passed through, and link or image URLs
are kept only when they are relative or use an allowed scheme.
"""

import html
import re
from typing import Optional

import markdown
from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor
from markupsafe import Markup


MD_EXTENSIONS = ["fenced_code", "tables", "sane_lists"]

ALLOWED_SCHEMES = ("http", "https", "mailto")

# Browsers skip these anywhere in a URL before reading the scheme
_IGNORED_URL_CHARS = re.compile(r"[\x00-\x20\x7f-\x9f]+")
_SCHEME = re.compile(r"^([a-z][a-z0-9+.\-]*):")


def is_safe_url(url: str) -> bool:
    """
    Check a link or image URL against ALLOWED_SCHEMES.

    Character references are decoded until nothing changes and control
    characters and whitespace are removed before the scheme is read, the
    way a browser would see the attribute. URLs without a scheme are
    relative and allowed.
    """
    decoded = url
    while True:
        unescaped = html.unescape(decoded)
        if unescaped == decoded:
            break
        decoded = unescaped

    match = _SCHEME.match(_IGNORED_URL_CHARS.sub("", decoded).lower())
    return match is None or match.group(1) in ALLOWED_SCHEMES


class _UnsafeLinkStripper(Treeprocessor):
    def run(self, root):
        for element in root.iter():
            for attr in ("href", "src"):
                value = element.get(attr)
                if value is not None and not is_safe_url(value):
                    del element.attrib[attr]


class SafePitchExtension(Extension):
    """Escape raw HTML and strip links with disallowed schemes."""

    def extendMarkdown(self, md):
        md.preprocessors.deregister("html_block")
        md.inlinePatterns.deregister("html")
        # Below the built-in "unescape" (0) so backslash escapes are restored first
        md.treeprocessors.register(_UnsafeLinkStripper(md), "unsafe_links", -10)


def render_pitch(source: Optional[str]) -> Optional[Markup]:
    """
    Render pitch markdown to HTML.

    Args:
        source: Markdown text, possibly empty or None.

    Returns:
        Safe HTML markup, or None when there is nothing to render (the page
        shows a "no details" indicator instead).
    """
    if not source or not source.strip():
        return None

    # Markdown instances keep per-document state; one per call is thread-safe
    renderer = markdown.Markdown(
        extensions=[*MD_EXTENSIONS, SafePitchExtension()],
        output_format="html",
    )
    return Markup(renderer.convert(source))
