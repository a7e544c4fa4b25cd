"""Highlight the typed query inside suggestion text."""

import re
from typing import List, Tuple

from markupsafe import Markup, escape

from storefront.config import HIGHLIGHT_CLASS

__all__ = ["split_highlight", "render_highlight"]


def split_highlight(text: str, query: str) -> List[Tuple[str, bool]]:
    """Split text into (part, is_match) pairs for a case-insensitive query.

    The query is matched literally after trimming; regex metacharacters in
    it have no special meaning.
    """
    if not text:
        return []

    needle = (query or "").strip()
    if not needle:
        return [(text, False)]

    # Capturing group: matched parts land on odd indices
    parts = re.split(f"({re.escape(needle)})", text, flags=re.IGNORECASE)
    return [(part, index % 2 == 1) for index, part in enumerate(parts) if part]


def render_highlight(text: str, query: str, css_class: str = HIGHLIGHT_CLASS) -> Markup:
    """Render text as HTML with query matches wrapped in a span."""
    rendered = []
    for part, is_match in split_highlight(text, query):
        if is_match:
            rendered.append(Markup('<span class="{}">{}</span>').format(css_class, part))
        else:
            rendered.append(escape(part))
    return Markup("").join(rendered)
