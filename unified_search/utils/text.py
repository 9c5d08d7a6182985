"""HTML to plain-text snippet normalization."""

import re

NO_PREVIEW = "No preview available"
ELLIPSIS = "..."

_HTML_TAG_RE = re.compile(r"<[^>]*>")
_WHITESPACE_RE = re.compile(r"\s+")

# Only these entities are decoded; anything else is left as-is
_ENTITIES = (
    ("&nbsp;", " "),
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#39;", "'"),
)


def strip_html_snippet(html_text: object, max_length: int = 200) -> str:
    """Convert HTML-rich text into a bounded plain-text preview.

    Tags are replaced by spaces, a fixed set of entities is decoded and
    whitespace is collapsed. Text longer than ``max_length`` is cut at the
    last word boundary when one falls in the final 30% of the window,
    otherwise at ``max_length``, and an ellipsis is appended either way.
    Never raises; empty or non-string input yields ``NO_PREVIEW``.
    """
    if not html_text or not isinstance(html_text, str):
        return NO_PREVIEW

    text = _HTML_TAG_RE.sub(" ", html_text)
    for entity, char in _ENTITIES:
        text = text.replace(entity, char)
    text = _WHITESPACE_RE.sub(" ", text).strip()

    if len(text) > max_length:
        truncated = text[:max_length]
        last_space = truncated.rfind(" ")
        if last_space > max_length * 0.7:
            text = truncated[:last_space] + ELLIPSIS
        else:
            text = truncated + ELLIPSIS

    return text or NO_PREVIEW
