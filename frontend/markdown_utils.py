from typing import Optional

import markdown
from markupsafe import Markup

MD_EXTENSIONS = ["fenced_code", "tables", "sane_lists"]


def render_markdown(text: str) -> str:
    """Convert markdown (a full article or a truncated preview) to HTML.

    Fragments cut mid-construct, e.g. an unterminated code fence, are
    rendered as they stand.
    """
    md = markdown.Markdown(extensions=MD_EXTENSIONS)
    return md.convert(text)


def trust_html(html: str) -> Markup:
    # Articles are written by the site owner; this only opts out of
    # template autoescaping.
    return Markup(html)


def render_trusted(text: str) -> Markup:
    return trust_html(render_markdown(text))


def extract_title(text: str) -> Optional[str]:
    """Return the text of the first level-one heading, if any."""
    for line in text.splitlines():
        if line.startswith("# "):
            return line[2:].strip() or None
    return None
