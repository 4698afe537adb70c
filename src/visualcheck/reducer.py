"""
DOM reduction for AI context.

Shrinks a full page serialization to the tags and attributes that help the
model match what it sees in the screenshot to real elements. Scripts, styles
and inline handlers are noise (and tokens), so they go.
"""

import re
from typing import Optional

from bs4 import BeautifulSoup, CData, Comment, Declaration, Doctype, ProcessingInstruction
from loguru import logger

ALLOWED_TAGS = frozenset([
    "div", "span", "p",
    "h1", "h2", "h3", "h4", "h5", "h6",
    "a", "button", "input", "form", "label", "select", "option",
    "ul", "ol", "li",
    "nav", "header", "footer", "main", "section", "article", "aside",
    "img",
    "table", "tr", "td", "th", "tbody", "thead", "tfoot",
    "br", "hr",
    "strong", "em", "b", "i",
])

# Dropped together with everything inside them
DISCARD_CONTENT_TAGS = ["script", "style", "textarea", "noscript"]

ALLOWED_ATTRIBUTES = frozenset([
    "class", "id", "role", "type", "name", "value", "placeholder",
    "alt", "src", "href", "target",
])
ALLOWED_ATTRIBUTE_PREFIXES = ("data-", "aria-")

URL_ATTRIBUTES = frozenset(["href", "src"])
ALLOWED_SCHEMES = frozenset(["http", "https", "data"])

_SCHEME_RE = re.compile(r"^([a-zA-Z][a-zA-Z0-9.\-+]*):")
# Browsers ignore these inside a scheme, so "java\tscript:" is still javascript:
_URL_NOISE_RE = re.compile(r"[\x00-\x20]+")

_MARKUP_NOISE = (Comment, Doctype, Declaration, CData, ProcessingInstruction)


def _url_allowed(value: str) -> bool:
    cleaned = _URL_NOISE_RE.sub("", value)
    if cleaned.startswith("//"):
        return True
    match = _SCHEME_RE.match(cleaned)
    if not match:
        # Relative URL
        return True
    return match.group(1).lower() in ALLOWED_SCHEMES


def _attribute_allowed(name: str, value) -> bool:
    name = name.lower()
    if name not in ALLOWED_ATTRIBUTES and not name.startswith(ALLOWED_ATTRIBUTE_PREFIXES):
        return False
    if name in URL_ATTRIBUTES:
        text = " ".join(value) if isinstance(value, list) else str(value)
        return _url_allowed(text)
    return True


def reduce_html(raw_html: str, max_chars: Optional[int] = None) -> str:
    """
    Reduce page HTML to the allow-listed tags and attributes.

    Disallowed tags are unwrapped (their children are kept and filtered),
    except script/style/textarea/noscript which are removed with their content.
    Running the output through reduce_html again changes nothing.

    Args:
        raw_html: Serialized page HTML (e.g. page.content())
        max_chars: Optional size budget; longer output is truncated with a marker

    Returns:
        Reduced HTML string. Never raises.
    """
    try:
        soup = BeautifulSoup(raw_html or "", "html.parser")

        for node in soup.find_all(string=lambda s: isinstance(s, _MARKUP_NOISE)):
            node.extract()

        for tag in soup.find_all(DISCARD_CONTENT_TAGS):
            # Nested ones are already gone with their parent
            if not tag.decomposed:
                tag.decompose()

        for tag in soup.find_all(True):
            if tag.name not in ALLOWED_TAGS:
                tag.unwrap()
                continue
            tag.attrs = {
                name: value
                for name, value in tag.attrs.items()
                if _attribute_allowed(name, value)
            }

        reduced = str(soup)
    except Exception as e:
        logger.warning(f"DOM reduction failed, falling back to page text: {e}")
        reduced = _text_fallback(raw_html)

    if max_chars is not None and len(reduced) > max_chars:
        cut = len(reduced) - max_chars
        reduced = f"{reduced[:max_chars]}\n... (DOM truncated by {cut} chars)"

    return reduced


def _text_fallback(raw_html: str) -> str:
    try:
        return BeautifulSoup(raw_html or "", "html.parser").get_text(separator="\n", strip=True)
    except Exception as e:
        logger.warning(f"Plain-text extraction failed: {e}")
        return ""
