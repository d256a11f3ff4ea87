"""NodeReader over BeautifulSoup-parsed HTML."""

import re
from typing import Any, Optional, Union

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import Comment, Declaration, Doctype, ProcessingInstruction

from src.adapters.node_reader import NodeReader

# Elements that start on their own line in rendered text
_BLOCK_TAGS = {
    "address", "article", "aside", "blockquote", "dd", "div", "dl", "dt",
    "figcaption", "figure", "footer", "h1", "h2", "h3", "h4", "h5", "h6",
    "header", "hr", "li", "main", "nav", "ol", "section", "table", "tr", "ul",
}
_SKIP_TAGS = {"script", "style", "noscript", "template"}

_WS_RUN = re.compile(r"[ \t\r\n\f]+")
_TRAILING_WS = re.compile(r"[ \t]+\n")
_LEADING_WS = re.compile(r"\n[ \t]+")
_BLANK_RUN = re.compile(r"\n{3,}")


def parse_html(html: str) -> BeautifulSoup:
    """Parse an HTML page with the stdlib-backed parser."""
    return BeautifulSoup(html, "html.parser")


def inner_text(tag: Tag) -> str:
    """Approximate the browser's innerText for a parsed element.

    Paragraphs are separated by a blank line, other block elements start on
    a new line, <br> breaks the line and <pre> keeps its line breaks.
    """
    # ints in parts are required line breaks; adjacent ones merge to the largest
    parts: list[Union[str, int]] = []
    _collect_text(tag, parts)

    out: list[str] = []
    pending = 0
    for part in parts:
        if isinstance(part, int):
            pending = max(pending, part)
            continue
        if not part or (not part.strip(" ") and (pending or not out)):
            continue
        if pending and out:
            out.append("\n" * pending)
        pending = 0
        out.append(part)

    text = "".join(out)
    text = _TRAILING_WS.sub("\n", text)
    text = _LEADING_WS.sub("\n", text)
    text = _BLANK_RUN.sub("\n\n", text)
    return text.strip()


def _collect_text(node, parts: list) -> None:
    for child in node.children:
        if isinstance(child, (Comment, Declaration, Doctype, ProcessingInstruction)):
            continue
        if isinstance(child, NavigableString):
            parts.append(_WS_RUN.sub(" ", str(child)))
            continue
        if not isinstance(child, Tag) or child.name in _SKIP_TAGS:
            continue

        if child.name == "br":
            parts.append("\n")
        elif child.name == "pre":
            parts.extend([1, child.get_text(), 1])
        elif child.name == "p":
            parts.append(2)
            _collect_text(child, parts)
            parts.append(2)
        elif child.name in _BLOCK_TAGS:
            parts.append(1)
            _collect_text(child, parts)
            parts.append(1)
        else:
            _collect_text(child, parts)


class SoupNodeReader(NodeReader):
    """Reads a BeautifulSoup tag (or whole document).

    Static HTML carries no typed properties, so property() always returns
    None and callers fall back to attributes.
    """

    def __init__(self, tag: Tag):
        self._tag = tag

    @classmethod
    def from_html(cls, html: str) -> "SoupNodeReader":
        return cls(parse_html(html))

    def query(self, selector: str) -> Optional[NodeReader]:
        found = self._tag.select_one(selector)
        return SoupNodeReader(found) if found is not None else None

    def query_all(self, selector: str) -> list[NodeReader]:
        return [SoupNodeReader(t) for t in self._tag.select(selector)]

    def attribute(self, name: str) -> Optional[str]:
        value = self._tag.get(name)
        if isinstance(value, list):
            # multi-valued attributes such as class
            return " ".join(value)
        return value

    def property(self, name: str) -> Any:
        return None

    def text(self) -> str:
        return inner_text(self._tag)

    def document_title(self) -> str:
        """Return the <title> text of the document, or an empty string."""
        title = self._tag.find("title")
        if title is None:
            return ""
        return title.get_text().strip()
