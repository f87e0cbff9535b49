from typing import List, Optional

from bs4 import BeautifulSoup, ParserRejectedMarkup

from .errors import ParseError

HTML_TYPES = ("text/html", "application/xhtml+xml")


def is_html(content_type: Optional[str]) -> bool:
    if not content_type:
        return True
    return content_type.split(";", 1)[0].strip().lower() in HTML_TYPES


def parse_document(data: bytes, url: str = "") -> BeautifulSoup:
    try:
        return BeautifulSoup(data, "html.parser")
    except ParserRejectedMarkup as e:
        raise ParseError(url, e) from e


def empty_document() -> BeautifulSoup:
    return BeautifulSoup("", "html.parser")


def extract_tag_attribute(document: BeautifulSoup, tag: str, attr: str) -> List[str]:
    """Values of ``attr`` on every ``tag`` element, in document order."""
    values = []
    for node in document.find_all(tag):
        value = node.get(attr)
        if value is None:
            continue
        if isinstance(value, list):
            value = " ".join(value)
        values.append(value)
    return values
