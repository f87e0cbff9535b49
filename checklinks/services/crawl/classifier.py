import re
from typing import Optional, Union
from urllib.parse import SplitResult, urlsplit, urlunsplit

from .errors import MalformedURL, NotCrawlable

CRAWLABLE_SCHEMES = ("http", "https", "")

_CONTROL = re.compile(r"[\x00-\x1f\x7f]")
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")

URLLike = Union[str, SplitResult]


def parse_address(address: str, owner: Optional[str] = None) -> SplitResult:
    # surrounding whitespace is dropped the way browsers do for href values
    address = address.strip()
    if _CONTROL.search(address):
        raise MalformedURL(address, "invalid control character", owner)
    if _BAD_ESCAPE.search(address):
        raise MalformedURL(address, "invalid percent escape", owner)
    try:
        parts = urlsplit(address)
        parts.port
    except ValueError as e:
        raise MalformedURL(address, str(e), owner) from e
    if any(ch.isspace() for ch in parts.netloc):
        raise MalformedURL(address, "whitespace in host", owner)
    return parts


def _split(url: URLLike) -> SplitResult:
    return url if isinstance(url, SplitResult) else parse_address(url)


def host_of(url: URLLike) -> str:
    return _split(url).hostname or ""


def is_internal(link: URLLike, owner_host: str) -> bool:
    host = _split(link).hostname or ""
    return host == "" or host == owner_host.lower()


def is_crawlable(link: URLLike) -> bool:
    return _split(link).scheme in CRAWLABLE_SCHEMES


def remove_dot_segments(path: str) -> str:
    if "/." not in path:
        return path
    segments = path.split("/")
    out = []
    for seg in segments:
        if seg == ".":
            continue
        if seg == "..":
            if len(out) > 1:
                out.pop()
            continue
        out.append(seg)
    if segments[-1] in (".", ".."):
        out.append("")
    return "/".join(out)


def qualify(page_url: URLLike, link_url: URLLike) -> str:
    """Make an internal link absolute using the page's scheme and host.

    A root-relative link path replaces the page path, any other link path is
    appended to it with exactly one ``/`` in between, so
    ``/articles/drink-more-milk`` and ``/articles/drink-more-milk/`` both
    join ``milk-manifesto.html`` into the same address. Fragments are dropped.
    """
    page, link = _split(page_url), _split(link_url)
    if link.path.startswith("/"):
        path = link.path
    elif not link.path:
        path = page.path
    elif page.path.endswith("/"):
        path = page.path + link.path
    else:
        path = page.path + "/" + link.path
    query = link.query if (link.path or link.query) else page.query
    path = remove_dot_segments(path) or "/"
    return urlunsplit((page.scheme, page.netloc, path, query, ""))


def absolute_external(page_url: URLLike, link_url: URLLike) -> str:
    page, link = _split(page_url), _split(link_url)
    scheme = link.scheme or page.scheme
    return urlunsplit((scheme, link.netloc, link.path, link.query, ""))


def resolve(href: str, page_url: str) -> str:
    page = _split(page_url)
    link = parse_address(href, owner=page_url)
    if not is_crawlable(link):
        raise NotCrawlable(link.scheme, owner=page_url)
    if is_internal(link, page.hostname or ""):
        return qualify(page, link)
    return absolute_external(page, link)


def normalize_seed(address: str) -> str:
    address = address.strip()
    if not address.lower().startswith(("http://", "https://")):
        address = "http://" + address
    parts = parse_address(address)
    if not parts.hostname:
        raise MalformedURL(address, "missing host")
    return address
