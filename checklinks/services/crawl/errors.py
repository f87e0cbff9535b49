from typing import Optional

import httpx


class LinkError(Exception):
    """Base class for failures scoped to a single link."""


class MalformedURL(LinkError):
    def __init__(self, address: str, reason: str, owner: Optional[str] = None):
        self.address = address
        self.reason = reason
        self.owner = owner
        msg = f"malformed address {address!r}: {reason}"
        if owner:
            msg += f' (on "{owner}")'
        super().__init__(msg)


class NotCrawlable(LinkError):
    def __init__(self, scheme: str, owner: Optional[str] = None):
        self.scheme = scheme
        self.owner = owner
        msg = f"not crawlable: scheme {scheme!r}"
        if owner:
            msg += f' (on "{owner}")'
        super().__init__(msg)


class TransportError(LinkError):
    def __init__(self, method: str, url: str, cause: Exception):
        self.method = method
        self.url = url
        self.cause = cause
        detail = str(cause) or type(cause).__name__
        super().__init__(f"{method} {detail}")


class HTTPStatusError(LinkError):
    def __init__(self, method: str, status_code: int):
        self.method = method
        self.status_code = status_code
        self.reason = httpx.codes.get_reason_phrase(status_code)
        super().__init__(f"{method} {status_code} {self.reason}".rstrip())


class ParseError(LinkError):
    def __init__(self, url: str, cause: Exception):
        self.url = url
        self.cause = cause
        super().__init__(f"parse document at {url}: {cause}")
