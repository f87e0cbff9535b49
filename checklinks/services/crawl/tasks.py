import asyncio
from typing import Callable

from . import classifier
from .errors import HTTPStatusError, LinkError
from .gateway import FetchGateway
from .markup import extract_tag_attribute
from .models import Discovered, Link, Message, Outcome, Result

Post = Callable[[Message], None]


async def process_node(
    link: Link, gateway: FetchGateway, tokens: asyncio.Semaphore, post: Post
) -> None:
    try:
        async with tokens:
            document = await gateway.fetch_document(link.address)
    except LinkError as e:
        post(Outcome(Result(link, e)))
        return

    for href in extract_tag_attribute(document, "a", "href"):
        try:
            address = classifier.resolve(href, link.address)
        except LinkError as e:
            post(Outcome(Result(Link(href.strip(), link.address), e)))
            continue
        post(Discovered(Link(address, link.address)))
    post(Outcome(Result(link)))


async def process_leaf(
    link: Link, gateway: FetchGateway, tokens: asyncio.Semaphore, post: Post
) -> None:
    try:
        async with tokens:
            status, method = await gateway.check_link(link.address)
    except LinkError as e:
        post(Outcome(Result(link, e)))
        return
    if 200 <= status < 300:
        post(Outcome(Result(link)))
    else:
        post(Outcome(Result(link, HTTPStatusError(method, status))))
