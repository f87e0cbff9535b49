import asyncio
from typing import Awaitable, Callable, List, Optional, Set

from checklinks.core.logging import get_logger
from . import classifier
from .errors import LinkError
from .gateway import FetchGateway
from .models import (
    Completed,
    CrawlSettings,
    CrawlState,
    CrawlSummary,
    Discovered,
    Link,
    Message,
    Outcome,
    Result,
)
from .tasks import process_leaf, process_node

log = get_logger(__name__)

ResultSink = Callable[[Result], None]
TaskFn = Callable[
    [Link, FetchGateway, asyncio.Semaphore, Callable[[Message], None]], Awaitable[None]
]


class Dispatcher:
    def __init__(
        self,
        gateway: FetchGateway,
        reporter: Optional[ResultSink] = None,
        parallelism: int = 64,
    ):
        self.gateway = gateway
        self.reporter = reporter
        self.tokens = asyncio.Semaphore(parallelism)
        self.visited: Set[str] = set()
        self.outstanding = 0
        self.state = CrawlState.IDLE
        self.summary = CrawlSummary()
        self.spawned: List[str] = []
        self.zero_reached = 0
        self._inbox: asyncio.Queue = asyncio.Queue()
        self._tasks: Set[asyncio.Task] = set()
        self._seed_host = ""

    def post(self, message: Message) -> None:
        self._inbox.put_nowait(message)

    async def run(self, seed: str) -> CrawlSummary:
        if self.state is not CrawlState.IDLE:
            raise RuntimeError(f"dispatcher already used (state={self.state.value})")
        seed_link = Link(classifier.qualify(seed, seed), seed)
        self._seed_host = classifier.host_of(seed)
        self.state = CrawlState.RUNNING
        self._admit(seed_link)

        while self.outstanding > 0:
            message = await self._inbox.get()
            if isinstance(message, Discovered):
                self._admit(message.link)
            elif isinstance(message, Outcome):
                self._forward(message.result)
            elif isinstance(message, Completed):
                self.outstanding -= 1
                if self.outstanding == 0:
                    self.zero_reached += 1

        self.state = CrawlState.DRAINING
        log.debug("crawl of %s drained, %d links admitted", seed_link.address, len(self.visited))
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)
        # tasks post Completed last, so nothing can be queued behind it
        while not self._inbox.empty():
            message = self._inbox.get_nowait()
            if isinstance(message, Outcome):
                self._forward(message.result)
        self.state = CrawlState.TERMINATED
        self.summary.spawned = len(self.spawned)
        return self.summary

    def _admit(self, link: Link) -> None:
        if link.address in self.visited:
            log.debug("drop duplicate %s (from %s)", link.address, link.owner)
            return
        self.visited.add(link.address)
        self.outstanding += 1
        self.spawned.append(link.address)
        if classifier.is_internal(link.address, self._seed_host):
            fn: TaskFn = process_node
        else:
            fn = process_leaf
        log.debug("admit %s as %s", link.address, fn.__name__)
        task = asyncio.create_task(self._guard(fn, link))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _guard(self, fn: TaskFn, link: Link) -> None:
        try:
            await fn(link, self.gateway, self.tokens, self.post)
        except Exception as e:
            log.exception("task for %s crashed", link.address)
            self.post(Outcome(Result(link, LinkError(f"internal error: {e!r}"))))
        finally:
            self.post(Completed(link))

    def _forward(self, result: Result) -> None:
        self.summary.add(result)
        if self.reporter is not None:
            self.reporter(result)


async def crawl_async(
    seed: str,
    settings: Optional[CrawlSettings] = None,
    reporter: Optional[ResultSink] = None,
    gateway: Optional[FetchGateway] = None,
) -> CrawlSummary:
    settings = settings or CrawlSettings()
    if gateway is not None:
        return await Dispatcher(gateway, reporter, settings.parallelism).run(seed)
    async with FetchGateway.from_settings(settings) as gw:
        return await Dispatcher(gw, reporter, settings.parallelism).run(seed)


def crawl(
    seed: str,
    settings: Optional[CrawlSettings] = None,
    reporter: Optional[ResultSink] = None,
) -> List[Result]:
    results: List[Result] = []

    def collect(result: Result) -> None:
        results.append(result)
        if reporter is not None:
            reporter(result)

    asyncio.run(crawl_async(classifier.normalize_seed(seed), settings, collect))
    return results
