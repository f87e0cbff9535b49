from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Dict, Optional, Union

from checklinks.core import config
from .errors import LinkError, NotCrawlable

DEFAULT_PARALLELISM = 64
DEFAULT_TIMEOUT = 10.0
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:98.0) "
    "Gecko/20100101 Firefox/98.0"
)


@dataclass(frozen=True)
class Link:
    """A link address and the page it was found on (the seed owns itself)."""

    address: str
    owner: str


class ResultKind(str, enum.Enum):
    OK = "ok"
    IGNORED = "ignored"
    FAILED = "failed"


@dataclass(frozen=True)
class Result:
    link: Link
    error: Optional[LinkError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> ResultKind:
        if self.error is None:
            return ResultKind.OK
        if isinstance(self.error, NotCrawlable):
            return ResultKind.IGNORED
        return ResultKind.FAILED

    def __str__(self) -> str:
        if self.error is None:
            return f'OK "{self.link.address}"'
        return f'FAIL "{self.link.address}": {self.error}'


class CrawlState(str, enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    DRAINING = "draining"
    TERMINATED = "terminated"


@dataclass
class CrawlSettings:
    timeout: float = DEFAULT_TIMEOUT
    parallelism: int = DEFAULT_PARALLELISM
    verify: bool = True
    user_agent: str = DEFAULT_USER_AGENT

    @classmethod
    def from_env(cls, **overrides) -> "CrawlSettings":
        settings = cls(
            timeout=config.get_float("CHECKLINKS_TIMEOUT", DEFAULT_TIMEOUT),
            parallelism=config.get_int("CHECKLINKS_PARALLELISM", DEFAULT_PARALLELISM),
            verify=config.get_bool("CHECKLINKS_VERIFY_TLS", True),
            user_agent=config.get("CHECKLINKS_USER_AGENT", DEFAULT_USER_AGENT),
        )
        for key, value in overrides.items():
            if value is not None:
                setattr(settings, key, value)
        if settings.parallelism < 1:
            raise ValueError("parallelism must be at least 1")
        return settings


@dataclass
class CrawlSummary:
    counts: Dict[ResultKind, int] = field(
        default_factory=lambda: {kind: 0 for kind in ResultKind}
    )
    spawned: int = 0

    def add(self, result: Result) -> None:
        self.counts[result.kind] += 1

    @property
    def total(self) -> int:
        return sum(self.counts.values())


@dataclass(frozen=True)
class Discovered:
    link: Link


@dataclass(frozen=True)
class Outcome:
    result: Result


@dataclass(frozen=True)
class Completed:
    link: Link


Message = Union[Discovered, Outcome, Completed]
