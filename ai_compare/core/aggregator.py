"""
Fan-out over the provider adapters.

All adapters start together and the result is assembled only after every one
has settled. Ordering follows the ``adapters`` mapping, not completion time.
"""

import asyncio
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field

import structlog

from ai_compare.providers.base import ProviderResult

logger = structlog.get_logger()

Adapter = Callable[[str], Awaitable[ProviderResult]]


@dataclass(frozen=True)
class NotificationOutcome:
    sent: bool
    message: str

    def to_dict(self) -> dict:
        return {"sent": self.sent, "message": self.message}


@dataclass
class QueryResult:
    responses: dict[str, ProviderResult] = field(default_factory=dict)
    notification: NotificationOutcome | None = None

    def to_dict(self) -> dict:
        data = {name: r.to_dict() for name, r in self.responses.items()}
        if self.notification is not None:
            data["notification"] = self.notification.to_dict()
        return data

    @property
    def succeeded(self) -> int:
        return sum(1 for r in self.responses.values() if r.success)


async def aggregate(query: str, adapters: Mapping[str, Adapter]) -> QueryResult:
    names = list(adapters)
    results = await asyncio.gather(*(adapters[name](query) for name in names))

    result = QueryResult(responses=dict(zip(names, results)))
    logger.info("aggregate.done", providers=len(names), succeeded=result.succeeded)
    return result
