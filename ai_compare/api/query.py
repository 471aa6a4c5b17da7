import asyncio

import httpx
import structlog
from fastapi import APIRouter, Depends

from ai_compare.api.deps import build_adapters, get_http_client, get_notification_gate, json_or_form
from ai_compare.config import settings
from ai_compare.core.aggregator import NotificationOutcome, QueryResult, aggregate
from ai_compare.core.notifier import NotificationGate
from ai_compare.errors import QueryValidationError
from ai_compare.schemas.query import QueryRequest

router = APIRouter(prefix="/api")
logger = structlog.get_logger()

NOTIFY_PENDING = "Envío a Discord en curso"

# Notifications still running after the response went out
_pending_notifications: set[asyncio.Task] = set()


@router.post("/query")
async def query_endpoint(
    req: QueryRequest = Depends(json_or_form(QueryRequest)),
    http: httpx.AsyncClient = Depends(get_http_client),
    gate: NotificationGate = Depends(get_notification_gate),
):
    query = req.input_text or ""
    if not query.strip():
        raise QueryValidationError("Por favor, proporciona un texto válido.")

    adapters = build_adapters(http)

    log = logger.bind(query=query[:50])
    log.info("query.start")
    result = await aggregate(query, adapters)

    if gate.should_notify(query):
        log.info("query.notify")
        result.notification = await _dispatch_notification(gate, result, query)

    return result.to_dict()


async def _dispatch_notification(
    gate: NotificationGate, result: QueryResult, query: str
) -> NotificationOutcome:
    """Start the notification and wait briefly for it.

    A send that outlives ``NOTIFY_WAIT_SECONDS`` keeps running in the
    background; the response reports it as pending.
    """
    task = asyncio.create_task(gate.notify(result, query))
    _pending_notifications.add(task)
    task.add_done_callback(_pending_notifications.discard)

    done, _ = await asyncio.wait({task}, timeout=settings.NOTIFY_WAIT_SECONDS)
    if task in done:
        return task.result()

    logger.warning("query.notify_pending", wait_seconds=settings.NOTIFY_WAIT_SECONDS)
    return NotificationOutcome(sent=False, message=NOTIFY_PENDING)
