import structlog
from fastapi import APIRouter, Depends

from ai_compare.api.deps import get_notification_gate, json_or_form
from ai_compare.core.notifier import NotificationGate
from ai_compare.errors import QueryValidationError
from ai_compare.schemas.query import DiscordRequest, DiscordResponse

router = APIRouter(prefix="/api")
logger = structlog.get_logger()


@router.post("/discord", response_model=DiscordResponse)
async def discord_endpoint(
    req: DiscordRequest = Depends(json_or_form(DiscordRequest, success=False)),
    gate: NotificationGate = Depends(get_notification_gate),
):
    """Send a raw message to the configured channel."""
    message = req.message or ""
    if not message.strip():
        raise QueryValidationError("Por favor, proporciona un mensaje válido.", success=False)

    logger.info("discord.direct_send", preview=message[:50])
    outcome = await gate.send_direct(message)
    return DiscordResponse(success=outcome.sent, message=outcome.message)
