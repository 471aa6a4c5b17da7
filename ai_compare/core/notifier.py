"""
Notification gate: forward a query's results to the chat channel.

Triggered by a literal keyword match on the query text. Every failure mode
(no sender, disconnected bot, unknown channel, transport error) becomes a
``NotificationOutcome``; nothing here raises to the request path.
"""

from typing import Protocol

import structlog

from ai_compare.core.aggregator import NotificationOutcome, QueryResult
from ai_compare.core.summary import format_summary
from ai_compare.errors import ChannelSendError

logger = structlog.get_logger()

NOTIFY_KEYWORDS = (
    "discord",
    "enviar",
    "mandar",
    "send to discord",
    "enviar a discord",
    "mandar a discord",
)
MESSAGE_CEILING = 2000
DIRECT_CUT = 1950
DIRECT_TRUNCATED_SUFFIX = "...\n*[Mensaje truncado]*"

NOT_CONFIGURED = "Discord no configurado"
SENT_OK = "Mensaje enviado exitosamente a Discord"


class ChannelSender(Protocol):
    @property
    def connected(self) -> bool: ...

    async def send(self, channel_id: str, text: str) -> None: ...


def should_notify(query: str) -> bool:
    lower = query.lower()
    return any(keyword in lower for keyword in NOTIFY_KEYWORDS)


def fallback_message(query: str) -> str:
    return (
        f"📝 **Pregunta:** {query[:100]}...\n\n"
        "🤖 Respuestas generadas por Gemini, Cohere y Mistral.\n"
        "💻 Ver detalles completos en la interfaz web."
    )


class NotificationGate:
    def __init__(self, sender: ChannelSender | None, channel_id: str = ""):
        self.sender = sender
        self.channel_id = channel_id

    @property
    def configured(self) -> bool:
        return self.sender is not None and bool(self.channel_id)

    def should_notify(self, query: str) -> bool:
        return should_notify(query)

    async def notify(self, result: QueryResult, query: str) -> NotificationOutcome:
        """Send the formatted summary of ``result``."""
        text = format_summary(result, query)
        if len(text) > MESSAGE_CEILING:
            logger.warning("notify.summary_too_long", length=len(text))
            text = fallback_message(query)
        return await self._send(text)

    async def send_direct(self, message: str) -> NotificationOutcome:
        """Send a raw message, bypassing the summary formatter."""
        if len(message) > MESSAGE_CEILING:
            logger.warning("notify.message_too_long", length=len(message))
            message = message[:DIRECT_CUT] + DIRECT_TRUNCATED_SUFFIX
        return await self._send(message)

    async def _send(self, text: str) -> NotificationOutcome:
        if not self.configured:
            logger.info("notify.not_configured")
            return NotificationOutcome(sent=False, message=NOT_CONFIGURED)

        try:
            await self.sender.send(self.channel_id, text)
        except ChannelSendError as e:
            logger.error("notify.send_failed", error=str(e))
            return NotificationOutcome(sent=False, message=f"Error: {e}")
        except Exception as e:
            logger.exception("notify.send_crashed")
            return NotificationOutcome(sent=False, message=f"Error: {e}")

        logger.info("notify.sent", length=len(text))
        return NotificationOutcome(sent=True, message=SENT_OK)
