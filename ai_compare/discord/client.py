"""
Discord bot client: singleton, same lifecycle as the provider http client.

Handles:
- token check on startup (``GET /users/@me``), which marks the bot connected
- channel messages via the REST API (``POST /channels/{id}/messages``)

Gateway sessions are not needed to post messages, so none is opened.
"""

import httpx
import structlog

from ai_compare.config import settings
from ai_compare.errors import ChannelSendError

logger = structlog.get_logger()


class DiscordClient:
    def __init__(self, token: str = "", api_base: str = "", transport: httpx.AsyncBaseTransport | None = None):
        self._token = token
        self._api_base = api_base
        self._transport = transport
        self._http: httpx.AsyncClient | None = None
        self._connected = False
        self.bot_tag: str = ""

    @property
    def connected(self) -> bool:
        return self._connected

    async def initialize(self, greeting_channel_id: str = "", greeting: str = ""):
        """Create the http client and verify the bot token.

        When both ``greeting_channel_id`` and ``greeting`` are given, the
        greeting is posted once the token checks out. A failed greeting is
        logged and does not disconnect the bot.
        """
        self._token = self._token or settings.DISCORD_TOKEN
        self._api_base = self._api_base or settings.DISCORD_API_BASE
        self._http = httpx.AsyncClient(
            base_url=self._api_base,
            headers={"Authorization": f"Bot {self._token}"},
            timeout=30,
            transport=self._transport,
        )

        try:
            resp = await self._http.get("/users/@me")
        except httpx.HTTPError:
            logger.exception("discord.connect_failed")
            return

        if not resp.is_success:
            logger.error("discord.login_failed", status=resp.status_code, detail=_error_detail(resp))
            return

        try:
            user = resp.json()
        except ValueError:
            user = {}
        self.bot_tag = f"{user.get('username', '')}#{user.get('discriminator', '0')}"
        self._connected = True
        logger.info("discord.connected", bot=self.bot_tag)

        if greeting_channel_id and greeting:
            try:
                await self.send(greeting_channel_id, greeting)
            except ChannelSendError as e:
                logger.warning("discord.greeting_failed", channel_id=greeting_channel_id, error=str(e))

    async def shutdown(self):
        """Close httpx client."""
        self._connected = False
        if self._http:
            await self._http.aclose()
            self._http = None
        logger.info("discord.shutdown")

    async def send(self, channel_id: str, text: str) -> None:
        """Post a text message to a channel.

        Raises:
            ChannelSendError: bot not connected, channel unknown, or the API
                rejected the message.
        """
        if not self._connected or self._http is None:
            raise ChannelSendError("Bot de Discord no conectado")

        try:
            resp = await self._http.post(f"/channels/{channel_id}/messages", json={"content": text})
        except httpx.HTTPError as e:
            raise ChannelSendError(f"Error de conexión con Discord: {e}") from e

        if resp.status_code == 404:
            raise ChannelSendError("Canal no encontrado")
        if not resp.is_success:
            raise ChannelSendError(f"Discord {resp.status_code}: {_error_detail(resp)}")


def _error_detail(resp: httpx.Response) -> str:
    try:
        data = resp.json()
    except ValueError:
        return resp.text or "Error desconocido"
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    return "Error desconocido"


# Singleton instance
discord_client = DiscordClient()
