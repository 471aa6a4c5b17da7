from functools import partial

import httpx
from fastapi import Request
from pydantic import BaseModel, ValidationError

from ai_compare.config import settings
from ai_compare.core.aggregator import Adapter
from ai_compare.core.notifier import NotificationGate
from ai_compare.discord.client import discord_client
from ai_compare.errors import ConfigurationError, QueryValidationError
from ai_compare.providers import PROVIDERS


async def get_http_client(request: Request) -> httpx.AsyncClient:
    """Shared provider http client, created in the app lifespan."""
    return request.app.state.http


async def get_notification_gate() -> NotificationGate:
    sender = discord_client if settings.discord_configured else None
    return NotificationGate(sender, settings.DISCORD_CHANNEL_ID)


def build_adapters(http: httpx.AsyncClient) -> dict[str, Adapter]:
    """Bind each provider to the http client and its API key.

    Raises:
        ConfigurationError: any provider key is missing.
    """
    if settings.missing_provider_keys:
        raise ConfigurationError("Faltan claves API necesarias. Verifica tu archivo .env")

    return {
        name: partial(fetch, http, api_key=getattr(settings, key_setting))
        for name, (fetch, key_setting) in PROVIDERS.items()
    }


FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def json_or_form(model: type[BaseModel], **error_extra):
    """Dependency parsing the request body as JSON or as a urlencoded form.

    Unparseable or mistyped bodies raise ``QueryValidationError`` (400).
    """

    async def parse(request: Request) -> BaseModel:
        content_type = request.headers.get("content-type", "")
        try:
            if content_type.startswith(FORM_CONTENT_TYPE):
                data = dict(await request.form())
            else:
                data = await request.json()
            return model.model_validate(data)
        except (ValueError, ValidationError):
            raise QueryValidationError("Solicitud inválida", **error_extra)

    return parse
