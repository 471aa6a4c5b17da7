import httpx
import structlog

from ai_compare.config import settings
from ai_compare.providers.base import UNEXPECTED_RESPONSE, ProviderResult, first, json_or_empty

logger = structlog.get_logger()


async def fetch_mistral(http: httpx.AsyncClient, query: str, api_key: str) -> ProviderResult:
    body = {
        "model": settings.MISTRAL_MODEL,
        "messages": [{"role": "user", "content": query}],
        "max_tokens": settings.PROVIDER_MAX_TOKENS,
        "temperature": settings.PROVIDER_TEMPERATURE,
    }

    try:
        resp = await http.post(
            f"{settings.MISTRAL_BASE_URL}/chat/completions",
            json=body,
            headers={
                "Content-Type": "application/json",
                "Authorization": f"Bearer {api_key}",
            },
        )
    except httpx.HTTPError as e:
        logger.error("provider.mistral.connection_failed", error=str(e))
        return ProviderResult.fail("Error de conexión con Mistral")

    if not resp.is_success:
        error = json_or_empty(resp).get("error")
        message = error.get("message") if isinstance(error, dict) else None
        logger.warning("provider.mistral.http_error", status=resp.status_code)
        return ProviderResult.http_error(resp.status_code, message)

    data = json_or_empty(resp)
    message = first(data.get("choices")).get("message") or {}
    text = message.get("content") if isinstance(message, dict) else None
    if isinstance(text, str):
        return ProviderResult.ok(text)

    logger.warning("provider.mistral.unexpected_response", keys=list(data))
    return ProviderResult.fail(UNEXPECTED_RESPONSE)
