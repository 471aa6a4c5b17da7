import httpx
import structlog

from ai_compare.config import settings
from ai_compare.providers.base import UNEXPECTED_RESPONSE, ProviderResult, first, json_or_empty

logger = structlog.get_logger()


async def fetch_cohere(http: httpx.AsyncClient, query: str, api_key: str) -> ProviderResult:
    body = {
        "model": settings.COHERE_MODEL,
        "prompt": query,
        "max_tokens": settings.PROVIDER_MAX_TOKENS,
        "temperature": settings.PROVIDER_TEMPERATURE,
    }

    try:
        resp = await http.post(
            f"{settings.COHERE_BASE_URL}/generate",
            json=body,
            headers={
                "Content-Type": "application/json",
                "Authorization": f"Bearer {api_key}",
            },
        )
    except httpx.HTTPError as e:
        logger.error("provider.cohere.connection_failed", error=str(e))
        return ProviderResult.fail("Error de conexión con Cohere")

    if not resp.is_success:
        message = json_or_empty(resp).get("message")
        logger.warning("provider.cohere.http_error", status=resp.status_code)
        return ProviderResult.http_error(resp.status_code, message)

    data = json_or_empty(resp)
    text = first(data.get("generations")).get("text")
    if isinstance(text, str):
        return ProviderResult.ok(text.strip())

    logger.warning("provider.cohere.unexpected_response", keys=list(data))
    return ProviderResult.fail(UNEXPECTED_RESPONSE)
