import httpx
import structlog

from ai_compare.config import settings
from ai_compare.providers.base import UNEXPECTED_RESPONSE, ProviderResult, first, json_or_empty

logger = structlog.get_logger()


async def fetch_gemini(http: httpx.AsyncClient, query: str, api_key: str) -> ProviderResult:
    """Ask Gemini ``generateContent``; the API key travels as a query param."""
    url = f"{settings.GEMINI_BASE_URL}/models/{settings.GEMINI_MODEL}:generateContent"
    body = {"contents": [{"parts": [{"text": query}]}]}

    try:
        resp = await http.post(
            url,
            params={"key": api_key},
            json=body,
            headers={"Content-Type": "application/json"},
        )
    except httpx.HTTPError as e:
        logger.error("provider.gemini.connection_failed", error=str(e))
        return ProviderResult.fail("Error de conexión con Gemini")

    if not resp.is_success:
        error = json_or_empty(resp).get("error")
        message = error.get("message") if isinstance(error, dict) else None
        logger.warning("provider.gemini.http_error", status=resp.status_code)
        return ProviderResult.http_error(resp.status_code, message)

    data = json_or_empty(resp)
    candidate = first(data.get("candidates"))
    content = candidate.get("content")
    part = first(content.get("parts") if isinstance(content, dict) else None)
    text = part.get("text")
    if isinstance(text, str):
        return ProviderResult.ok(text)

    feedback = data.get("promptFeedback")
    block_reason = feedback.get("blockReason") if isinstance(feedback, dict) else None
    if block_reason:
        logger.warning("provider.gemini.blocked", reason=block_reason)
        return ProviderResult.fail(f"Solicitud bloqueada: {block_reason}")

    logger.warning("provider.gemini.unexpected_response", keys=list(data))
    return ProviderResult.fail(UNEXPECTED_RESPONSE)
