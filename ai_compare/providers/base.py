from dataclasses import dataclass

import httpx

UNKNOWN_ERROR = "Error desconocido"
UNEXPECTED_RESPONSE = "Respuesta inesperada de la API"


@dataclass(frozen=True)
class ProviderResult:
    success: bool
    text: str | None = None
    error: str | None = None

    @classmethod
    def ok(cls, text: str) -> "ProviderResult":
        return cls(success=True, text=text)

    @classmethod
    def fail(cls, error: str) -> "ProviderResult":
        return cls(success=False, error=error)

    @classmethod
    def http_error(cls, status: int, message: str | None) -> "ProviderResult":
        return cls.fail(f"Error {status}: {message or UNKNOWN_ERROR}")

    def to_dict(self) -> dict:
        if self.success:
            return {"success": True, "text": self.text}
        return {"success": False, "error": self.error}


def json_or_empty(resp: httpx.Response) -> dict:
    """Decode a JSON object body, or ``{}`` if the body is not one."""
    try:
        data = resp.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


def first(items) -> dict:
    """First element of a JSON array as a dict, or ``{}``."""
    if isinstance(items, list) and items and isinstance(items[0], dict):
        return items[0]
    return {}
