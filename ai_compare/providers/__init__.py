"""
Provider adapters. Each one turns a plain query into one HTTP call and
normalizes the outcome into a ``ProviderResult``; none of them raises.

``PROVIDERS`` fixes the display order used everywhere downstream.
"""

from ai_compare.providers.base import ProviderResult
from ai_compare.providers.cohere import fetch_cohere
from ai_compare.providers.gemini import fetch_gemini
from ai_compare.providers.mistral import fetch_mistral

PROVIDERS = {
    "gemini": (fetch_gemini, "GEMINI_API_KEY"),
    "cohere": (fetch_cohere, "COHERE_API_KEY"),
    "mistral": (fetch_mistral, "MISTRAL_API_KEY"),
}

__all__ = ["PROVIDERS", "ProviderResult", "fetch_cohere", "fetch_gemini", "fetch_mistral"]
