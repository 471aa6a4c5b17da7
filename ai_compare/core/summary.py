"""
Render a ``QueryResult`` into one chat-sized text block.

The budget arithmetic is fixed so that summaries stay comparable with what
the channel has always received. It is a best-effort budget: label and
separator text is not fully accounted for, so output can exceed
``max_length``. Callers that need a hard ceiling enforce it themselves.
"""

from ai_compare.core.aggregator import QueryResult

DEFAULT_MAX_LENGTH = 1900
QUERY_PREVIEW = 200
HEADER_BUFFER = 100  # room for closing text
PROVIDER_MARGIN = 50  # room for per-provider labels and separators
ELLIPSIS = "..."
TRUNCATED_NOTICE = "*Respuestas truncadas para Discord.*"

PROVIDER_LABELS = {
    "gemini": "🔷 **Gemini:**",
    "cohere": "🟠 **Cohere:**",
    "mistral": "🟣 **Mistral:**",
}


def provider_label(name: str) -> str:
    return PROVIDER_LABELS.get(name, f"🔹 **{name.capitalize()}:**")


def truncate(text: str, limit: int) -> str:
    # a negative limit keeps nothing but still marks the text as cut
    if len(text) > limit:
        return text[:max(limit, 0)] + ELLIPSIS
    return text


def build_header(original_query: str) -> str:
    header = f"📝 **Pregunta:** {truncate(original_query, QUERY_PREVIEW)}\n\n"
    header += "📊 **Comparación de Respuestas:**\n\n"
    return header


def provider_budget(header: str, max_length: int = DEFAULT_MAX_LENGTH) -> int:
    """Characters each provider's text may use; negative when the header eats the budget."""
    available_space = max_length - (len(header) + HEADER_BUFFER)
    return available_space // 3 - PROVIDER_MARGIN


def format_summary(
    result: QueryResult,
    original_query: str,
    max_length: int = DEFAULT_MAX_LENGTH,
) -> str:
    summary = build_header(original_query)
    budget = provider_budget(summary, max_length)

    for name, response in result.responses.items():
        label = provider_label(name)
        if response.success:
            summary += f"{label}\n{truncate(response.text, budget)}\n\n"
        else:
            summary += f"{label} ❌ Error\n\n"

    if len(summary) > max_length - HEADER_BUFFER:
        summary += TRUNCATED_NOTICE

    return summary
