"""AI market insight providers."""
from crypto_advisor.providers.insights.chat_completion_client import \
    ChatCompletionClient
from crypto_advisor.providers.insights.insight_provider import (
    FALLBACK_LABEL, PRIMARY_LABEL, SECONDARY_LABEL, InsightProvider,
    build_prompt, fallback_insight_text)

__all__ = [
    "ChatCompletionClient",
    "FALLBACK_LABEL",
    "InsightProvider",
    "PRIMARY_LABEL",
    "SECONDARY_LABEL",
    "build_prompt",
    "fallback_insight_text",
]
