"""Daily market insight: primary LLM, secondary LLM, then a local template."""
import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence

from tenacity import (AsyncRetrying, RetryCallState, retry_if_exception,
                      stop_after_attempt, wait_exponential)

from crypto_advisor.providers.core import (FailureClassifier, FallbackChain,
                                           FallbackTier, InvalidContentError)
from crypto_advisor.providers.core.error_mapper import is_transient
from crypto_advisor.providers.insights.chat_completion_client import \
    ChatCompletionClient
from crypto_advisor.schemas import AIInsight
from crypto_advisor.utils import epoch_millis, utcnow

logger = logging.getLogger(__name__)

PRIMARY_LABEL = "OpenRouter (Llama 3.2)"
SECONDARY_LABEL = "HuggingFace (Llama 3.2)"
FALLBACK_LABEL = "Fallback"
MIN_SECONDARY_CHARS = 20

PROMPT_TEMPLATE = (
    "Provide a brief (2-3 sentences) daily crypto market insight for a {investor_type} "
    "interested in {assets}. Make it actionable and relevant to today's market."
)


def build_prompt(interested_assets: Sequence[str] | None, investor_type: str | None) -> str:
    return PROMPT_TEMPLATE.format(
        investor_type=investor_type or "investor",
        assets=", ".join(interested_assets or ()) or "cryptocurrency",
    )


def fallback_insight_text(interested_assets: Sequence[str] | None, investor_type: str | None) -> str:
    """Template insight personalised with investor type and, if any, assets."""
    investor = investor_type or "investor"
    text = "Today's crypto market shows continued volatility. "
    if interested_assets:
        text += f"For {investor}s interested in {', '.join(interested_assets)}, "
    else:
        text += f"For {investor}s, "
    return text + (
        "stay informed and make decisions based on your risk tolerance and investment "
        "strategy. Monitor market trends and consider your long-term goals when making "
        "investment decisions."
    )


def make_insight(content: str, model: str) -> AIInsight:
    now = utcnow()
    return AIInsight(id=f"insight-{epoch_millis(now)}", content=content, generated_at=now, model=model)


class InsightProvider:
    """Produces exactly one AIInsight per call and never raises.

    Rate limits (429) fail fast to the next tier. Transient failures
    (transport errors, 5xx) may be retried up to `retry_attempts` times with
    exponential backoff; the default of 0 disables retries.
    """

    def __init__(
        self,
        primary: ChatCompletionClient,
        secondary: ChatCompletionClient,
        retry_attempts: int = 0,
        retry_backoff: float = 0.5,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._primary = primary
        self._secondary = secondary
        self._retry_attempts = retry_attempts
        self._retry_backoff = retry_backoff
        self._sleep = sleep
        self._classifier = FailureClassifier(api_name="LLM")

    async def get_insight(
        self,
        interested_assets: Sequence[str] | None = None,
        investor_type: str | None = None,
    ) -> AIInsight:
        prompt = build_prompt(interested_assets, investor_type)
        chain = FallbackChain(
            "ai-insight",
            [
                FallbackTier("openrouter", lambda: self._from_primary(prompt)),
                FallbackTier("huggingface", lambda: self._from_secondary(prompt)),
                FallbackTier("template", lambda: self._from_template(interested_assets, investor_type)),
            ],
            self._classifier,
        )
        return (await chain.resolve()).value

    async def _from_primary(self, prompt: str) -> AIInsight:
        content = await self._with_retry(self._primary, prompt)
        return make_insight(content, PRIMARY_LABEL)

    async def _from_secondary(self, prompt: str) -> AIInsight:
        content = await self._with_retry(self._secondary, prompt)
        if len(content) < MIN_SECONDARY_CHARS:
            raise InvalidContentError(f"{self._secondary.name} generated invalid content")
        return make_insight(content, SECONDARY_LABEL)

    async def _from_template(
        self, interested_assets: Sequence[str] | None, investor_type: str | None
    ) -> AIInsight:
        return make_insight(fallback_insight_text(interested_assets, investor_type), FALLBACK_LABEL)

    async def _with_retry(self, client: ChatCompletionClient, prompt: str) -> str:
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self._retry_attempts + 1),
            wait=wait_exponential(multiplier=self._retry_backoff, min=0),
            retry=retry_if_exception(is_transient),
            before_sleep=self._log_retry(client),
            sleep=self._sleep,
            reraise=True,
        ):
            with attempt:
                return await client.complete(prompt)

    def _log_retry(self, client: ChatCompletionClient) -> Callable[[RetryCallState], None]:
        def log(retry_state: RetryCallState) -> None:
            logger.info(
                "%s: transient failure, retry %d/%d in %.2fs",
                client.name,
                retry_state.attempt_number,
                self._retry_attempts,
                retry_state.next_action.sleep,
            )

        return log

    async def close(self) -> None:
        await self._primary.close()
        await self._secondary.close()

    async def __aenter__(self) -> "InsightProvider":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        await self.close()
