"""Content revision loop.

Builds the revision prompt, calls the generative provider with bounded
retries and exponential backoff, normalizes the response to plain text,
and estimates the revised scores.
"""

import asyncio
from dataclasses import dataclass

import structlog

from core.config import Settings, get_settings
from core.exceptions import RevisionServiceError
from core.logging import page_context
from engine.models import RevisionRequest, RevisionResult
from engine.revision.estimator import estimate_revised_scores
from engine.revision.outline import extract_structure, flatten_html, strip_markup
from engine.revision.prompt_builder import build_revision_prompt
from engine.revision.providers import (
    GenerationResponse,
    GenerativeProvider,
    ProviderConfig,
    ProviderType,
    get_provider,
)

logger = structlog.get_logger(__name__)


@dataclass
class RevisionConfig:
    """Configuration for a revision run."""

    provider: ProviderType = ProviderType.GEMINI
    api_key: str = ""
    model: str = "gemini-2.5-flash"
    base_url: str = ""
    request_timeout_seconds: float = 60.0

    # Retry settings
    max_retries: int = 3
    retry_delay_seconds: float = 1.0
    retry_backoff_multiplier: float = 2.0
    max_retry_delay_seconds: float = 10.0

    # Sampling
    temperature: float = 0.7
    top_k: int = 40
    top_p: float = 0.95
    max_output_tokens: int = 8192

    # Prompt
    max_content_chars: int = 15000

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "RevisionConfig":
        settings = settings or get_settings()
        return cls(
            api_key=settings.gemini_api_key or "",
            model=settings.revision_model,
            base_url=settings.revision_base_url,
            request_timeout_seconds=settings.revision_timeout_seconds,
            max_retries=settings.revision_max_retries,
            retry_delay_seconds=settings.revision_retry_delay_seconds,
            retry_backoff_multiplier=settings.revision_retry_backoff_multiplier,
            max_retry_delay_seconds=settings.revision_max_retry_delay_seconds,
            temperature=settings.revision_temperature,
            top_k=settings.revision_top_k,
            top_p=settings.revision_top_p,
            max_output_tokens=settings.revision_max_output_tokens,
            max_content_chars=settings.prompt_max_content_chars,
        )

    def get_provider_config(self) -> ProviderConfig:
        return ProviderConfig(
            api_key=self.api_key,
            base_url=self.base_url,
            model=self.model,
            timeout_seconds=self.request_timeout_seconds,
            temperature=self.temperature,
            top_k=self.top_k,
            top_p=self.top_p,
            max_output_tokens=self.max_output_tokens,
        )


class RevisionEngine:
    """Runs content revisions against a generative provider."""

    def __init__(
        self,
        config: RevisionConfig | None = None,
        provider: GenerativeProvider | None = None,
    ):
        self.config = config or RevisionConfig.from_settings()
        self.provider = provider or get_provider(
            self.config.provider, self.config.get_provider_config()
        )

    async def revise(self, request: RevisionRequest) -> RevisionResult:
        prompt = build_revision_prompt(request, self.config.max_content_chars)
        with page_context(request.url, provider=self.provider.provider_type.value):
            response = await self._generate_with_retry(prompt)

        revised = strip_markup(response.content)
        if not revised:
            raise RevisionServiceError(
                "The revision service returned only markup and no text.",
                service=self.provider.provider_type.value,
            )

        predicted, improvements = estimate_revised_scores(
            request.analysis_result,
            _original_text(request.original_content),
            revised,
        )

        logger.info(
            "content_revised",
            url=request.url,
            provider=self.provider.provider_type.value,
            original_overall=request.analysis_result.overall_score,
            predicted_overall=predicted.overall,
            improvements=len(improvements),
        )
        return RevisionResult(
            revised_content=revised,
            predicted_scores=predicted,
            improvements=improvements,
        )

    async def _generate_with_retry(self, prompt: str) -> GenerationResponse:
        """Call the provider, retrying retryable failures with backoff."""
        delay = self.config.retry_delay_seconds
        service = self.provider.provider_type.value
        attempts = max(1, self.config.max_retries)

        for attempt in range(1, attempts + 1):
            response = await self.provider.generate(prompt)

            if response.success:
                if not response.content.strip():
                    # Empty output fails without retry
                    raise RevisionServiceError(
                        "The revision service returned an empty response.",
                        attempts=attempt,
                        service=service,
                    )
                return response

            error = response.error
            retryable = bool(error and error.retryable)
            logger.warning(
                "revision_attempt_failed",
                attempt=attempt,
                max_attempts=attempts,
                error_type=error.error_type if error else "unknown",
                retryable=retryable,
            )

            if not retryable:
                raise RevisionServiceError(
                    f"The revision service rejected the request: {error.message if error else 'unknown error'}",
                    attempts=attempt,
                    service=service,
                )

            if attempt < attempts:
                await asyncio.sleep(min(delay, self.config.max_retry_delay_seconds))
                delay *= self.config.retry_backoff_multiplier

        raise RevisionServiceError(
            "The revision service is temporarily unavailable. Please try again later.",
            attempts=attempts,
            retryable=True,
            service=service,
        )


def _original_text(html: str) -> str:
    try:
        return extract_structure(html).text
    except Exception as e:
        logger.warning("original_text_extraction_failed", error=str(e))
        return flatten_html(html)


async def revise_content(
    request: RevisionRequest,
    provider: GenerativeProvider | None = None,
    config: RevisionConfig | None = None,
) -> RevisionResult:
    """
    Convenience function to revise content.

    Args:
        request: Original HTML, its analysis and URL
        provider: Optional provider (defaults to the configured one)
        config: Optional revision config (defaults to settings)

    Returns:
        RevisionResult with plain-text content and predicted scores

    Raises:
        RevisionServiceError: retries exhausted, non-retryable error or empty output
    """
    engine = RevisionEngine(config=config, provider=provider)
    return await engine.revise(request)
