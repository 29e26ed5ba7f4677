"""Generative providers - unified interface for content revision calls."""

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum

import httpx
import structlog

logger = structlog.get_logger(__name__)


class ProviderType(StrEnum):
    """Supported generative providers."""

    GEMINI = "gemini"
    MOCK = "mock"


@dataclass
class ProviderConfig:
    """Configuration for a generative provider."""

    api_key: str = ""
    base_url: str = ""
    model: str = "gemini-2.5-flash"
    timeout_seconds: float = 60.0

    # Sampling
    temperature: float = 0.7
    top_k: int = 40
    top_p: float = 0.95
    max_output_tokens: int = 8192


@dataclass
class ProviderError:
    """Error from a provider."""

    provider: ProviderType
    error_type: str
    message: str
    retryable: bool = True
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    def to_dict(self) -> dict:
        return {
            "provider": self.provider.value,
            "error_type": self.error_type,
            "message": self.message,
            "retryable": self.retryable,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass
class GenerationResponse:
    """Result of one generation call."""

    provider: ProviderType
    model: str
    content: str
    success: bool
    latency_ms: float = 0.0
    error: ProviderError | None = None


class GenerativeProvider(ABC):
    """Abstract base class for generative providers."""

    provider_type: ProviderType

    def __init__(self, config: ProviderConfig):
        self.config = config

    @abstractmethod
    async def generate(self, prompt: str) -> GenerationResponse:
        """Generate text for a prompt."""
        ...

    def _failure(self, error_type: str, message: str, retryable: bool, start_time: float) -> GenerationResponse:
        return GenerationResponse(
            provider=self.provider_type,
            model=self.config.model,
            content="",
            success=False,
            latency_ms=(time.perf_counter() - start_time) * 1000,
            error=ProviderError(
                provider=self.provider_type,
                error_type=error_type,
                message=message,
                retryable=retryable,
            ),
        )


class GeminiProvider(GenerativeProvider):
    """Google Gemini generateContent API."""

    provider_type = ProviderType.GEMINI

    def __init__(self, config: ProviderConfig):
        super().__init__(config)
        if not config.base_url:
            config.base_url = "https://generativelanguage.googleapis.com/v1beta"

    async def generate(self, prompt: str) -> GenerationResponse:
        """Run generation via Gemini."""
        start_time = time.perf_counter()

        payload = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": self.config.temperature,
                "topK": self.config.top_k,
                "topP": self.config.top_p,
                "maxOutputTokens": self.config.max_output_tokens,
            },
        }

        try:
            async with httpx.AsyncClient(timeout=self.config.timeout_seconds) as client:
                response = await client.post(
                    f"{self.config.base_url}/models/{self.config.model}:generateContent",
                    headers={
                        "Content-Type": "application/json",
                        "x-goog-api-key": self.config.api_key,
                    },
                    json=payload,
                )
        except httpx.TimeoutException:
            return self._failure(
                "timeout",
                f"Request timed out after {self.config.timeout_seconds}s",
                retryable=True,
                start_time=start_time,
            )
        except httpx.HTTPError as e:
            return self._failure("network", str(e), retryable=True, start_time=start_time)

        if response.status_code != 200:
            return self._failure(
                "api_error",
                f"HTTP {response.status_code}: {response.text}",
                retryable=response.status_code == 429 or response.status_code >= 500,
                start_time=start_time,
            )

        try:
            data = response.json()
        except ValueError as e:
            return self._failure(
                "invalid_response",
                f"Response body is not JSON: {e}",
                retryable=True,
                start_time=start_time,
            )
        if not isinstance(data, dict):
            return self._failure(
                "invalid_response",
                "Response JSON is not an object",
                retryable=True,
                start_time=start_time,
            )

        content = "".join(
            part.get("text", "")
            for candidate in data.get("candidates", [])[:1]
            for part in candidate.get("content", {}).get("parts", [])
        )

        return GenerationResponse(
            provider=self.provider_type,
            model=self.config.model,
            content=content,
            success=True,
            latency_ms=(time.perf_counter() - start_time) * 1000,
        )


class MockProvider(GenerativeProvider):
    """Mock provider for testing."""

    provider_type = ProviderType.MOCK

    def __init__(self, config: ProviderConfig | None = None, response: str = ""):
        super().__init__(config or ProviderConfig(model="mock"))
        self.response = response
        self.should_fail: bool = False
        self.fail_count: int = 0
        self.retryable: bool = True
        self.calls: list[str] = []

    def set_response(self, content: str) -> None:
        self.response = content

    def set_failure_mode(self, should_fail: bool, fail_count: int = 1, retryable: bool = True) -> None:
        """Configure failure behavior."""
        self.should_fail = should_fail
        self.fail_count = fail_count
        self.retryable = retryable

    async def generate(self, prompt: str) -> GenerationResponse:
        """Return the canned response."""
        self.calls.append(prompt)

        if self.should_fail and self.fail_count > 0:
            self.fail_count -= 1
            return GenerationResponse(
                provider=self.provider_type,
                model=self.config.model,
                content="",
                success=False,
                latency_ms=5.0,
                error=ProviderError(
                    provider=self.provider_type,
                    error_type="mock_failure",
                    message="Simulated failure",
                    retryable=self.retryable,
                ),
            )

        return GenerationResponse(
            provider=self.provider_type,
            model=self.config.model,
            content=self.response,
            success=True,
            latency_ms=5.0,
        )


def get_provider(provider_type: ProviderType, config: ProviderConfig | None = None) -> GenerativeProvider:
    """Get a provider instance by type."""
    if provider_type == ProviderType.MOCK:
        return MockProvider(config)

    providers: dict[ProviderType, type[GenerativeProvider]] = {
        ProviderType.GEMINI: GeminiProvider,
    }
    provider_class = providers.get(provider_type)
    if not provider_class:
        raise ValueError(f"Unknown provider type: {provider_type}")
    return provider_class(config or ProviderConfig())
