"""Tests for the content revision loop."""

import httpx
import pytest

from core.exceptions import RevisionServiceError
from engine.analyzer import analyze_content
from engine.models import RevisionRequest
from engine.revision.engine import RevisionConfig, RevisionEngine, revise_content
from engine.revision.providers import GeminiProvider, MockProvider, ProviderConfig

ORIGINAL_HTML = "<html><body><h1>Coffee</h1><p>Coffee is a drink.</p></body></html>"

REVISED_TEXT = """Coffee
Coffee is a drink brewed from roasted beans.
What is the best grind?
A medium grind works for most home brewers.
FAQ
How long should it brew? About four minutes for a French press."""


@pytest.fixture
def request_() -> RevisionRequest:
    result = analyze_content("https://example.com/coffee", ORIGINAL_HTML)
    return RevisionRequest(original_content=ORIGINAL_HTML, analysis_result=result, url="https://example.com/coffee")


@pytest.fixture
def sleeps(monkeypatch) -> list[float]:
    """Record backoff delays instead of sleeping."""
    recorded: list[float] = []

    async def fake_sleep(delay: float) -> None:
        recorded.append(delay)

    monkeypatch.setattr("engine.revision.engine.asyncio.sleep", fake_sleep)
    return recorded


class TestRevisionConfig:
    """Tests for RevisionConfig."""

    def test_defaults(self) -> None:
        config = RevisionConfig()

        assert config.max_retries == 3
        assert config.retry_delay_seconds == 1.0
        assert config.retry_backoff_multiplier == 2.0
        assert config.max_content_chars == 15000

    def test_from_settings(self, monkeypatch) -> None:
        monkeypatch.setenv("GEMINI_API_KEY", "secret")
        monkeypatch.setenv("REVISION_MAX_RETRIES", "5")

        config = RevisionConfig.from_settings()

        assert config.api_key == "secret"
        assert config.max_retries == 5
        assert config.get_provider_config().api_key == "secret"

    def test_default_provider(self) -> None:
        engine = RevisionEngine(config=RevisionConfig(api_key="k"))

        assert isinstance(engine.provider, GeminiProvider)


class TestReviseContent:
    """Tests for revise_content."""

    @pytest.mark.asyncio
    async def test_success(self, request_, sleeps) -> None:
        provider = MockProvider(response=REVISED_TEXT)
        result = await revise_content(request_, provider=provider, config=RevisionConfig())

        assert result.revised_content == REVISED_TEXT
        assert len(provider.calls) == 1
        assert "plain text only" in provider.calls[0].lower()
        assert sleeps == []
        assert result.predicted_scores.aeo > request_.analysis_result.aeo_score
        assert "[AEO] FAQ section" in result.improvements

    @pytest.mark.asyncio
    async def test_markup_is_stripped(self, request_, sleeps) -> None:
        provider = MockProvider(response="<h1>Coffee</h1><p>A **strong** drink.</p>")
        result = await revise_content(request_, provider=provider, config=RevisionConfig())

        assert result.revised_content == "Coffee\nA strong drink."

    @pytest.mark.asyncio
    async def test_retries_with_backoff(self, request_, sleeps) -> None:
        provider = MockProvider(response=REVISED_TEXT)
        provider.set_failure_mode(True, fail_count=2)

        result = await revise_content(request_, provider=provider, config=RevisionConfig())

        assert result.revised_content == REVISED_TEXT
        assert len(provider.calls) == 3
        assert sleeps == [1.0, 2.0]

    @pytest.mark.asyncio
    async def test_retries_exhausted(self, request_, sleeps) -> None:
        provider = MockProvider(response=REVISED_TEXT)
        provider.set_failure_mode(True, fail_count=10)

        with pytest.raises(RevisionServiceError) as exc_info:
            await revise_content(request_, provider=provider, config=RevisionConfig())

        assert exc_info.value.attempts == 3
        assert exc_info.value.retryable is True
        assert len(provider.calls) == 3
        assert sleeps == [1.0, 2.0]

    @pytest.mark.asyncio
    async def test_delay_capped(self, request_, sleeps) -> None:
        provider = MockProvider(response=REVISED_TEXT)
        provider.set_failure_mode(True, fail_count=10)
        config = RevisionConfig(max_retries=4, retry_delay_seconds=6.0, max_retry_delay_seconds=10.0)

        with pytest.raises(RevisionServiceError):
            await revise_content(request_, provider=provider, config=config)

        assert sleeps == [6.0, 10.0, 10.0]

    @pytest.mark.asyncio
    async def test_non_retryable_fails_fast(self, request_, sleeps) -> None:
        provider = MockProvider(response=REVISED_TEXT)
        provider.set_failure_mode(True, fail_count=1, retryable=False)

        with pytest.raises(RevisionServiceError) as exc_info:
            await revise_content(request_, provider=provider, config=RevisionConfig())

        assert exc_info.value.attempts == 1
        assert exc_info.value.retryable is False
        assert len(provider.calls) == 1
        assert sleeps == []

    @pytest.mark.asyncio
    async def test_empty_payload_fails_immediately(self, request_, sleeps) -> None:
        provider = MockProvider(response="   \n ")

        with pytest.raises(RevisionServiceError) as exc_info:
            await revise_content(request_, provider=provider, config=RevisionConfig())

        assert exc_info.value.code == "revision_failed"
        assert len(provider.calls) == 1
        assert sleeps == []

    @pytest.mark.asyncio
    async def test_invalid_service_body_surfaces_as_revision_error(self, request_, sleeps, monkeypatch) -> None:
        """Non-JSON bodies from the service are retried, then raised as RevisionServiceError."""
        real_client = httpx.AsyncClient
        transport = httpx.MockTransport(lambda request: httpx.Response(200, text="<html>proxy error</html>"))
        monkeypatch.setattr(httpx, "AsyncClient", lambda **kwargs: real_client(transport=transport, **kwargs))
        provider = GeminiProvider(ProviderConfig(api_key="k"))

        with pytest.raises(RevisionServiceError) as exc_info:
            await revise_content(request_, provider=provider, config=RevisionConfig())

        assert exc_info.value.attempts == 3
        assert exc_info.value.retryable is True
        assert sleeps == [1.0, 2.0]

    @pytest.mark.asyncio
    async def test_markup_only_payload(self, request_, sleeps) -> None:
        provider = MockProvider(response="<div><script>x()</script></div>")

        with pytest.raises(RevisionServiceError):
            await revise_content(request_, provider=provider, config=RevisionConfig())

    @pytest.mark.asyncio
    async def test_to_dict(self, request_, sleeps) -> None:
        result = await revise_content(request_, provider=MockProvider(response=REVISED_TEXT), config=RevisionConfig())
        payload = result.to_dict()

        assert set(payload) == {"revisedContent", "predictedScores", "improvements"}
        assert set(payload["predictedScores"]) == {"seo", "aeo", "geo", "overall"}
