"""Tests for kazehire.core.llm_client module.

Tests the ModelGateway with mocked litellm calls:
- classify_provider_error(): litellm exception and status code mapping
- Ordered fallback on RateLimited / ProviderServerError / UnknownError
- AuthError stops the gateway
- AllProvidersFailed carries every attempt
- Completion envelope handling (empty, list content)
"""

import asyncio

import litellm
import pytest

from kazehire.core.errors import (
    AllProvidersFailed,
    AuthError,
    ProviderServerError,
    RateLimited,
    UnknownError,
)
from kazehire.core.llm_client import (
    ModelGateway,
    ProviderConfig,
    ProviderResponse,
    classify_provider_error,
)
from kazehire.pydantic_models import CompiledPrompt


def _rate_limit():
    return litellm.RateLimitError(message="slow down", llm_provider="openrouter", model="m")


def _auth_error():
    return litellm.AuthenticationError(message="bad key", llm_provider="openrouter", model="m")


def _server_error():
    return litellm.ServiceUnavailableError(message="overloaded", llm_provider="gemini", model="m")


class _StatusError(Exception):
    def __init__(self, status_code):
        self.status_code = status_code
        super().__init__(f"HTTP {status_code}")


# =============================================================================
# Error classification tests
# =============================================================================


class TestClassifyProviderError:
    """Tests for classify_provider_error()."""

    def test_litellm_auth(self):
        assert isinstance(classify_provider_error(_auth_error(), "p"), AuthError)

    def test_litellm_rate_limit(self):
        assert isinstance(classify_provider_error(_rate_limit(), "p"), RateLimited)

    def test_litellm_server_error(self):
        assert isinstance(classify_provider_error(_server_error(), "p"), ProviderServerError)

    def test_asyncio_timeout(self):
        assert isinstance(classify_provider_error(asyncio.TimeoutError(), "p"), ProviderServerError)

    @pytest.mark.parametrize("status,expected", [
        (401, AuthError),
        (403, AuthError),
        (429, RateLimited),
        (500, ProviderServerError),
        (503, ProviderServerError),
        (418, UnknownError),
    ])
    def test_status_codes(self, status, expected):
        assert type(classify_provider_error(_StatusError(status), "p")) is expected

    def test_unrelated_exception_is_unknown(self):
        error = classify_provider_error(KeyError("choices"), "openrouter")
        assert isinstance(error, UnknownError)
        assert error.provider_id == "openrouter"
        assert not error.fatal

    def test_provider_error_passes_through(self):
        original = RateLimited("gemini", "quota")
        assert classify_provider_error(original, "other") is original

    def test_only_auth_is_fatal(self):
        assert AuthError("p").fatal
        assert not RateLimited("p").fatal
        assert not ProviderServerError("p").fatal
        assert not UnknownError("p").fatal


# =============================================================================
# ModelGateway tests
# =============================================================================


class TestModelGateway:
    """Tests for ModelGateway.invoke() / complete()."""

    @pytest.mark.asyncio
    async def test_first_provider_answers(self, gateway, mock_acompletion, make_completion):
        mock_acompletion.return_value = make_completion('{"flags": []}')

        result = await gateway.complete("prompt text")

        assert result.text == '{"flags": []}'
        assert result.response.provider_id == "openrouter"
        assert len(result.attempts) == 1
        mock_acompletion.assert_called_once()

    @pytest.mark.asyncio
    async def test_call_arguments(self, mock_acompletion, make_completion):
        provider = ProviderConfig(
            "openrouter",
            "openrouter/test-model",
            api_key="secret",
            api_base="https://proxy.example",
            extra_headers={"X-Title": "KazeHire"},
        )
        mock_acompletion.return_value = make_completion("ok")

        await ModelGateway([provider], temperature=0.1, max_tokens=2000).invoke("Rank these")

        kwargs = mock_acompletion.call_args.kwargs
        assert kwargs["model"] == "openrouter/test-model"
        assert kwargs["messages"] == [{"role": "user", "content": "Rank these"}]
        assert kwargs["temperature"] == 0.1
        assert kwargs["max_tokens"] == 2000
        assert kwargs["api_key"] == "secret"
        assert kwargs["api_base"] == "https://proxy.example"
        assert kwargs["extra_headers"] == {"X-Title": "KazeHire"}

    @pytest.mark.asyncio
    async def test_optional_arguments_omitted(self, mock_acompletion, make_completion):
        mock_acompletion.return_value = make_completion("ok")

        await ModelGateway([ProviderConfig("gemini", "gemini/test-model")]).invoke("x")

        kwargs = mock_acompletion.call_args.kwargs
        assert "api_key" not in kwargs
        assert "api_base" not in kwargs
        assert "extra_headers" not in kwargs

    @pytest.mark.asyncio
    async def test_accepts_compiled_prompt(self, gateway, mock_acompletion, make_completion):
        mock_acompletion.return_value = make_completion("ok")
        prompt = CompiledPrompt(text="compiled text", declared_response_schema_id="detect_bias.v1")

        assert await gateway.invoke(prompt) == "ok"
        assert mock_acompletion.call_args.kwargs["messages"][0]["content"] == "compiled text"

    @pytest.mark.asyncio
    async def test_rate_limited_falls_back(self, gateway, mock_acompletion, make_completion):
        mock_acompletion.side_effect = [_rate_limit(), make_completion("from gemini")]

        result = await gateway.complete("prompt")

        assert result.text == "from gemini"
        assert result.response.provider_id == "gemini"
        assert [a.provider_id for a in result.attempts] == ["openrouter", "gemini"]
        assert isinstance(result.attempts[0].error, RateLimited)
        assert result.attempts[1].ok
        models = [c.kwargs["model"] for c in mock_acompletion.call_args_list]
        assert models == ["openrouter/test-model", "gemini/test-model"]

    @pytest.mark.asyncio
    async def test_server_error_falls_back(self, gateway, mock_acompletion, make_completion):
        mock_acompletion.side_effect = [_server_error(), make_completion("ok")]
        assert await gateway.invoke("prompt") == "ok"

    @pytest.mark.asyncio
    async def test_unknown_error_falls_back(self, gateway, mock_acompletion, make_completion):
        mock_acompletion.side_effect = [ValueError("weird"), make_completion("ok")]

        result = await gateway.complete("prompt")

        assert result.text == "ok"
        assert isinstance(result.attempts[0].error, UnknownError)

    @pytest.mark.asyncio
    async def test_auth_error_stops(self, gateway, mock_acompletion, make_completion):
        mock_acompletion.side_effect = [_auth_error(), make_completion("never used")]

        with pytest.raises(AuthError) as exc_info:
            await gateway.invoke("prompt")

        assert mock_acompletion.call_count == 1
        assert exc_info.value.provider_id == "openrouter"
        assert [a.provider_id for a in exc_info.value.attempts] == ["openrouter"]

    @pytest.mark.asyncio
    async def test_auth_error_after_fallback(self, gateway, mock_acompletion):
        mock_acompletion.side_effect = [_rate_limit(), _auth_error()]

        with pytest.raises(AuthError) as exc_info:
            await gateway.invoke("prompt")

        assert len(exc_info.value.attempts) == 2

    @pytest.mark.asyncio
    async def test_all_providers_fail(self, gateway, mock_acompletion):
        mock_acompletion.side_effect = [_rate_limit(), _server_error()]

        with pytest.raises(AllProvidersFailed) as exc_info:
            await gateway.invoke("prompt")

        attempts = exc_info.value.attempts
        assert [a.provider_id for a in attempts] == ["openrouter", "gemini"]
        assert isinstance(attempts[0].error, RateLimited)
        assert isinstance(attempts[1].error, ProviderServerError)
        assert all(a.raw_text == "" for a in attempts)

    @pytest.mark.asyncio
    async def test_no_providers(self, mock_acompletion):
        with pytest.raises(AllProvidersFailed) as exc_info:
            await ModelGateway([]).invoke("prompt")
        assert exc_info.value.attempts == []
        mock_acompletion.assert_not_called()

    @pytest.mark.asyncio
    async def test_per_call_providers_override(self, gateway, mock_acompletion, make_completion):
        mock_acompletion.return_value = make_completion("ok")
        override = [ProviderConfig("gemini", "gemini/other-model", api_key="k")]

        result = await gateway.complete("prompt", providers=override)

        assert result.response.provider_id == "gemini"
        assert mock_acompletion.call_args.kwargs["model"] == "gemini/other-model"

    @pytest.mark.asyncio
    async def test_empty_completion_falls_back(self, gateway, mock_acompletion, make_completion):
        mock_acompletion.side_effect = [make_completion("   "), make_completion("ok")]

        result = await gateway.complete("prompt")

        assert result.text == "ok"
        assert isinstance(result.attempts[0].error, ProviderServerError)

    @pytest.mark.asyncio
    async def test_none_content_is_server_error(self, gateway, mock_acompletion, make_completion):
        mock_acompletion.return_value = make_completion(None)

        with pytest.raises(AllProvidersFailed) as exc_info:
            await gateway.invoke("prompt")

        assert all(isinstance(a.error, ProviderServerError) for a in exc_info.value.attempts)

    @pytest.mark.asyncio
    async def test_list_content_is_joined(self, gateway, mock_acompletion, make_completion):
        mock_acompletion.return_value = make_completion(
            [{"type": "text", "text": '{"flags": '}, {"type": "text", "text": "[]}"}]
        )
        assert await gateway.invoke("prompt") == '{"flags": []}'

    @pytest.mark.asyncio
    async def test_timeout_falls_back(self, mock_acompletion, make_completion):
        async def slow_then_fast(**kwargs):
            if kwargs["model"] == "slow/model":
                await asyncio.sleep(1)
            return make_completion("fast")

        mock_acompletion.side_effect = slow_then_fast
        gateway = ModelGateway([
            ProviderConfig("slow", "slow/model", timeout=0.01),
            ProviderConfig("fast", "fast/model"),
        ])

        result = await gateway.complete("prompt")

        assert result.text == "fast"
        assert isinstance(result.attempts[0].error, ProviderServerError)


class TestProviderConfig:
    """Tests for ProviderConfig / ProviderResponse."""

    def test_api_key_not_in_repr(self):
        provider = ProviderConfig("openrouter", "openrouter/m", api_key="super-secret")
        assert "super-secret" not in repr(provider)

    def test_response_ok(self):
        assert ProviderResponse("p", "text", 0.1).ok
        assert not ProviderResponse("p", "", 0.1, error=RateLimited("p")).ok
