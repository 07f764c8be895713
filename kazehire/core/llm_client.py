"""Model gateway: send a compiled prompt to generative-text providers.

Providers are tried strictly in the order given. Each failed attempt is
classified, and the classification decides what happens next:

    AuthError            -> stop immediately, no fallback
    RateLimited          -> next provider, no waiting here
    ProviderServerError  -> next provider
    UnknownError         -> next provider, logged at ERROR

If every provider fails, AllProvidersFailed carries one ProviderResponse per
attempt for diagnostics.

All provider calls go through litellm's acompletion, which already returns
the OpenAI chat-completion shape for every backend. The gateway reduces that
envelope to plain text; nothing provider-specific leaves this module.

The gateway holds no global client. Providers are passed in at construction
(or per call), so tests can hand it fake providers and concurrent requests
never share state.

Usage:
    gateway = ModelGateway([
        ProviderConfig("openrouter", "openrouter/google/gemini-2.0-flash-exp:free", api_key=...),
        ProviderConfig("gemini", "gemini/gemini-2.0-flash-001", api_key=...),
    ])
    raw_text = await gateway.invoke(compiled_prompt)
"""

import asyncio
import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

import litellm
from litellm import acompletion

from kazehire.core.config import LLMConfig
from kazehire.core.errors import (
    AllProvidersFailed,
    AuthError,
    ProviderError,
    ProviderServerError,
    RateLimited,
    UnknownError,
)
from kazehire.pydantic_models.task_models import CompiledPrompt

logger = logging.getLogger(__name__)

# Suppress LiteLLM debug noise (done once at module load)
logging.getLogger("litellm").setLevel(logging.ERROR)
logging.getLogger("LiteLLM").setLevel(logging.ERROR)
logging.getLogger("httpx").setLevel(logging.ERROR)


@dataclass(frozen=True)
class ProviderConfig:
    """Connection settings for one provider.

    Attributes:
        provider_id: Short name used in logs and diagnostics ("openrouter").
        model: litellm model identifier ("openrouter/google/gemini-2.0-flash-exp:free").
        api_key: Provider API key.
        api_base: Endpoint override; None uses the provider default.
        timeout: Seconds before an attempt counts as a server error.
        extra_headers: Additional HTTP headers sent with each request.
    """

    provider_id: str
    model: str
    api_key: str = field(default="", repr=False)
    api_base: str | None = None
    timeout: float = LLMConfig.TIMEOUT_SECONDS
    extra_headers: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class ProviderResponse:
    """Outcome of one provider attempt.

    Attributes:
        provider_id: Which provider was tried.
        raw_text: Completion text; empty on failure.
        latency: Wall-clock seconds spent on the attempt.
        error: Classified failure, or None on success.
    """

    provider_id: str
    raw_text: str
    latency: float
    error: ProviderError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class GatewayResult:
    """Successful text plus every attempt made to get it."""

    response: ProviderResponse
    attempts: list[ProviderResponse]

    @property
    def text(self) -> str:
        return self.response.raw_text


_AUTH_ERRORS = (litellm.AuthenticationError, litellm.PermissionDeniedError)
_SERVER_ERRORS = (
    litellm.InternalServerError,
    litellm.ServiceUnavailableError,
    litellm.APIConnectionError,
    litellm.Timeout,
    asyncio.TimeoutError,
)


def classify_provider_error(exc: BaseException, provider_id: str) -> ProviderError:
    """Map an exception raised during a provider call to the gateway taxonomy.

    litellm exception types are checked first; anything else is classified
    by its HTTP status code when it has one.
    """
    if isinstance(exc, ProviderError):
        return exc

    message = str(exc) or type(exc).__name__
    if isinstance(exc, _AUTH_ERRORS):
        return AuthError(provider_id, message)
    if isinstance(exc, litellm.RateLimitError):
        return RateLimited(provider_id, message)
    if isinstance(exc, _SERVER_ERRORS):
        return ProviderServerError(provider_id, message)

    status = getattr(exc, "status_code", None)
    if isinstance(status, int):
        if status in (401, 403):
            return AuthError(provider_id, message)
        if status == 429:
            return RateLimited(provider_id, message)
        if status >= 500:
            return ProviderServerError(provider_id, message)

    return UnknownError(provider_id, f"{type(exc).__name__}: {message}")


def _completion_text(response: Any, provider_id: str) -> str:
    """Reduce a chat-completion envelope to its text content."""
    try:
        content = response.choices[0].message.content
    except (AttributeError, IndexError, TypeError) as e:
        raise ProviderServerError(provider_id, "malformed completion envelope") from e

    # Some backends return content as a list of typed parts
    if isinstance(content, list):
        content = "".join(
            part.get("text", "") if isinstance(part, dict) else str(part)
            for part in content
        )

    if not content or not str(content).strip():
        raise ProviderServerError(provider_id, "empty completion")
    return str(content)


class ModelGateway:
    """Ordered, classified fallback across generative-text providers."""

    def __init__(
        self,
        providers: Sequence[ProviderConfig],
        temperature: float = LLMConfig.TEMPERATURE,
        max_tokens: int = LLMConfig.MAX_TOKENS,
    ) -> None:
        """Initialize the gateway.

        Args:
            providers: Providers in preference order.
            temperature: Sampling temperature for every call.
            max_tokens: Completion token budget for every call.
        """
        self.providers = tuple(providers)
        self.temperature = temperature
        self.max_tokens = max_tokens

    async def invoke(
        self,
        prompt: CompiledPrompt | str,
        providers: Sequence[ProviderConfig] | None = None,
    ) -> str:
        """Get completion text for a prompt from the first provider that answers.

        Raises:
            AuthError: A provider rejected its credentials.
            AllProvidersFailed: No provider produced text.
        """
        result = await self.complete(prompt, providers)
        return result.text

    async def complete(
        self,
        prompt: CompiledPrompt | str,
        providers: Sequence[ProviderConfig] | None = None,
    ) -> GatewayResult:
        """Like invoke(), but also returns every attempt made."""
        text = prompt.text if isinstance(prompt, CompiledPrompt) else prompt
        ordered = tuple(providers) if providers is not None else self.providers
        attempts: list[ProviderResponse] = []

        for provider in ordered:
            response = await self._attempt(provider, text)
            attempts.append(response)

            if response.ok:
                logger.info(
                    "Provider %s answered in %.2fs (attempt %d)",
                    provider.provider_id, response.latency, len(attempts),
                )
                return GatewayResult(response=response, attempts=attempts)

            error = response.error
            if error.fatal:
                logger.error("Provider %s rejected credentials, not falling back", provider.provider_id)
                error.attempts = attempts
                raise error

            if isinstance(error, UnknownError):
                logger.error("Unclassified failure from %s: %s", provider.provider_id, error)
            else:
                logger.warning(
                    "Provider %s failed (%s), trying next", provider.provider_id, type(error).__name__
                )

        raise AllProvidersFailed(attempts)

    async def _attempt(self, provider: ProviderConfig, text: str) -> ProviderResponse:
        """Make one call to one provider and classify the outcome."""
        kwargs: dict[str, Any] = {
            "model": provider.model,
            "messages": [{"role": "user", "content": text}],
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
            "timeout": provider.timeout,
        }
        if provider.api_key:
            kwargs["api_key"] = provider.api_key
        if provider.api_base:
            kwargs["api_base"] = provider.api_base
        if provider.extra_headers:
            kwargs["extra_headers"] = dict(provider.extra_headers)

        start = time.perf_counter()
        try:
            response = await asyncio.wait_for(acompletion(**kwargs), timeout=provider.timeout)
            raw_text = _completion_text(response, provider.provider_id)
        except Exception as e:
            return ProviderResponse(
                provider_id=provider.provider_id,
                raw_text="",
                latency=time.perf_counter() - start,
                error=classify_provider_error(e, provider.provider_id),
            )

        logger.debug("Raw completion from %s: %.200s", provider.provider_id, raw_text)
        return ProviderResponse(
            provider_id=provider.provider_id,
            raw_text=raw_text,
            latency=time.perf_counter() - start,
        )
