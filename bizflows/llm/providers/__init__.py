# Copyright (c) Meta Platforms, Inc. and affiliates.
# Modifications copyright (c) 2025 Logan Martel.
# Adapted from https://github.com/meta-pytorch/KernelAgent (Apache-2.0).

"""LLM provider registry."""

from __future__ import annotations

import logging

from typing import Any, Dict, List, Optional, Protocol

from bizflows.exceptions import ProviderUnavailableError
from bizflows.llm.providers.anthropic_provider import AnthropicProvider
from bizflows.llm.providers.base import BaseProvider, LLMResponse
from bizflows.llm.providers.models import get_model_provider
from bizflows.llm.providers.openai_provider import OpenAIProvider


class LLMProvider(Protocol):
    def generate(
        self, prompt: str, *, system: Optional[str] = None, **kwargs
    ) -> str: ...


class EchoProvider:
    """Deterministic provider for offline runs and tests.

    Returns ``metadata["response"]`` when given, otherwise the prompt itself.
    """

    def generate(
        self, prompt: str, *, system: Optional[str] = None, **kwargs
    ) -> str:
        metadata = kwargs.get("metadata") or {}
        return metadata.get("response") or prompt


PROVIDER_ALIASES = {
    "openai": OpenAIProvider,
    "anthropic": AnthropicProvider,
}


_LOGGER = logging.getLogger(__name__)


def load_provider(config: Dict[str, Any]) -> LLMProvider:
    """Load a provider from config.

    Expected keys:
      - provider: optional explicit provider name (e.g., "openai", "echo")
      - model: optional model name mapped via models registry
      - base_url / api_key_env / timeout_s: forwarded to the provider
      - temperature / max_tokens: default generation options
    """

    provider_name = config.get("provider")
    model_name: Optional[str] = config.get("model")

    if provider_name == "echo" or (
        provider_name is None and model_name is None
    ):
        _LOGGER.warning(
            "LLM provider is set to 'echo'; flows will not receive structured "
            "output. Set `llm.provider` / `llm.model` to use a real LLM."
        )
        return EchoProvider()

    default_kwargs: Dict[str, Any] = {}
    for key in ("max_tokens", "temperature"):
        if config.get(key) is not None:
            default_kwargs[key] = config[key]

    provider_kwargs: Dict[str, Any] = {}
    if config.get("base_url"):
        provider_kwargs["base_url"] = config["base_url"]
    if config.get("api_key_env"):
        provider_kwargs["api_key_env"] = config["api_key_env"]
    if config.get("timeout_s"):
        provider_kwargs["timeout_s"] = float(config["timeout_s"])

    if provider_name and provider_name in PROVIDER_ALIASES:
        provider_cls = PROVIDER_ALIASES[provider_name]
        if provider_cls is AnthropicProvider:
            provider_kwargs.pop("base_url", None)
        provider = provider_cls(**provider_kwargs)
        if not provider.is_available():
            raise ProviderUnavailableError(
                f"Provider '{provider_name}' is not available; check the SDK "
                "install and API key."
            )
        model = model_name or provider_name
        _LOGGER.info(
            "Using LLM provider '%s' with model '%s'", provider_name, model
        )
        return ProviderAdapter(provider, model, default_kwargs=default_kwargs)

    if provider_name:
        raise ValueError(
            f"Unknown provider '{provider_name}'. "
            f"Available: {sorted(PROVIDER_ALIASES) + ['echo']}"
        )

    if model_name:
        provider = get_model_provider(model_name, **provider_kwargs)
        _LOGGER.info("Using model '%s' via registry provider", model_name)
        return ProviderAdapter(
            provider, model_name, default_kwargs=default_kwargs
        )

    raise ValueError("llm config must specify either 'provider' or 'model'")


class ProviderAdapter(LLMProvider):
    """Exposes a BaseProvider through the single-prompt ``generate`` call."""

    def __init__(
        self,
        provider: BaseProvider,
        model_name: str,
        *,
        default_kwargs: Optional[Dict[str, Any]] = None,
    ) -> None:
        self._provider = provider
        self._model_name = model_name
        self._default_kwargs = default_kwargs or {}

    @property
    def model_name(self) -> str:
        return self._model_name

    def generate(
        self, prompt: str, *, system: Optional[str] = None, **kwargs
    ) -> str:
        messages: List[Dict[str, str]] = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})
        merged_kwargs = {**self._default_kwargs, **kwargs}
        merged_kwargs.pop("metadata", None)
        response = self._provider.get_response(
            self._model_name,
            messages,
            **merged_kwargs,
        )
        return response.content or ""


__all__ = [
    "BaseProvider",
    "EchoProvider",
    "LLMProvider",
    "LLMResponse",
    "PROVIDER_ALIASES",
    "ProviderAdapter",
    "load_provider",
]
