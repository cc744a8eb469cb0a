from __future__ import annotations

from typing import Any, Dict, List

import pytest

from bizflows.exceptions import ProviderUnavailableError
from bizflows.llm.providers import (
    PROVIDER_ALIASES,
    BaseProvider,
    EchoProvider,
    LLMResponse,
    ProviderAdapter,
    load_provider,
    models as model_mod,
)
from bizflows.llm.providers.models import ModelConfig


def test_load_provider_echo_by_default(caplog):
    with caplog.at_level("WARNING"):
        provider = load_provider({})
    assert isinstance(provider, EchoProvider)
    assert "echo" in caplog.text
    output = provider.generate("hello", metadata={"response": "world"})
    assert output == "world"


def test_load_provider_echo_explicit():
    provider = load_provider({"provider": "echo"})
    assert provider.generate("foo") == "foo"


class _StubProvider(BaseProvider):
    available = True

    def __init__(self, **kwargs: Any) -> None:
        self.init_kwargs = kwargs
        self.responses: List[Dict[str, Any]] = []
        super().__init__()

    def _initialize_client(self) -> None:
        self.client = object()

    def get_response(
        self, model_name: str, messages: List[Dict[str, str]], **kwargs: Any
    ) -> LLMResponse:
        self.responses.append(
            {"model": model_name, "messages": messages, "kwargs": kwargs}
        )
        return LLMResponse(
            content="stubbed", model=model_name, provider="stub"
        )

    def is_available(self) -> bool:
        return self.available

    @property
    def name(self) -> str:
        return "stub"


class _OfflineProvider(_StubProvider):
    available = False


def test_load_provider_passes_options(monkeypatch):
    monkeypatch.setitem(PROVIDER_ALIASES, "stub", _StubProvider)
    provider = load_provider(
        {
            "provider": "stub",
            "model": "stub-model",
            "base_url": "http://example.com",
            "api_key_env": "CUSTOM_KEY",
            "timeout_s": 5,
            "temperature": 0.0,
            "max_tokens": 256,
        }
    )
    result = provider.generate(
        "prompt", system="be terse", metadata={"template": "ignored"}
    )
    assert result == "stubbed"
    stub = provider._provider  # type: ignore[attr-defined]
    assert stub.init_kwargs == {
        "base_url": "http://example.com",
        "api_key_env": "CUSTOM_KEY",
        "timeout_s": 5.0,
    }
    call = stub.responses[0]
    assert call["model"] == "stub-model"
    assert call["messages"] == [
        {"role": "system", "content": "be terse"},
        {"role": "user", "content": "prompt"},
    ]
    assert call["kwargs"] == {"max_tokens": 256, "temperature": 0.0}


def test_load_provider_model_uses_registry(monkeypatch):
    monkeypatch.setattr(model_mod, "MODEL_NAME_TO_CONFIG", {})
    monkeypatch.setattr(model_mod, "_PROVIDER_CACHE", {})
    model_mod.register_model(
        ModelConfig(
            name="stub-model",
            provider_class=_StubProvider,
            description="stub",
        )
    )
    provider = load_provider(
        {
            "model": "stub-model",
            "base_url": "http://relay.local",
            "api_key_env": "CUSTOM_KEY",
        }
    )
    assert isinstance(provider, ProviderAdapter)
    assert provider.model_name == "stub-model"
    stub = provider._provider  # type: ignore[attr-defined]
    assert stub.init_kwargs["base_url"] == "http://relay.local"
    again = load_provider(
        {
            "model": "stub-model",
            "base_url": "http://relay.local",
            "api_key_env": "CUSTOM_KEY",
        }
    )
    assert again._provider is stub  # type: ignore[attr-defined]


def test_load_provider_unknown_names():
    with pytest.raises(ValueError):
        load_provider({"provider": "carrier-pigeon"})
    with pytest.raises(ValueError):
        load_provider({"model": "no-such-model"})


def test_unavailable_provider_is_a_configuration_error(monkeypatch):
    monkeypatch.setitem(PROVIDER_ALIASES, "offline", _OfflineProvider)
    with pytest.raises(ProviderUnavailableError):
        load_provider({"provider": "offline"})


def test_openai_provider_without_key_is_unavailable(monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    with pytest.raises(ProviderUnavailableError):
        load_provider({"provider": "openai", "model": "gpt-4o-mini"})


def test_openai_params_follow_model_family(monkeypatch):
    from bizflows.llm.providers.openai_provider import OpenAIProvider

    monkeypatch.delenv("BIZFLOWS_TEST_KEY", raising=False)
    provider = OpenAIProvider(api_key_env="BIZFLOWS_TEST_KEY")
    messages = [{"role": "user", "content": "hi"}]

    chat = provider._build_api_params(
        "gpt-4o-mini", messages, temperature=0.0, json_mode=True
    )
    assert chat["temperature"] == 0.0
    assert chat["max_tokens"] == 1024
    assert chat["response_format"] == {"type": "json_object"}

    reasoning = provider._build_api_params("o4-mini", messages, max_tokens=64)
    assert "temperature" not in reasoning
    assert reasoning["max_completion_tokens"] == 64
    assert "response_format" not in reasoning


def test_anthropic_moves_system_prompt(monkeypatch):
    from bizflows.llm.providers.anthropic_provider import AnthropicProvider

    class _Block:
        text = '{"intent": "unknown"}'

    class _Messages:
        def __init__(self) -> None:
            self.requests: List[Dict[str, Any]] = []

        def create(self, **request: Any):
            self.requests.append(request)

            class _Response:
                content = [_Block()]
                usage = None

            return _Response()

    class _Client:
        messages = _Messages()

    monkeypatch.delenv("BIZFLOWS_TEST_KEY", raising=False)
    provider = AnthropicProvider(api_key_env="BIZFLOWS_TEST_KEY")
    assert not provider.is_available()
    provider.client = _Client()

    response = provider.get_response(
        "claude-3-5-haiku-20241022",
        [
            {"role": "system", "content": "json only"},
            {"role": "user", "content": "classify"},
        ],
        json_mode=True,
    )
    assert response.content == '{"intent": "unknown"}'
    request = _Client.messages.requests[0]
    assert request["system"] == "json only"
    assert request["messages"] == [{"role": "user", "content": "classify"}]
