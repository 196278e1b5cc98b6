import json
import logging

import pytest

from ai_dispatch.config import load_provider_config, resolve_request, validate_request
from ai_dispatch.llm.types import (
    DispatchRequest,
    InvalidParameterError,
    MissingCredentialError,
    MissingEndpointError,
)


def _write_json(tmp_path, data, name="providers.json"):
    path = tmp_path / name
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


def test_config_file_supplies_key_and_model(tmp_path):
    config_file = _write_json(tmp_path, {"OpenAI": {"ApiKey": "X", "Model": "m1"}})
    request = DispatchRequest(provider="OpenAI", prompt="hi", config_file=config_file)

    resolved = resolve_request(request, env={})

    assert resolved.api_key == "X"
    assert resolved.model == "m1"
    assert resolved.endpoint == "https://api.openai.com/v1/chat/completions"


def test_explicit_parameters_beat_config_file(tmp_path):
    config_file = _write_json(
        tmp_path, {"OpenAI": {"ApiKey": "X", "Model": "m1", "Endpoint": "https://cfg.example.com"}}
    )
    request = DispatchRequest(
        provider="OpenAI",
        prompt="hi",
        api_key="explicit",
        model="m2",
        endpoint="https://explicit.example.com",
        config_file=config_file,
    )

    resolved = resolve_request(request, env={"OPENAI_API_KEY": "from-env"})

    assert resolved.api_key == "explicit"
    assert resolved.model == "m2"
    assert resolved.endpoint == "https://explicit.example.com"


def test_config_key_beats_environment(tmp_path):
    config_file = _write_json(tmp_path, {"Cohere": {"ApiKey": "cfg-key"}})
    request = DispatchRequest(provider="Cohere", prompt="hi", config_file=config_file)

    resolved = resolve_request(request, env={"COHERE_API_KEY": "env-key"})

    assert resolved.api_key == "cfg-key"


def test_environment_used_when_no_key_elsewhere():
    request = DispatchRequest(provider="Anthropic", prompt="hi")

    resolved = resolve_request(request, env={"ANTHROPIC_API_KEY": "env-key"})

    assert resolved.api_key == "env-key"
    assert resolved.model == "claude-3-sonnet-20240229"
    assert resolved.timeout_seconds == 30


def test_other_providers_env_var_is_not_used():
    request = DispatchRequest(provider="Google", prompt="hi")

    with pytest.raises(MissingCredentialError) as exc_info:
        resolve_request(request, env={"OPENAI_API_KEY": "wrong-provider"})

    assert exc_info.value.provider == "Google"
    assert exc_info.value.env_var == "GOOGLE_AI_API_KEY"


def test_blank_values_count_as_missing():
    request = DispatchRequest(provider="HuggingFace", prompt="hi", api_key="  ")

    with pytest.raises(MissingCredentialError):
        resolve_request(request, env={"HUGGINGFACE_API_KEY": ""})


def test_azure_requires_endpoint():
    request = DispatchRequest(provider="Azure", prompt="hi", api_key="k")

    with pytest.raises(MissingEndpointError):
        resolve_request(request, env={})


def test_azure_endpoint_from_config_file(tmp_path):
    config_file = _write_json(tmp_path, {"azure": {"Endpoint": "https://res.openai.azure.com/x"}})
    request = DispatchRequest(provider="Azure", prompt="hi", config_file=config_file)

    resolved = resolve_request(request, env={"AZURE_OPENAI_API_KEY": "k"})

    assert resolved.endpoint == "https://res.openai.azure.com/x"
    assert resolved.model == "gpt-35-turbo"


def test_yaml_config_file(tmp_path):
    path = tmp_path / "providers.yaml"
    path.write_text("Google:\n  ApiKey: yaml-key\n  Model: gemini-1.5-flash\n", encoding="utf-8")

    resolved = resolve_request(DispatchRequest(provider="google", prompt="hi", config_file=str(path)), env={})

    assert resolved.provider == "Google"
    assert resolved.api_key == "yaml-key"
    assert resolved.model == "gemini-1.5-flash"


def test_missing_config_file_yields_no_override(tmp_path):
    assert load_provider_config(str(tmp_path / "absent.json")) == {}
    assert load_provider_config(None) == {}


def test_malformed_config_file_is_skipped_with_warning(tmp_path, caplog):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    with caplog.at_level(logging.WARNING, logger="ai_dispatch.config"):
        assert load_provider_config(str(path)) == {}

    assert "Ignoring config file" in caplog.text


def test_non_object_config_file_is_skipped(tmp_path, caplog):
    path = _write_json(tmp_path, ["OpenAI"])

    with caplog.at_level(logging.WARNING, logger="ai_dispatch.config"):
        assert load_provider_config(path) == {}

    assert "not an object" in caplog.text


@pytest.mark.parametrize("temperature", [-0.1, 2.01, 5])
def test_temperature_out_of_range_rejected(temperature):
    with pytest.raises(InvalidParameterError):
        validate_request(DispatchRequest(provider="OpenAI", prompt="hi", temperature=temperature))


@pytest.mark.parametrize("temperature", [0.0, 0.7, 2.0])
def test_temperature_bounds_accepted(temperature):
    assert validate_request(DispatchRequest(provider="openai", prompt="hi", temperature=temperature)) == "OpenAI"


def test_unknown_provider_rejected_before_config_is_read(tmp_path, monkeypatch):
    def explode(path):
        raise AssertionError("config file must not be read")

    monkeypatch.setattr("ai_dispatch.config.load_provider_config", explode)

    with pytest.raises(InvalidParameterError):
        resolve_request(DispatchRequest(provider="Mistral", prompt="hi", config_file="x.json"), env={})


@pytest.mark.parametrize("max_tokens", [0, -5, True, 1.5])
def test_invalid_max_tokens_rejected(max_tokens):
    with pytest.raises(InvalidParameterError):
        validate_request(DispatchRequest(provider="OpenAI", prompt="hi", max_tokens=max_tokens))


def test_empty_prompt_rejected():
    with pytest.raises(InvalidParameterError):
        validate_request(DispatchRequest(provider="OpenAI", prompt="   "))


def test_blank_system_prompt_is_dropped():
    request = DispatchRequest(provider="OpenAI", prompt="hi", api_key="k", system_prompt=" \n ")

    assert resolve_request(request, env={}).system_prompt is None


def test_non_string_provider_rejected():
    with pytest.raises(InvalidParameterError):
        validate_request(DispatchRequest(provider=None, prompt="hi"))
