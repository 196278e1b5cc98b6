import io
import json

import pytest

from ai_dispatch.cli import EXIT_FAILED, EXIT_OK, EXIT_USAGE, main

from conftest import DummyResponse


@pytest.fixture(autouse=True)
def _no_dotenv(monkeypatch):
    monkeypatch.setattr("ai_dispatch.cli.load_dotenv", lambda: False)


def test_raw_output(fake_post, capsys):
    fake_post.response = DummyResponse(payload={"generations": [{"text": " done "}]})

    code = main(["--provider", "cohere", "--prompt", "hi", "--api-key", "k", "--raw"])

    assert code == EXIT_OK
    assert capsys.readouterr().out == "done\n"


def test_json_output_uses_env_key(fake_post, capsys, monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "env-k")
    fake_post.response = DummyResponse(payload={"choices": [{"message": {"content": "yes"}}]})

    code = main(["-p", "OpenAI", "--prompt", "ok?", "--json", "--model", "gpt-4o-mini"])

    assert code == EXIT_OK
    data = json.loads(capsys.readouterr().out)
    assert data["response"] == "yes"
    assert data["model"] == "gpt-4o-mini"
    assert fake_post.calls[0]["headers"]["Authorization"] == "Bearer env-k"


def test_missing_credential_exit_code(fake_post, capsys, monkeypatch):
    monkeypatch.delenv("COHERE_API_KEY", raising=False)

    code = main(["--provider", "Cohere", "--prompt", "hi"])

    assert code == EXIT_USAGE
    assert "missing_credential" in capsys.readouterr().err
    assert fake_post.calls == []


def test_failure_result_exit_code(fake_post, capsys):
    fake_post.response = DummyResponse(status_code=503, text="unavailable")

    code = main(["--provider", "Anthropic", "--prompt", "hi", "--api-key", "k"])

    assert code == EXIT_FAILED
    assert "[network_failure] HTTP 503: unavailable" in capsys.readouterr().out


def test_prompt_from_stdin(fake_post, capsys, monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO("piped prompt"))
    fake_post.response = DummyResponse(payload=[{"generated_text": "ok"}])

    code = main(["--provider", "HuggingFace", "--prompt", "-", "--api-key", "k", "--raw"])

    assert code == EXIT_OK
    assert fake_post.calls[0]["json"]["inputs"] == "piped prompt"


def test_list_providers(capsys):
    assert main(["--list-providers"]) == EXIT_OK
    out = capsys.readouterr().out
    assert "GOOGLE_AI_API_KEY" in out
    assert "(endpoint required)" in out


def test_raw_and_json_are_exclusive():
    with pytest.raises(SystemExit):
        main(["--provider", "OpenAI", "--prompt", "hi", "--raw", "--json"])
