import pytest


class DummyResponse:
    def __init__(self, status_code=200, payload=None, text="", json_error=False):
        self.status_code = status_code
        self._payload = payload
        self.text = text
        self._json_error = json_error

    def json(self):
        if self._json_error:
            raise ValueError("No JSON object could be decoded")
        return self._payload


@pytest.fixture
def fake_post(monkeypatch):
    """Replaces requests.post; set ``.response`` or ``.error`` before dispatching."""

    class FakePost:
        def __init__(self):
            self.calls = []
            self.response = DummyResponse(payload={})
            self.error = None

        def __call__(self, url, headers, json, timeout):
            self.calls.append({"url": url, "headers": headers, "json": json, "timeout": timeout})
            if self.error is not None:
                raise self.error
            return self.response

    fake = FakePost()
    monkeypatch.setattr("ai_dispatch.llm.dispatcher.requests.post", fake)
    return fake
