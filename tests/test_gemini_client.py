import asyncio
from types import SimpleNamespace

import pytest

from scholarguard.utils import gemini_client
from scholarguard.utils.gemini_client import GeminiBackend, grounded_config

from fakes import FakeAPIError


class FakeModels:
    def __init__(self, outcome):
        self.outcome = outcome
        self.requests = []

    async def generate_content(self, model, contents, config):
        self.requests.append((model, contents, config))
        if isinstance(self.outcome, BaseException):
            raise self.outcome
        return SimpleNamespace(text=self.outcome)


class FakeAsyncClient:
    def __init__(self, outcome):
        self.models = FakeModels(outcome)
        self.closed = False

    async def aclose(self):
        self.closed = True


class FakeGenaiClient:
    """Stands in for genai.Client: one sync and one async transport."""

    outcome = ""
    instances = []

    def __init__(self, api_key):
        self.api_key = api_key
        self.aio = FakeAsyncClient(self.outcome)
        self.closed = False
        FakeGenaiClient.instances.append(self)

    def close(self):
        self.closed = True


@pytest.fixture
def fake_client(monkeypatch):
    FakeGenaiClient.instances = []
    monkeypatch.setattr(gemini_client.genai, "Client", FakeGenaiClient)
    return FakeGenaiClient


def test_success_closes_both_transports(fake_client):
    fake_client.outcome = '{"score": 1}'
    backend = GeminiBackend(api_key="key", model="gemini-test")

    text = asyncio.run(backend.generate("prompt", grounded_config(0.1)))

    assert text == '{"score": 1}'
    [client] = fake_client.instances
    assert client.api_key == "key"
    assert client.aio.models.requests[0][:2] == ("gemini-test", "prompt")
    assert client.aio.closed and client.closed


def test_upstream_error_still_closes_both_transports(fake_client):
    fake_client.outcome = FakeAPIError(503, "UNAVAILABLE")
    backend = GeminiBackend(api_key="key", model="gemini-test")

    with pytest.raises(FakeAPIError):
        asyncio.run(backend.generate("prompt", grounded_config(0.1)))

    [client] = fake_client.instances
    assert client.aio.closed and client.closed


def test_each_call_opens_a_fresh_client(fake_client):
    fake_client.outcome = "{}"
    backend = GeminiBackend(api_key="key", model="gemini-test")

    asyncio.run(backend.generate("one", grounded_config(0.1)))
    asyncio.run(backend.generate("two", grounded_config(0.1)))

    assert len(fake_client.instances) == 2
    assert all(c.closed and c.aio.closed for c in fake_client.instances)


def test_empty_response_text_becomes_empty_string(fake_client):
    fake_client.outcome = None
    backend = GeminiBackend(api_key="key", model="gemini-test")

    assert asyncio.run(backend.generate("prompt", grounded_config(0.1))) == ""
