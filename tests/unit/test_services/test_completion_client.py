"""
Unit tests for services.completion_client module.
"""
import asyncio
import json

import httpx
import pytest
from core.exceptions import ConfigurationError, PromptTooLongError, RemoteServiceError
from services.completion_client import OpenAICompletionClient

COMPLETION_BODY = {
    "id": "cmpl-1",
    "object": "text_completion",
    "created": 0,
    "model": "davinci-002",
    "choices": [
        {"text": "Link to the cart", "index": 0, "finish_reason": "stop", "logprobs": None}
    ],
}


def make_client(handler):
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return OpenAICompletionClient(
        model="davinci-002",
        api_key="sk-test",
        base_url="https://completions.example.com/v1",
        http_client=http_client
    )


def complete(client, prompt="prompt"):
    return asyncio.run(client.complete(prompt, max_tokens=128, temperature=0.0, stop=["\n"]))


class TestOpenAICompletionClient:
    """Tests for OpenAICompletionClient."""

    def test_missing_key(self):
        with pytest.raises(ConfigurationError):
            OpenAICompletionClient(model="davinci-002", api_key=None)

    def test_returns_first_choice(self):
        seen = {}

        def handler(request):
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=COMPLETION_BODY)

        client = make_client(handler)

        assert complete(client, "Describe") == "Link to the cart"
        assert seen["path"] == "/v1/completions"
        assert seen["body"]["model"] == "davinci-002"
        assert seen["body"]["prompt"] == "Describe"
        assert seen["body"]["stop"] == ["\n"]
        assert seen["body"]["max_tokens"] == 128

    def test_bad_request_is_prompt_too_long(self):
        body = {"error": {"message": "maximum context length", "type": "invalid_request_error"}}
        client = make_client(lambda request: httpx.Response(400, json=body))

        with pytest.raises(PromptTooLongError):
            complete(client)

    def test_server_error_not_retried(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(500, json={"error": {"message": "overloaded"}})

        client = make_client(handler)

        with pytest.raises(RemoteServiceError) as excinfo:
            complete(client)

        assert excinfo.value.status_code == 500
        assert len(calls) == 1

    def test_unauthorized(self):
        client = make_client(lambda request: httpx.Response(401, json={"error": {"message": "bad key"}}))

        with pytest.raises(RemoteServiceError) as excinfo:
            complete(client)

        assert excinfo.value.status_code == 401

    def test_connection_error(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        client = make_client(handler)

        with pytest.raises(RemoteServiceError):
            complete(client)

    def test_no_choices(self):
        body = dict(COMPLETION_BODY, choices=[])
        client = make_client(lambda request: httpx.Response(200, json=body))

        with pytest.raises(RemoteServiceError):
            complete(client)
