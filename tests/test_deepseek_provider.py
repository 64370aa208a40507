"""
Tests for the DeepSeek adapter, using an in-memory httpx transport.
"""

import json
import logging

import httpx
import pytest

from anychat import (
    AIProvider,
    ChatMessage,
    DeepSeekProvider,
    EmbeddingOptions,
    ImageGenerationOptions,
    ProviderAPIError,
    UnsupportedCapabilityError,
)


@pytest.fixture()
async def make_provider():
    """Build DeepSeek providers over a fake transport and close them afterwards."""
    providers = []

    async def build(transport, base_url="https://api.deepseek.com/v1"):
        provider = DeepSeekProvider(
            "test-api-key",
            "deepseek-chat",
            base_url,
            http_client=httpx.AsyncClient(transport=transport),
        )
        providers.append(provider)
        return provider

    yield build

    for provider in providers:
        await provider.close()


class TestChat:
    @pytest.mark.asyncio
    async def test_chat_request_shape(
        self, make_provider, http_responder, conversation
    ):
        transport = http_responder(
            json={"choices": [{"message": {"content": "Berlin."}}]}
        )
        provider = await make_provider(transport)

        response = await provider.chat(conversation)

        assert response.content == "Berlin."
        assert response.provider == AIProvider.DEEPSEEK
        assert response.model == "deepseek-chat"

        request = transport.requests[0]
        assert request.method == "POST"
        assert str(request.url) == "https://api.deepseek.com/v1/chat/completions"
        assert request.headers["authorization"] == "Bearer test-api-key"
        assert request.headers["content-type"] == "application/json"
        assert json.loads(request.content) == {
            "model": "deepseek-chat",
            "messages": [
                {"role": m.role, "content": m.content} for m in conversation
            ],
        }

    @pytest.mark.asyncio
    async def test_custom_base_url(self, make_provider, http_responder, user_message):
        transport = http_responder(json={"choices": [{"message": {"content": "ok"}}]})
        provider = await make_provider(
            transport, base_url="https://proxy.example.com/v1/"
        )

        await provider.chat(user_message)

        assert (
            str(transport.requests[0].url)
            == "https://proxy.example.com/v1/chat/completions"
        )

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [
            {"choices": [{"message": {"content": None}}]},
            {"choices": [{"message": {}}]},
            {"choices": []},
        ],
    )
    async def test_missing_content_is_empty_string(
        self, make_provider, http_responder, user_message, payload
    ):
        provider = await make_provider(http_responder(json=payload))

        response = await provider.chat(user_message)

        assert response.content == ""

    @pytest.mark.asyncio
    async def test_http_error_includes_status_text(
        self, make_provider, http_responder, user_message, caplog
    ):
        provider = await make_provider(http_responder(status_code=500))

        with caplog.at_level(logging.ERROR, logger="anychat.providers.deepseek"):
            with pytest.raises(ProviderAPIError) as exc_info:
                await provider.chat(user_message)

        assert str(exc_info.value) == "DeepSeek API error: Internal Server Error"
        assert exc_info.value.status_code == 500
        assert "Error calling DeepSeek /chat/completions" in caplog.text

    @pytest.mark.asyncio
    async def test_chat_requires_messages(self, make_provider, http_responder):
        transport = http_responder(json={"choices": []})
        provider = await make_provider(transport)

        with pytest.raises(ValueError, match="At least one message is required"):
            await provider.chat([])

        assert transport.requests == []

    @pytest.mark.asyncio
    async def test_transport_errors_propagate(self, make_provider, user_message):
        def fail(request):
            raise httpx.ConnectError("connection refused", request=request)

        provider = await make_provider(httpx.MockTransport(fail))

        with pytest.raises(httpx.ConnectError):
            await provider.chat(user_message)


class TestEmbeddings:
    @pytest.mark.asyncio
    async def test_single_input_is_sent_as_list(self, make_provider, http_responder):
        transport = http_responder(json={"data": [{"embedding": [0.1, 0.2]}]})
        provider = await make_provider(transport)

        response = await provider.create_embeddings(EmbeddingOptions(input="a"))

        assert response.embeddings == [[0.1, 0.2]]
        assert response.model == "deepseek-embedding"
        request = transport.requests[0]
        assert str(request.url) == "https://api.deepseek.com/v1/embeddings"
        assert json.loads(request.content) == {
            "model": "deepseek-embedding",
            "input": ["a"],
        }

    @pytest.mark.asyncio
    async def test_multiple_inputs_preserve_order(self, make_provider, http_responder):
        transport = http_responder(
            json={"data": [{"embedding": [1.0]}, {"embedding": [2.0]}]}
        )
        provider = await make_provider(transport)

        response = await provider.create_embeddings(
            EmbeddingOptions(input=["a", "b"], model="custom-embedding")
        )

        assert response.embeddings == [[1.0], [2.0]]
        assert response.model == "custom-embedding"
        assert json.loads(transport.requests[0].content)["input"] == ["a", "b"]

    @pytest.mark.asyncio
    async def test_http_error(self, make_provider, http_responder):
        provider = await make_provider(http_responder(status_code=429))

        with pytest.raises(ProviderAPIError, match="^DeepSeek API error: Too Many Requests$"):
            await provider.create_embeddings(EmbeddingOptions(input="a"))


class TestUnsupported:
    @pytest.mark.asyncio
    async def test_generate_image(self, make_provider, http_responder):
        transport = http_responder(json={})
        provider = await make_provider(transport)

        with pytest.raises(
            UnsupportedCapabilityError,
            match="^Image generation is not supported by DeepSeek$",
        ):
            await provider.generate_image(ImageGenerationOptions(prompt="test"))

        assert transport.requests == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("method", "args"),
        [
            ("create_assistant", ("name",)),
            ("list_assistants", ()),
            ("delete_assistant", ("asst_1",)),
            ("create_thread", ()),
            ("get_thread", ("thread_1",)),
            ("add_message", ("thread_1", ChatMessage(role="user", content="hi"))),
            ("run_assistant", ("asst_1", "thread_1")),
            ("get_assistant_response", ("thread_1", "run_1")),
        ],
    )
    async def test_assistants_api(self, make_provider, http_responder, method, args):
        transport = http_responder(json={})
        provider = await make_provider(transport)

        with pytest.raises(
            UnsupportedCapabilityError,
            match="^Assistants API is not supported by DeepSeek$",
        ):
            await getattr(provider, method)(*args)

        assert transport.requests == []
