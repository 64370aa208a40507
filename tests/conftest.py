from collections.abc import Callable
from typing import Any

import httpx
import pytest
from dotenv import load_dotenv

from anychat.types import ChatMessage


load_dotenv()


@pytest.fixture()
def user_message():
    """Create a single user message"""
    return [ChatMessage(role="user", content="Hello, world!")]


@pytest.fixture()
def conversation():
    """Create a conversation with a system prompt and several turns"""
    return [
        ChatMessage(role="system", content="You are a helpful assistant"),
        ChatMessage(role="user", content="What is the capital of France?"),
        ChatMessage(role="assistant", content="The capital of France is Paris."),
        ChatMessage(role="user", content="And what about Germany?"),
    ]


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: list[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(record)


@pytest.fixture()
def http_responder():
    """Build a recording httpx transport that answers with a fixed response."""

    def build(
        status_code: int = 200, json: Any = None
    ) -> RecordingTransport:
        return RecordingTransport(
            lambda request: httpx.Response(status_code, json=json)
        )

    return build


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addoption(
        "--run-api-tests",
        action="store_true",
        default=False,
        help="Run tests that require API keys",
    )


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "requires_api_keys: mark test as requiring API keys",
    )


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    for item in items:
        if item.get_closest_marker("requires_api_keys") and not config.getoption(
            "--run-api-tests"
        ):
            item.add_marker(
                pytest.mark.skip(
                    reason="Not running tests that require API keys. Use --run-api-tests to run these tests."
                )
            )
