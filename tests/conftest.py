import json
from unittest import mock

import pytest

from gptchat.llm.client import CompletionError
from gptchat.llm.messages import Message, Transcript


class StubClient:
    """Completion client double recording every transcript it receives."""

    def __init__(self, replies=None, error=None):
        self.replies = list(replies or [])
        self.error = error
        self.calls = []

    def complete(self, transcript):
        self.calls.append(list(transcript))
        if self.error is not None:
            raise self.error
        if self.replies:
            return self.replies.pop(0)
        return Message(role="assistant", content=f"reply {len(self.calls)}")


@pytest.fixture
def transcript():
    return Transcript()


@pytest.fixture
def stub_client():
    return StubClient()


@pytest.fixture
def failing_client():
    return StubClient(error=CompletionError("boom"))


def make_response(body, status_code=200):
    response = mock.Mock()
    response.status_code = status_code
    response.text = body if isinstance(body, str) else json.dumps(body)
    return response


@pytest.fixture
def fake_session():
    session = mock.Mock()
    session.post.return_value = make_response(
        {"choices": [{"message": {"role": "assistant", "content": "Hi there"}}]}
    )
    return session


@pytest.fixture
def response_factory():
    return make_response
