"""Shared fixtures for the webhook test suite."""

import pytest
from django.conf import settings

from jwt_webhooks.router import reset_router
from jwt_webhooks.sinks import ActivitySink


class FakeResponse:
    encoding = "utf-8"

    def __init__(self, status_code=200, text="ok"):
        self.status_code = status_code
        self.text = text
        self.bytes_read = 0
        self.closed = False

    def iter_content(self, chunk_size=1):
        content = self.text.encode(self.encoding)
        for start in range(0, len(content), chunk_size):
            chunk = content[start : start + chunk_size]
            self.bytes_read += len(chunk)
            yield chunk

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.closed = True
        return False


class FakeSession:
    """Stands in for ``requests.Session``; records posts and closes."""

    def __init__(self, response=None, error=None):
        self.response = response if response is not None else FakeResponse()
        self.error = error
        self.calls = []
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.closed = True
        return False

    def post(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response


class RecordingSink(ActivitySink):
    def __init__(self):
        self.entries = []

    def log(self, message, subject_id):
        self.entries.append((message, subject_id))


@pytest.fixture(autouse=True)
def _fresh_router():
    reset_router()
    yield
    reset_router()


@pytest.fixture
def secret():
    return settings.TEST_WEBHOOK_SECRET


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def webhook_config(secret):
    return {
        "enabled": True,
        "signing_secret": secret,
        "endpoints": {
            "created": "https://hooks.example.com/client-add",
            "updated": "https://hooks.example.com/client-edit",
            "deleted": "https://hooks.example.com/client-delete",
        },
    }


@pytest.fixture
def fake_session():
    return FakeSession


@pytest.fixture
def fake_response():
    return FakeResponse
