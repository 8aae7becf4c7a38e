"""
Pytest configuration and fixtures for gateway tests
"""
import httpx
import pytest
from fastapi.testclient import TestClient

from app import create_app
from core.config import Config, PrerenderSettings

TEST_TOKEN = "test-token-123456"


def upstream_response(status, body, headers=None):
    """Unread upstream response, as a real transport hands it back"""
    return httpx.Response(status, stream=httpx.ByteStream(body), headers=headers)


class RecordingLogger:
    """RequestLogger that keeps every call for assertions."""

    def __init__(self):
        self.crawlers = []
        self.humans = []
        self.errors = []

    def log_crawler(self, url, user_agent, matched_agent):
        self.crawlers.append((url, user_agent, matched_agent))

    def log_human(self, url, user_agent):
        self.humans.append((url, user_agent))

    def log_error(self, route, status, message):
        self.errors.append((route, status, message))


class UpstreamRecorder:
    """MockTransport handler that records requests before answering them."""

    def __init__(self, responder=None):
        self.requests = []
        self._responder = responder or self.default_response

    @staticmethod
    def default_response(request):
        if request.url.host == "service.prerender.io":
            body = b"<html>prerendered</html>"
        else:
            body = b"<html>app shell</html>"
        return upstream_response(
            200,
            body,
            headers={"content-type": "text/html", "x-upstream": request.url.host},
        )

    def __call__(self, request):
        self.requests.append(request)
        return self._responder(request)

    @property
    def last(self):
        return self.requests[-1]


@pytest.fixture
def config():
    """Config with a prerender token set"""
    return Config(prerender=PrerenderSettings(token=TEST_TOKEN))


@pytest.fixture
def logger():
    return RecordingLogger()


@pytest.fixture
def upstream():
    return UpstreamRecorder()


@pytest.fixture
def make_client(config, logger):
    """Build a TestClient whose upstream traffic goes to the given handler"""
    clients = []

    def _make(handler):
        app = create_app(config, logger, transport=httpx.MockTransport(handler))
        client = TestClient(app, base_url="http://example.com")
        client.__enter__()
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture
def client(make_client, upstream):
    return make_client(upstream)
