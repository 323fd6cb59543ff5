"""Shared fixtures.

The API client is exercised against the real FastAPI application: the
``ASGISession`` below stands in for ``requests.Session`` and forwards
every call to a ``TestClient``, converting the answer back into a
``requests.Response`` so the client's error handling runs unchanged.
"""

from pathlib import Path
import sys

import pytest
import requests
from fastapi.testclient import TestClient

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from school_api import MessageService, SchoolAPI  # noqa: E402
from tour_of_schools_api.app.main import app  # noqa: E402
from tour_of_schools_api.app.services.school_service import SchoolService  # noqa: E402

BASE_URL = "http://testserver"


class ASGISession:
    """Route ``requests``-style calls through a FastAPI ``TestClient``."""

    def __init__(self, client: TestClient) -> None:
        self.client = client
        self.calls = []

    def request(self, method, url, params=None, json=None, headers=None, timeout=None):
        self.calls.append((method, url, params))
        answer = self.client.request(method, url, params=params, json=json, headers=headers)
        response = requests.Response()
        response.status_code = answer.status_code
        response._content = answer.content
        response.headers.update(answer.headers)
        response.url = str(answer.url)
        response.reason = answer.reason_phrase
        return response

    def close(self) -> None:
        pass


class FailingSession:
    """A session whose every request fails at the transport level."""

    def __init__(self) -> None:
        self.calls = []

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs.get("params")))
        raise requests.ConnectionError("connection refused")

    def close(self) -> None:
        pass


class CannedSession:
    """A session that answers every request with the same status and body."""

    def __init__(self, status_code: int, body: bytes, content_type: str = "text/plain") -> None:
        self.status_code = status_code
        self.body = body
        self.content_type = content_type
        self.calls = []

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs.get("params")))
        response = requests.Response()
        response.status_code = self.status_code
        response._content = self.body
        response.headers["Content-Type"] = self.content_type
        response.url = url
        response.reason = "Internal Server Error" if self.status_code == 500 else "OK"
        return response

    def close(self) -> None:
        pass


@pytest.fixture(autouse=True)
def reset_schools():
    """Every test starts from the ten seed schools."""
    SchoolService.reset()
    yield
    SchoolService.reset()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def session(client):
    return ASGISession(client)


@pytest.fixture
def messages():
    return MessageService()


@pytest.fixture
def api(session, messages):
    return SchoolAPI(base_url=BASE_URL, message_service=messages, session=session)


@pytest.fixture
def failing_session():
    return FailingSession()


@pytest.fixture
def failing_api(failing_session, messages):
    return SchoolAPI(base_url=BASE_URL, message_service=messages, session=failing_session)


@pytest.fixture
def server_error_api(messages):
    """Client whose server answers 500 with a plain-text body."""
    return SchoolAPI(
        base_url=BASE_URL,
        message_service=messages,
        session=CannedSession(500, b"boom"),
    )


@pytest.fixture
def garbled_api(messages):
    """Client whose server answers 200 with a body that is not JSON."""
    return SchoolAPI(
        base_url=BASE_URL,
        message_service=messages,
        session=CannedSession(200, b"<html>not json</html>", "text/html"),
    )
