from http import HTTPStatus
from unittest.mock import MagicMock

import pytest
import requests

from app.adapters.tika_rest_adapter import TikaRestAdapter

TIKA_URL = "http://tika.test:9998"


def _make_response(status_code=200, body=b"", headers=None, reason=None):
    response = requests.Response()
    response.status_code = status_code
    response._content = body.encode("utf-8") if isinstance(body, str) else body
    response.reason = reason if reason is not None else HTTPStatus(status_code).phrase
    response.headers.update(headers or {})
    response.url = TIKA_URL + "/"
    return response


@pytest.fixture
def make_response():
    return _make_response


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def adapter(session):
    return TikaRestAdapter(TIKA_URL, credentials=None, timeout=5, session=session)


@pytest.fixture(autouse=True)
def clean_tika_env(monkeypatch):
    monkeypatch.delenv("SS_TIKA_USERNAME", raising=False)
    monkeypatch.delenv("SS_TIKA_PASSWORD", raising=False)
