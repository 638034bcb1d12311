import json

import pytest
import requests

from catgallery.catapi import CatApiClient


class DummyResponse:
    def __init__(self, text, status_code=200):
        self.text = text
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")

    def json(self):
        return json.loads(self.text)


class DummySession:
    """Stands in for requests.Session, answering every GET with one canned reply."""

    def __init__(self, reply=None):
        self.headers = {}
        self.reply = reply if reply is not None else DummyResponse("[]")
        self.calls = []
        self.closed = False

    def get(self, url, timeout=None):
        self.calls.append((url, timeout))
        if isinstance(self.reply, Exception):
            raise self.reply
        return self.reply

    def close(self):
        self.closed = True


@pytest.fixture
def session():
    return DummySession()


@pytest.fixture
def client(session):
    return CatApiClient("test-key", timeout=5, session=session)
