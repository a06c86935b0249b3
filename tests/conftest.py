"""Pytest fixtures: a fake Shopify transport that records every request."""

import pytest
import requests

from shopify_catalog.config import ShopifyConfig
from tests.factories import INVALID_JSON


class FakeResponse:
    def __init__(self, status_code=200, body=None, text=""):
        self.status_code = status_code
        self._body = body
        self.text = text

    @property
    def ok(self):
        return 200 <= self.status_code < 300

    def json(self):
        if self._body is INVALID_JSON:
            raise ValueError("Expecting value")
        return self._body


class FakeShopify:
    """Queues canned responses for GraphQL POSTs and staged-upload transfers."""

    def __init__(self):
        self.graphql_queue = []
        self.graphql_calls = []
        self.upload_queue = []
        self.upload_calls = []

    def respond(self, body=None, status_code=200, text=""):
        self.graphql_queue.append(FakeResponse(status_code, body, text))

    def fail(self, exc):
        self.graphql_queue.append(exc)

    def respond_upload(self, status_code=200, text=""):
        self.upload_queue.append(FakeResponse(status_code, None, text))

    def fail_upload(self, exc):
        self.upload_queue.append(exc)

    def post(self, url, headers=None, json=None, **kwargs):
        self.graphql_calls.append({"url": url, "headers": headers, "json": json})
        if not self.graphql_queue:
            raise AssertionError(f"Unexpected GraphQL call #{len(self.graphql_calls)}")
        item = self.graphql_queue.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    def request(self, method, url, **kwargs):
        self.upload_calls.append({"method": method, "url": url, **kwargs})
        if not self.upload_queue:
            raise AssertionError(f"Unexpected upload call to {url}")
        item = self.upload_queue.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    def variables(self, index):
        return self.graphql_calls[index]["json"].get("variables", {})

    def query(self, index):
        return self.graphql_calls[index]["json"]["query"]


@pytest.fixture
def shopify(monkeypatch):
    fake = FakeShopify()
    monkeypatch.setattr(requests, "post", fake.post)
    monkeypatch.setattr(requests, "request", fake.request)
    return fake


@pytest.fixture
def config(monkeypatch):
    monkeypatch.delenv("SHOPIFY_API_VERSION", raising=False)
    return ShopifyConfig("test-store", "shpat_test")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("SHOPIFY_LOCATION_ID", "SHOPIFY_PUBLICATION_IDS", "SHOPIFY_PUBLISH_DATE"):
        monkeypatch.delenv(name, raising=False)
