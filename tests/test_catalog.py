import pytest
import requests

from cdn_audit.catalog import fetch_catalog, parse_catalog
from cdn_audit.errors import CatalogError
from cdn_audit.models import CatalogEntry


class FakeResponse:
    def __init__(self, payload=None, status_error=None, json_error=None):
        self._payload = payload
        self._status_error = status_error
        self._json_error = json_error

    def raise_for_status(self):
        if self._status_error:
            raise self._status_error

    def json(self):
        if self._json_error:
            raise self._json_error
        return self._payload


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.urls = []

    def get(self, url, timeout=None):
        self.urls.append(url)
        if self.error:
            raise self.error
        return self.response


def test_parse_catalog():
    payload = [
        {"id": "a", "data": {"filetype": "pdf", "title": "ignored"}},
        {"id": "b", "data": {"filetype": "zip"}},
    ]
    assert parse_catalog(payload) == [
        CatalogEntry(id="a", filetype="pdf"),
        CatalogEntry(id="b", filetype="zip"),
    ]


@pytest.mark.parametrize(
    "payload",
    [
        {"id": "a"},
        [{"id": "a"}],
        [{"id": "a", "data": None}],
        [{"id": 1, "data": {"filetype": "pdf"}}],
    ],
)
def test_parse_catalog_rejects_bad_shapes(payload):
    with pytest.raises(CatalogError):
        parse_catalog(payload)


def test_fetch_catalog():
    session = FakeSession(FakeResponse([{"id": "a", "data": {"filetype": "pdf"}}]))
    entries = fetch_catalog("https://catalog.test/metadata.json", session=session)
    assert entries == [CatalogEntry(id="a", filetype="pdf")]
    assert session.urls == ["https://catalog.test/metadata.json"]


@pytest.mark.parametrize(
    "session",
    [
        FakeSession(error=requests.ConnectionError("down")),
        FakeSession(FakeResponse(status_error=requests.HTTPError("500"))),
        FakeSession(FakeResponse(json_error=ValueError("not json"))),
    ],
)
def test_fetch_catalog_failures(session):
    with pytest.raises(CatalogError):
        fetch_catalog("https://catalog.test/metadata.json", session=session)
