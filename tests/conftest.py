import httpx
import pytest

from cdn_audit.config import AuditConfig

BASE_URL = "https://cdn.test"


@pytest.fixture
def make_config(tmp_path):
    def _make(**kwargs):
        kwargs.setdefault("output_dir", tmp_path)
        kwargs.setdefault("base_url", BASE_URL)
        return AuditConfig(**kwargs)

    return _make


def mock_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def cached(age="10", status="HIT", content_type="application/pdf"):
    headers = {"content-type": content_type, "cf-cache-status": status}
    if age is not None:
        headers["age"] = age
    return httpx.Response(200, headers=headers)
