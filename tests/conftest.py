import json

import httpx
import pytest

GOOGLE_DNS = {
    "ip": "8.8.2.8",
    "city": "Mountain View",
    "region_code": "CA",
    "country_code_iso3": "USA",
    "timezone": "America/Los_Angeles",
}


def _provider(calls: list, payload=GOOGLE_DNS, status_code=200):
    """A mock geolocation provider recording every requested URL."""

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(str(request.url))
        body = payload if isinstance(payload, bytes) else json.dumps(payload).encode()
        return httpx.Response(status_code, content=body)

    return httpx.MockTransport(handler)


@pytest.fixture
def calls():
    return []


@pytest.fixture
def provider():
    return _provider
