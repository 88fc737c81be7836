from __future__ import annotations

from typing import Any

import pytest

from npm_watch.http import FetchError, FetchRequest


class FakeFetcher:
    """Serve canned payloads keyed by URL and record every request."""

    def __init__(self, routes: dict[str, Any] | None = None) -> None:
        self.routes: dict[str, Any] = dict(routes or {})
        self.requests: list[FetchRequest] = []

    @property
    def urls(self) -> list[str]:
        return [request.url for request in self.requests]

    def __call__(self, request: FetchRequest) -> Any:
        self.requests.append(request)
        if request.url not in self.routes:
            raise FetchError(f"Unexpected status code 404 fetching {request.url}", status_code=404)
        payload = self.routes[request.url]
        if isinstance(payload, Exception):
            raise payload
        return payload


@pytest.fixture
def fake_fetch() -> FakeFetcher:
    return FakeFetcher()
