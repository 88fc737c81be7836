"""HTTP transport used to reach the npm registry and the GitHub API.

The checking logic only depends on a ``Fetcher``: any callable taking a
``FetchRequest`` and returning the decoded payload, raising on failure. Tests
substitute plain functions; the CLI uses ``RequestsFetcher``.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, TypeAlias

import requests
from requests import Response
from tenacity import Retrying, retry_if_exception_type, stop_after_attempt, wait_fixed

DEFAULT_TIMEOUT_MS = 15000
USER_AGENT = "npm-watch"


class FetchError(RuntimeError):
    """Raised when a request fails, times out or returns an unusable payload."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass(slots=True, frozen=True)
class FetchRequest:
    """A single outbound HTTP request."""

    url: str
    method: str = "GET"
    expect_json: bool = True
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    headers: Mapping[str, str] = field(default_factory=dict)


Fetcher: TypeAlias = Callable[[FetchRequest], Any]


class RequestsFetcher:
    """Fetcher backed by a ``requests.Session``.

    ``attempts`` greater than one retries transport-level failures with a fixed
    wait. Non-2xx responses are never retried.
    """

    def __init__(
        self,
        session: requests.Session | None = None,
        attempts: int = 1,
        wait_seconds: float = 2,
    ) -> None:
        if attempts < 1:
            raise ValueError("attempts must be at least 1")
        self.session = session or requests.Session()
        self.attempts = attempts
        self.wait_seconds = wait_seconds

    def _send(self, request: FetchRequest) -> Response:
        retrying = Retrying(
            reraise=True,
            stop=stop_after_attempt(self.attempts),
            wait=wait_fixed(self.wait_seconds),
            retry=retry_if_exception_type(requests.RequestException),
        )
        for attempt in retrying:
            with attempt:
                return self.session.request(
                    request.method,
                    request.url,
                    headers=dict(request.headers),
                    timeout=request.timeout_ms / 1000,
                )
        raise FetchError(f"No attempt made for {request.url}")  # pragma: no cover

    def __call__(self, request: FetchRequest) -> Any:
        try:
            response = self._send(request)
        except requests.RequestException as exc:
            raise FetchError(f"Request to {request.url} failed: {exc}") from exc

        if not 200 <= response.status_code < 300:
            raise FetchError(
                f"Unexpected status code {response.status_code} fetching {request.url}",
                status_code=response.status_code,
            )

        if not request.expect_json:
            return response.text

        try:
            return response.json()
        except ValueError as exc:
            raise FetchError(f"Invalid JSON from {request.url}: {exc}") from exc
