import logging

import pytest

from npm_watch.checker import check_package_version
from npm_watch.http import FetchError
from npm_watch.versions import INITIAL_VERSION

REGISTRY = "https://registry.npmjs.org"
REACT_URL = f"{REGISTRY}/react"


def _react(latest, **extra):
    payload = {"dist-tags": {"latest": latest, "next": "19.0.0-rc-1"}}
    payload.update(extra)
    return payload


def test_minor_update_detected_and_store_updated(fake_fetch):
    fake_fetch.routes[REACT_URL] = _react("18.3.1", time={"18.3.1": "2025-10-20T16:00:00.000Z"})
    store = {"react": "18.2.0"}

    change = check_package_version("react", store, fake_fetch, timeout_ms=10000, enrich=False)

    assert change is not None
    assert change.package == "react"
    assert change.from_version == "18.2.0"
    assert change.to_version == "18.3.1"
    assert change.change_kind == "minor"
    assert change.published_at == "2025-10-20T16:00:00.000Z"
    assert store["react"] == "18.3.1"

    request = fake_fetch.requests[0]
    assert request.url == REACT_URL
    assert request.method == "GET"
    assert request.timeout_ms == 10000
    assert dict(request.headers) == {"Accept": "application/json"}


@pytest.mark.parametrize(
    ("latest", "kind"),
    [("19.0.0", "major"), ("18.2.1", "patch")],
)
def test_other_change_kinds(fake_fetch, latest, kind):
    fake_fetch.routes[REACT_URL] = _react(latest)
    store = {"react": "18.2.0"}

    change = check_package_version("react", store, fake_fetch, enrich=False)

    assert change.change_kind == kind
    assert store["react"] == latest


def test_no_change_returns_none(fake_fetch):
    fake_fetch.routes[REACT_URL] = _react("18.2.0")
    store = {"react": "18.2.0"}

    assert check_package_version("react", store, fake_fetch, enrich=False) is None
    assert store == {"react": "18.2.0"}


def test_first_run_with_skip_initial(fake_fetch):
    fake_fetch.routes[REACT_URL] = _react("18.2.0")
    store = {}

    change = check_package_version("react", store, fake_fetch, skip_initial=True, enrich=False)

    assert change is None
    assert store == {"react": "18.2.0"}


def test_first_run_without_skip_initial(fake_fetch):
    fake_fetch.routes[REACT_URL] = _react("18.2.0")
    store = {}

    change = check_package_version("react", store, fake_fetch, skip_initial=False, enrich=False)

    assert change is not None
    assert change.from_version == INITIAL_VERSION
    assert change.to_version == "18.2.0"
    assert change.change_kind == "unknown"
    assert store == {"react": "18.2.0"}


def test_prerelease_filtered(fake_fetch, caplog):
    fake_fetch.routes[REACT_URL] = _react("18.3.0-beta.1")
    store = {"react": "18.2.0"}

    with caplog.at_level(logging.DEBUG, logger="npm_watch.checker"):
        change = check_package_version(
            "react", store, fake_fetch, include_prerelease=False, enrich=False
        )

    assert change is None
    assert store == {"react": "18.2.0"}
    assert "prerelease" in caplog.text


def test_prerelease_included_is_classified(fake_fetch):
    fake_fetch.routes[REACT_URL] = _react("18.3.0-beta.1")
    store = {"react": "18.2.0"}

    change = check_package_version("react", store, fake_fetch, include_prerelease=True, enrich=False)

    assert change.change_kind == "prerelease"


def test_missing_tag_logs_debug(fake_fetch, caplog):
    fake_fetch.routes[REACT_URL] = _react("18.2.0")
    store = {"react": "18.2.0"}

    with caplog.at_level(logging.DEBUG, logger="npm_watch.checker"):
        change = check_package_version("react", store, fake_fetch, tag="canary", enrich=False)

    assert change is None
    assert store == {"react": "18.2.0"}
    debug_records = [r for r in caplog.records if r.levelno == logging.DEBUG]
    assert any("canary" in r.getMessage() for r in debug_records)


def test_non_latest_tag(fake_fetch):
    fake_fetch.routes[REACT_URL] = _react("18.2.0")
    store = {"react": "19.0.0-rc-0"}

    change = check_package_version("react", store, fake_fetch, tag="next", enrich=False)

    assert change.to_version == "19.0.0-rc-1"
    assert change.tag == "next"


def test_scoped_package_is_single_encoded_segment(fake_fetch):
    url = f"{REGISTRY}/%40types%2Fnode"
    fake_fetch.routes[url] = {"dist-tags": {"latest": "20.11.0"}}
    store = {"@types/node": "20.10.0"}

    change = check_package_version("@types/node", store, fake_fetch, enrich=False)

    assert fake_fetch.urls == [url]
    assert change.change_kind == "minor"
    assert change.registry_url == "https://www.npmjs.com/package/@types/node/v/20.11.0"


def test_debug_mode_simulates_without_persisting(fake_fetch):
    fake_fetch.routes[REACT_URL] = _react("18.3.1")
    store = {}

    first = check_package_version("react", store, fake_fetch, debug_mode=True, enrich=False)
    second = check_package_version("react", store, fake_fetch, debug_mode=True, enrich=False)

    assert first.from_version == "18.3.0"
    assert first.change_kind == "patch"
    assert second.from_version == "18.3.0"
    assert store == {}


def test_debug_mode_with_prior_value_behaves_normally(fake_fetch):
    fake_fetch.routes[REACT_URL] = _react("18.3.1")
    store = {"react": "18.3.1"}

    assert check_package_version("react", store, fake_fetch, debug_mode=True, enrich=False) is None


def test_registry_fetch_error_propagates(fake_fetch):
    fake_fetch.routes[REACT_URL] = FetchError("timed out")
    store = {"react": "18.2.0"}

    with pytest.raises(FetchError):
        check_package_version("react", store, fake_fetch, enrich=False)

    assert store == {"react": "18.2.0"}


def test_enrichment_success_uses_first_candidate(fake_fetch):
    fake_fetch.routes[REACT_URL] = _react(
        "18.3.1", repository={"type": "git", "url": "git+https://github.com/facebook/react.git"}
    )
    release_url = "https://api.github.com/repos/facebook/react/releases/tags/v18.3.1"
    fake_fetch.routes[release_url] = {
        "html_url": "https://github.com/facebook/react/releases/tag/v18.3.1",
        "name": "18.3.1 (April 26, 2024)",
        "body": "React DOM fixes",
    }
    store = {"react": "18.2.0"}

    change = check_package_version("react", store, fake_fetch, enrich=True)

    assert change.changelog_url == "https://github.com/facebook/react/releases/tag/v18.3.1"
    assert change.release_title == "18.3.1 (April 26, 2024)"
    assert change.release_notes == "React DOM fixes"
    assert fake_fetch.urls == [REACT_URL, release_url]
    assert store["react"] == "18.3.1"


def test_enrichment_fallback_when_no_release_matches(fake_fetch):
    fake_fetch.routes[REACT_URL] = _react("18.3.1", repository="github:facebook/react")
    store = {"react": "18.2.0"}

    change = check_package_version("react", store, fake_fetch, enrich=True)

    assert change.changelog_url == "https://github.com/facebook/react/releases/tag/v18.3.1"
    assert change.release_title is None
    assert change.release_notes is None
    assert fake_fetch.urls[1:] == [
        "https://api.github.com/repos/facebook/react/releases/tags/v18.3.1",
        "https://api.github.com/repos/facebook/react/releases/tags/18.3.1",
        "https://api.github.com/repos/facebook/react/releases/tags/react@18.3.1",
        "https://api.github.com/repos/facebook/react/releases/tags/react-18.3.1",
    ]
    assert store["react"] == "18.3.1"
