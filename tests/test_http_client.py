import types

import pytest

from anime_renamer.core import http_client as hc


class DummyResponse:
    def __init__(self, status_code=200, json_data=None, headers=None):
        self.status_code = status_code
        self.headers = headers or {}
        self._json = json_data

    def __bool__(self):
        # requests.Response is falsy for error statuses
        return self.status_code < 400

    def json(self):
        return self._json


@pytest.fixture
def sleeps(monkeypatch):
    waited = []
    monkeypatch.setattr(hc, "time", types.SimpleNamespace(sleep=waited.append))
    return waited


@pytest.fixture
def upstream(monkeypatch):
    """Replays a scripted list of responses/exceptions, one per request."""
    state = {"script": [], "calls": []}

    def fake_request(method, url, **kw):
        state["calls"].append((method, url, kw))
        step = state["script"].pop(0)
        if isinstance(step, Exception):
            raise step
        return step

    monkeypatch.setattr(hc.requests, "request", fake_request)
    return state


def test_get_sends_user_agent_and_caller_headers(upstream, sleeps):
    upstream["script"] = [DummyResponse(200, [{"ID": 1}])]
    r = hc.http_get("http://shoko.local/api/v3/ImportFolder", headers={"apikey": "k"}, timeout=4)
    assert r.json() == [{"ID": 1}]
    method, url, kw = upstream["calls"][0]
    assert method == "GET"
    assert kw["headers"] == {"User-Agent": hc.UA, "apikey": "k"}
    assert kw["timeout"] == 4
    assert sleeps == []


def test_returned_5xx_is_retried(upstream, sleeps):
    upstream["script"] = [DummyResponse(503), DummyResponse(200, {"ok": True})]
    assert hc.http_get("http://shoko.local/x").json() == {"ok": True}
    assert len(upstream["calls"]) == 2
    assert len(sleeps) == 1


def test_raised_5xx_is_retried(upstream, sleeps):
    upstream["script"] = [
        hc.requests.HTTPError("502 upstream", response=DummyResponse(502)),
        DummyResponse(200, {"ok": True}),
    ]
    assert hc.http_get("http://shoko.local/x").status_code == 200
    assert len(upstream["calls"]) == 2


def test_retry_after_is_honoured(upstream, sleeps):
    upstream["script"] = [DummyResponse(429, headers={"Retry-After": "3"}), DummyResponse(200)]
    hc.http_get("http://shoko.local/x")
    assert sleeps == [3.0]


def test_retry_after_is_capped(upstream, sleeps):
    upstream["script"] = [DummyResponse(429, headers={"Retry-After": "600"}), DummyResponse(200)]
    hc.http_get("http://shoko.local/x")
    assert sleeps == [hc.MAX_RETRY_AFTER]


def test_raise_after_attempts_exhausted(upstream, sleeps):
    upstream["script"] = [DummyResponse(500) for _ in range(hc.MAX_ATTEMPTS)]
    with pytest.raises(hc.requests.HTTPError) as exc:
        hc.http_get("http://shoko.local/bad")
    assert exc.value.response.status_code == 500
    assert len(upstream["calls"]) == hc.MAX_ATTEMPTS
    assert len(sleeps) == hc.MAX_ATTEMPTS - 1


def test_client_error_is_returned_without_retry(upstream, sleeps):
    upstream["script"] = [DummyResponse(401)]
    assert hc.http_get("http://shoko.local/secret").status_code == 401
    assert len(upstream["calls"]) == 1


def test_connection_errors_retried_then_raised(upstream, sleeps):
    class Boom(hc.requests.ConnectionError):
        pass

    upstream["script"] = [Boom("network down") for _ in range(hc.MAX_ATTEMPTS)]
    with pytest.raises(Boom):
        hc.http_get("http://down.local")
    assert len(upstream["calls"]) == hc.MAX_ATTEMPTS


def test_err_payload_shape():
    assert hc.err_payload("renamer", "SCRIPT", "boom") == {
        "schemaVersion": hc.SCHEMA,
        "error": {"code": "SCRIPT", "message": "boom", "source": "renamer"},
    }
