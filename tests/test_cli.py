import json

import httpx

from trade_journal.cli.journal import main


def recording_transport(calls, status=200, payload=None):
    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(status, json=payload if payload is not None else {"ok": True})
    return httpx.MockTransport(handler)


def test_stocks_passes_search_and_sort(capsys):
    calls = []
    transport = recording_transport(calls, payload={"stocks": [{"symbol": "AAPL"}]})
    code = main(["stocks", "--search", "app", "--sort", "daily", "--descending"], transport)
    assert code == 0
    params = calls[0].url.params
    assert params["search"] == "app"
    assert params["sort"] == "daily"
    assert params["direction"] == "descending"
    assert "Found 1 stocks" in capsys.readouterr().out


def test_alert_posts_camel_case_body():
    calls = []
    assert main(["alert", "3", "150.5", "--below"], recording_transport(calls)) == 0
    assert calls[0].method == "POST"
    assert calls[0].url.path == "/stocks/3/alerts"
    assert json.loads(calls[0].content) == {"targetPrice": "150.5", "direction": "below"}


def test_login_uses_given_password():
    calls = []
    assert main(["login", "alice", "--password", "secret"], recording_transport(calls)) == 0
    assert json.loads(calls[0].content) == {"username": "alice", "password": "secret"}


def test_http_error_returns_nonzero(capsys):
    calls = []
    code = main(["delete-trade", "10"], recording_transport(calls, 422, {"detail": "nope"}))
    assert code == 1
    err = capsys.readouterr().err
    assert "HTTP error: 422" in err
    assert "nope" in err
