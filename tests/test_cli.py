"""Tests for the typer CLI."""

import httpx
import pytest
from typer.testing import CliRunner

from huobiapi import cli
from huobiapi.data.huobi_client import Client

runner = CliRunner()


@pytest.fixture
def creds(monkeypatch):
    monkeypatch.setenv("HUOBI_API_KEY", "key-1234")
    monkeypatch.setenv("HUOBI_SECRET_KEY", "secret-5678")


@pytest.fixture
def no_creds(monkeypatch):
    monkeypatch.delenv("HUOBI_API_KEY", raising=False)
    monkeypatch.delenv("HUOBI_SECRET_KEY", raising=False)


def _mock_client(monkeypatch, body: str, requests: list):
    def handler(request):
        requests.append(request)
        return httpx.Response(200, text=body)

    def make(verbose=False, signed=False):
        http = httpx.Client(transport=httpx.MockTransport(handler))
        return Client("key-1234", "secret-5678", http_client=http)

    monkeypatch.setattr(cli, "_make_client", make)


class TestSign:
    def test_sign_prints_table(self, creds):
        result = runner.invoke(cli.app, ["sign", "/v1/account/accounts", "-p", "symbol=btcusdt"])
        assert result.exit_code == 0, result.output
        assert "Canonical query" in result.output
        assert "Pre-sign string" in result.output

    def test_sign_requires_credentials(self, no_creds):
        result = runner.invoke(cli.app, ["sign", "/v1/account/accounts"])
        assert result.exit_code == 1

    def test_sign_rejects_method(self, creds):
        result = runner.invoke(cli.app, ["sign", "/v1/account/accounts", "--method", "PUT"])
        assert result.exit_code == 2

    def test_bad_param(self, creds):
        result = runner.invoke(cli.app, ["sign", "/v1/account/accounts", "-p", "novalue"])
        assert result.exit_code == 2


class TestRequests:
    def test_get(self, monkeypatch):
        requests = []
        _mock_client(monkeypatch, '{"status":"ok","data":[]}', requests)
        result = runner.invoke(cli.app, ["get", "/market/tickers", "-p", "symbol=btcusdt"])
        assert result.exit_code == 0, result.output
        assert '"ok"' in result.output
        assert requests[0].url.query == b"symbol=btcusdt"

    def test_get_signed_api_error(self, monkeypatch):
        _mock_client(monkeypatch, '{"status":"error","err-code":"bad","err-msg":"oops"}', [])
        result = runner.invoke(cli.app, ["get-signed", "/v1/account/accounts"])
        assert result.exit_code == 1
        assert "oops" in result.output

    def test_post_signed_body(self, monkeypatch):
        requests = []
        _mock_client(monkeypatch, '{"status":"ok","data":"1"}', requests)
        result = runner.invoke(
            cli.app, ["post-signed", "/v1/order/orders/place", "--data", '{"symbol": "btcusdt"}']
        )
        assert result.exit_code == 0, result.output
        assert requests[0].method == "POST"
        assert requests[0].content == b'{"symbol":"btcusdt"}'

    def test_post_signed_invalid_json(self, monkeypatch):
        _mock_client(monkeypatch, "{}", [])
        result = runner.invoke(cli.app, ["post-signed", "/v1/order/orders/place", "--data", "{oops"])
        assert result.exit_code == 2

    def test_get_signed_requires_credentials(self, no_creds):
        result = runner.invoke(cli.app, ["get-signed", "/v1/account/accounts"])
        assert result.exit_code == 1
