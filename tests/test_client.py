import pytest
import requests

from mapquest.core import client as client_module
from mapquest.core.client import Client
from mapquest.core.config import Settings
from mapquest.core.errors import DecodeError
from mapquest.vendors.nominatim import NominatimAPI


class DummyResponse:
    def __init__(self, status_code=200, text="[]"):
        self.status_code = status_code
        self.text = text

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


class DummySession:
    def __init__(self, response=None):
        self.calls = []
        self.headers = {}
        self.response = response

    def get(self, url, timeout=None):
        self.calls.append((url, timeout))
        return self.response


def test_client_strips_trailing_slash_and_defaults_key():
    client = Client("https://open.mapquestapi.com/", key=None, session=DummySession())
    assert client.base_url == "https://open.mapquestapi.com"
    assert client.key == ""


def test_get_json_returns_payload_and_uses_timeout():
    session = DummySession(DummyResponse(text='[{"lat": "1"}]'))
    client = Client("https://example.com", session=session, timeout=3)

    assert client.get_json("https://example.com/x") == [{"lat": "1"}]
    assert session.calls == [("https://example.com/x", 3)]


def test_get_json_propagates_http_errors():
    client = Client("https://example.com", session=DummySession(DummyResponse(status_code=503)))
    with pytest.raises(requests.HTTPError):
        client.get_json("https://example.com/x")


def test_get_json_raises_decode_error_on_invalid_body(caplog):
    client = Client("https://example.com", session=DummySession(DummyResponse(text="<html>busy</html>")))
    with caplog.at_level("ERROR"), pytest.raises(DecodeError):
        client.get_json("https://example.com/x?key=secret")
    assert "secret" not in " ".join(caplog.messages)


def test_user_agent_header_is_set():
    session = DummySession()
    Client("https://example.com", session=session, user_agent="geo-tests/1.0")
    assert session.headers["User-Agent"] == "geo-tests/1.0"


def test_from_settings_and_nominatim_binding():
    settings = Settings(api_key="abc", base_url="http://localhost:9000", timeout=4.0)
    client = Client.from_settings(settings)

    assert client.key == "abc"
    assert client.base_url == "http://localhost:9000"
    assert client.timeout == 4.0
    assert isinstance(client.nominatim(), NominatimAPI)


def test_redact_key():
    url = "https://example.com/search.php?format=json&key=abc123&limit=1"
    assert client_module.redact_key(url) == "https://example.com/search.php?format=json&key=<redacted>&limit=1"


@pytest.mark.parametrize("text", ['[{"importance": NaN}]', '[{"lat": Infinity}]', "[-Infinity]"])
def test_get_json_rejects_non_standard_constants(text):
    client = Client("https://example.com", session=DummySession(DummyResponse(text=text)))
    with pytest.raises(DecodeError):
        client.get_json("https://example.com/x")
