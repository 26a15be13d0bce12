import asyncio
import time
from unittest.mock import Mock

import pytest
import requests

from passcheck.breach import (
    BreachResult,
    PwnedPasswordsClient,
    check_offline,
    check_online,
    parse_range,
    sha1_hex,
)

PASSWORD_HASH = "5BAA61E4C9B93F3F0682250B6CF8331B7EE68FD8"

RANGE_BODY = (
    "0018A45C4D1DEF81644B54AB7F969B88D65:0\r\n"
    "1E4C9B93F3F0682250B6CF8331B7EE68FD8:3730471\r\n"
    "\r\n"
    "00D4F6E8FA6EECAD2A3AA415EEC418D38EC:2\r\n"
)


def make_client(body=RANGE_BODY, error=None):
    client = PwnedPasswordsClient(base_url="https://breach.test")
    response = Mock()
    response.text = body
    response.raise_for_status = Mock(side_effect=error)
    client.session = Mock()
    client.session.get = Mock(return_value=response)
    return client


class FakeClient:
    def __init__(self, found=False, error=None, delay=0):
        self.found = found
        self.error = error
        self.delay = delay

    def is_pwned(self, password):
        if self.delay:
            time.sleep(self.delay)
        if self.error:
            raise self.error
        return self.found


def test_sha1_hex_is_uppercase():
    assert sha1_hex("password") == PASSWORD_HASH


def test_sha1_hex_accepts_lone_surrogate():
    digest = sha1_hex("ab\ud800cd")
    assert len(digest) == 40
    assert digest == digest.upper()
    assert not check_offline("ab\ud800cd")


def test_offline_lookup():
    assert check_offline("password")
    assert check_offline("123456")
    assert not check_offline("Password")
    assert not check_offline("G7!kzQ2@wLp9")


def test_parse_range_skips_blank_lines():
    records = list(parse_range(RANGE_BODY))
    assert len(records) == 3
    assert records[1] == ("1E4C9B93F3F0682250B6CF8331B7EE68FD8", 3730471)


def test_parse_range_rejects_malformed_record():
    with pytest.raises(ValueError):
        list(parse_range("not-a-record"))


def test_client_sends_only_prefix():
    client = make_client()
    assert client.is_pwned("password")
    assert client.pwned_count("password") == 3730471

    url = client.session.get.call_args[0][0]
    assert url == "https://breach.test/range/5BAA6"
    assert PASSWORD_HASH[5:] not in url


def test_client_matching_suffix_is_a_hit_even_with_zero_count():
    client = make_client(body="1E4C9B93F3F0682250B6CF8331B7EE68FD8:0\n")
    assert client.is_pwned("password")
    assert client.pwned_count("password") == 0


def test_client_lookup_miss():
    client = make_client()
    assert client.lookup("G7!kzQ2@wLp9") is None
    assert client.pwned_count("G7!kzQ2@wLp9") == 0
    assert not client.is_pwned("G7!kzQ2@wLp9")


def test_client_session_headers():
    client = PwnedPasswordsClient()
    assert client.session.headers["Add-Padding"] == "true"
    assert client.base_url == "https://api.pwnedpasswords.com"


def test_client_http_error_propagates():
    client = make_client(error=requests.HTTPError("503"))
    with pytest.raises(requests.HTTPError):
        client.is_pwned("password")


def test_check_online_found():
    result = asyncio.run(check_online("password", make_client()))
    assert result == BreachResult(True, "Found in breach database (API)")


def test_check_online_not_found():
    result = asyncio.run(check_online("G7!kzQ2@wLp9", make_client()))
    assert result.found is False


@pytest.mark.parametrize(
    "error", [requests.ConnectionError("down"), requests.Timeout("slow"), ValueError("garbage")]
)
def test_check_online_failure_is_unknown(error):
    result = asyncio.run(check_online("password", FakeClient(error=error)))
    assert result.found is None
    assert "failed" in result.message


@pytest.mark.parametrize(
    "client", [FakeClient(error=RuntimeError("client exploded")), object()]
)
def test_check_online_unexpected_client_error_is_unknown(client):
    result = asyncio.run(check_online("password", client))
    assert result.found is None
    assert result.message.startswith("Breach API check failed")


def test_check_online_timeout_is_unknown():
    result = asyncio.run(check_online("password", FakeClient(found=True, delay=0.5), timeout=0.05))
    assert result.found is None
    assert "timed out" in result.message
