import urllib.error

import pytest

from fetch.sources import SourceUnavailableError, UrlSource, is_url, load_text, read_file, redact_url
from tle_stats.config import HttpSettings

TLE_TEXT = """ISS (ZARYA)
1 25544U 98067A   21275.52921296  .00002182  00000-0  47654-4 0  9996
2 25544  51.6442 208.9163 0006703  69.9862  25.2906 15.48815743306985
"""


class StubOpener:
    def __init__(self, responses):
        self._responses = list(responses)
        self.requests = []

    def __call__(self, request, timeout):
        self.requests.append((request, timeout))
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def _source(opener, **kwargs):
    delays = []
    source = UrlSource(opener=opener, sleeper=delays.append, jitter=lambda: 0.0, **kwargs)
    return source, delays


def test_read_file_returns_text(tmp_path):
    path = tmp_path / "active.txt"
    path.write_text(TLE_TEXT, encoding="utf-8")
    assert read_file(path) == TLE_TEXT
    assert load_text(str(path)) == TLE_TEXT


def test_missing_file_is_unavailable(tmp_path):
    with pytest.raises(SourceUnavailableError, match="cannot open file"):
        read_file(tmp_path / "missing.txt")


def test_non_utf8_file_is_unavailable(tmp_path):
    path = tmp_path / "latin1.txt"
    path.write_bytes(b"\xff\xfe\xfa")
    with pytest.raises(SourceUnavailableError, match="UTF-8"):
        read_file(path)


def test_fetch_decodes_body_and_sends_user_agent():
    opener = StubOpener([TLE_TEXT.encode("utf-8")])
    source, delays = _source(opener, user_agent="tests/1.0", timeout=3.0)
    assert source.fetch("https://celestrak.org/NORAD/elements/gp.php?GROUP=stations") == TLE_TEXT
    request, timeout = opener.requests[0]
    assert request.get_header("User-agent") == "tests/1.0"
    assert timeout == 3.0
    assert delays == []


def test_fetch_retries_with_exponential_backoff():
    opener = StubOpener(
        [
            urllib.error.URLError("connection reset"),
            TimeoutError("timed out"),
            TLE_TEXT.encode("utf-8"),
        ]
    )
    source, delays = _source(opener, retries=3, backoff=0.5)
    assert source.fetch("http://example.test/tle.txt") == TLE_TEXT
    assert delays == [0.5, 1.0]


def test_fetch_gives_up_after_retries():
    opener = StubOpener([urllib.error.URLError("down")] * 3)
    source, delays = _source(opener, retries=2, backoff=0.1)
    with pytest.raises(SourceUnavailableError, match="network error"):
        source.fetch("http://example.test/tle.txt")
    assert len(opener.requests) == 3
    assert len(delays) == 2


def test_client_errors_are_not_retried():
    not_found = urllib.error.HTTPError("http://example.test/x", 404, "Not Found", hdrs=None, fp=None)
    opener = StubOpener([not_found])
    source, delays = _source(opener, retries=3)
    with pytest.raises(SourceUnavailableError, match="404"):
        source.fetch("http://example.test/x")
    assert delays == []


@pytest.mark.parametrize("url, message", [("", "empty URL"), ("   ", "empty URL"), ("ftp://host/x", "invalid URL"), ("http://", "invalid URL")])
def test_invalid_urls_are_rejected_before_any_request(url, message):
    opener = StubOpener([])
    source, _ = _source(opener)
    with pytest.raises(SourceUnavailableError, match=message):
        source.fetch(url)
    assert opener.requests == []


def test_from_settings_copies_http_options():
    source = UrlSource.from_settings(HttpSettings(timeout=1.5, retries=0, backoff=0.2, user_agent="ua"))
    assert (source.timeout, source.retries, source.backoff, source.user_agent) == (1.5, 0, 0.2, "ua")


def test_redact_url_masks_api_keys():
    redacted = redact_url("https://api.example.test/tle/25544?apiKey=abcdef&format=tle")
    assert "abcdef" not in redacted
    assert "format=tle" in redacted
    assert redact_url("https://celestrak.org/a.txt") == "https://celestrak.org/a.txt"


def test_is_url_only_accepts_http_schemes():
    assert is_url("https://celestrak.org/a.txt")
    assert is_url("HTTP://celestrak.org/a.txt")
    assert not is_url("/tmp/active.txt")
    assert not is_url("C:\\data\\active.txt")


def test_load_text_dispatches_urls_to_client():
    opener = StubOpener([b"payload"])
    source, _ = _source(opener)
    assert load_text("http://example.test/a", client=source) == "payload"
    with pytest.raises(SourceUnavailableError, match="empty"):
        load_text("")
