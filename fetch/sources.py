"""Raw text acquisition: local files and HTTP(S) URLs.

Everything that can go wrong while obtaining the text (missing file, bad
encoding, invalid URL, network failure, non-200 status) surfaces as a single
:class:`SourceUnavailableError` so callers only handle one failure type at
this boundary.
"""
from __future__ import annotations

import dataclasses
import random
import time
import urllib.error
import urllib.parse
import urllib.request
from pathlib import Path
from typing import Callable, Optional

from tle_stats.config import DEFAULT_USER_AGENT, HttpSettings
from tle_stats.logging import get_logger, redact

logger = get_logger(__name__)

DEFAULT_TIMEOUT = 10.0
DEFAULT_RETRIES = 3
DEFAULT_BACKOFF = 0.8  # seconds (exponential with jitter)
URL_SCHEMES = ("http", "https")


class SourceUnavailableError(RuntimeError):
    """Raised when TLE text cannot be obtained from a file or URL."""


def is_url(location: str) -> bool:
    return urllib.parse.urlsplit(location.strip()).scheme.lower() in URL_SCHEMES


def redact_url(url: str) -> str:
    """Mask sensitive query parameters (API keys, tokens) for logging."""

    parts = urllib.parse.urlsplit(url)
    if not parts.query:
        return url
    query = redact(dict(urllib.parse.parse_qsl(parts.query, keep_blank_values=True)))
    return urllib.parse.urlunsplit(parts._replace(query=urllib.parse.urlencode(query)))


def read_file(path: str | Path) -> str:
    """Read a local TLE file as UTF-8 text."""

    file_path = Path(path).expanduser()
    try:
        return file_path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise SourceUnavailableError(f"{file_path} is not valid UTF-8 text") from exc
    except OSError as exc:
        raise SourceUnavailableError(f"cannot open file {file_path}: {exc.strerror or exc}") from exc


@dataclasses.dataclass
class UrlSource:
    """HTTP GET with explicit timeout, retries and exponential backoff + jitter."""

    timeout: float = DEFAULT_TIMEOUT
    retries: int = DEFAULT_RETRIES
    backoff: float = DEFAULT_BACKOFF
    user_agent: str = DEFAULT_USER_AGENT
    opener: Optional[Callable[[urllib.request.Request, float], bytes]] = None
    sleeper: Callable[[float], None] = time.sleep
    jitter: Callable[[], float] = lambda: random.uniform(0, 0.125)

    @classmethod
    def from_settings(cls, settings: HttpSettings) -> "UrlSource":
        return cls(
            timeout=settings.timeout,
            retries=settings.retries,
            backoff=settings.backoff,
            user_agent=settings.user_agent,
        )

    @staticmethod
    def validate(url: str) -> str:
        candidate = url.strip()
        if not candidate:
            raise SourceUnavailableError("empty URL")
        parts = urllib.parse.urlsplit(candidate)
        if parts.scheme.lower() not in URL_SCHEMES or not parts.netloc:
            raise SourceUnavailableError(f"invalid URL: {redact_url(candidate)!r}")
        return candidate

    def _default_opener(self, request: urllib.request.Request, timeout: float) -> bytes:
        with urllib.request.urlopen(request, timeout=timeout) as resp:
            status = getattr(resp, "status", None) or resp.getcode()
            if status != 200:
                raise SourceUnavailableError(f"HTTP {status}")
            return resp.read()

    def fetch(self, url: str) -> str:
        """Retrieve ``url`` and return the body decoded as UTF-8 text."""

        target = self.validate(url)
        request = urllib.request.Request(target, headers={"User-Agent": self.user_agent}, method="GET")
        opener = self.opener or self._default_opener
        shown = redact_url(target)

        attempt = 0
        last_exc: Optional[Exception] = None
        while attempt <= self.retries:
            try:
                payload = opener(request, self.timeout)
                logger.debug("fetch_complete", extra={"url": shown, "attempt": attempt, "size": len(payload)})
                return payload.decode("utf-8", errors="replace")
            except urllib.error.HTTPError as exc:
                last_exc = exc
                if 400 <= exc.code < 500:
                    break
            except (urllib.error.URLError, OSError, SourceUnavailableError) as exc:
                last_exc = exc
            if attempt == self.retries:
                break
            delay = (self.backoff * (2**attempt)) + self.jitter()
            logger.warning("fetch_retry", extra={"url": shown, "attempt": attempt, "delay": delay, "error": str(last_exc)})
            self.sleeper(delay)
            attempt += 1
        raise SourceUnavailableError(f"network error for {shown}: {last_exc}") from last_exc


def load_text(location: str, client: Optional[UrlSource] = None) -> str:
    """Return the text behind ``location``, a file path or an http(s) URL."""

    if not location or not location.strip():
        raise SourceUnavailableError("empty source location")
    if is_url(location):
        return (client or UrlSource()).fetch(location)
    return read_file(location.strip())


__all__ = [
    "DEFAULT_BACKOFF",
    "DEFAULT_RETRIES",
    "DEFAULT_TIMEOUT",
    "SourceUnavailableError",
    "UrlSource",
    "is_url",
    "load_text",
    "read_file",
    "redact_url",
]
