"""Load sessions: obtain TLE text, then parse and aggregate it."""
from __future__ import annotations

import dataclasses
import threading
from typing import Callable, List, Optional

from fetch.sources import SourceUnavailableError, UrlSource, read_file, redact_url
from tle_stats.core import ParseResult, Rejection, TleRecord, parse
from tle_stats.logging import get_logger, log_context
from tle_stats.stats import Statistics, compute

logger = get_logger(__name__)


@dataclasses.dataclass(frozen=True)
class LoadResult:
    location: str
    records: List[TleRecord]
    rejected: List[Rejection]
    statistics: Statistics


class LoadSession:
    """Coordinates one logical session of file/URL loads.

    At most one load is outstanding per session: starting a load supersedes
    the previous one, whose text is discarded when it arrives instead of being
    parsed.  A superseded load returns ``None``.  The latest completed result
    stays available through :attr:`result`.
    """

    def __init__(
        self,
        client: Optional[UrlSource] = None,
        parser: Callable[[str], ParseResult] = parse,
        aggregator: Callable[[List[TleRecord]], Statistics] = compute,
    ) -> None:
        self.client = client or UrlSource()
        self._parser = parser
        self._aggregator = aggregator
        self._lock = threading.Lock()
        self._generation = 0
        self._pending: Optional[int] = None
        self._result: Optional[LoadResult] = None

    @property
    def result(self) -> Optional[LoadResult]:
        with self._lock:
            return self._result

    @property
    def records(self) -> List[TleRecord]:
        result = self.result
        return list(result.records) if result else []

    @property
    def in_flight(self) -> bool:
        with self._lock:
            return self._pending is not None

    def cancel(self) -> None:
        """Supersede the outstanding load, if any."""

        with self._lock:
            if self._pending is not None:
                logger.info("load_cancelled", extra={"generation": self._pending})
            self._generation += 1
            self._pending = None

    def _begin(self) -> int:
        with self._lock:
            if self._pending is not None:
                logger.info("load_superseded", extra={"generation": self._pending})
            self._generation += 1
            self._pending = self._generation
            return self._generation

    def _is_current(self, token: int) -> bool:
        return self._pending == token

    def _complete(self, token: int, location: str, text: str) -> Optional[LoadResult]:
        with self._lock:
            if not self._is_current(token):
                logger.info("load_discarded", extra={"generation": token})
                return None
        records, rejected = self._parser(text)
        result = LoadResult(
            location=location,
            records=records,
            rejected=rejected,
            statistics=self._aggregator(records),
        )
        with self._lock:
            if not self._is_current(token):
                logger.info("load_discarded", extra={"generation": token})
                return None
            self._pending = None
            self._result = result
        return result

    def _fail(self, token: int, exc: SourceUnavailableError) -> None:
        with self._lock:
            current = self._is_current(token)
            if current:
                self._pending = None
        if not current:
            logger.info("load_failure_ignored", extra={"generation": token, "error": str(exc)})
            return
        logger.error("load_failed", extra={"error": str(exc)})
        raise exc

    def _run(self, location: str, read: Callable[[str], str]) -> Optional[LoadResult]:
        token = self._begin()
        with log_context(source=redact_url(location), generation=token):
            try:
                text = read(location)
            except SourceUnavailableError as exc:
                self._fail(token, exc)
                return None
            return self._complete(token, location, text)

    def load_file(self, path: str) -> Optional[LoadResult]:
        return self._run(path, read_file)

    def load_url(self, url: str) -> Optional[LoadResult]:
        return self._run(url, self.client.fetch)


__all__ = ["LoadResult", "LoadSession"]
