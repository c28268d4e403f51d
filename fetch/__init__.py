"""Acquisition of raw TLE text from files and URLs."""

from .service import LoadResult, LoadSession
from .sources import SourceUnavailableError, UrlSource, load_text, read_file

__all__ = ["LoadResult", "LoadSession", "SourceUnavailableError", "UrlSource", "load_text", "read_file"]
