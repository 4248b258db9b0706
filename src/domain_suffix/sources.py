"""Line sources for the public suffix list: bundled copy, local cache, remote."""

from __future__ import annotations

import os
import tempfile
from collections.abc import Iterable, Iterator
from pathlib import Path

import requests
import structlog

from .config import settings
from .errors import LoadError
from .models import SuffixSource

log = structlog.get_logger()

BUNDLED_LIST = Path(__file__).parent / "data" / "public_suffix_list.dat"


def read_lines(path: Path) -> Iterator[str]:
    """Yield lines of a UTF-8 text file; read errors surface while iterating."""
    with open(path, encoding="utf-8") as f:
        yield from f


def bundled_lines() -> Iterator[str]:
    """Yield lines of the suffix list shipped inside the package."""
    yield from read_lines(BUNDLED_LIST)


def default_lines(cache_file: Path | None = None) -> tuple[SuffixSource, Iterable[str]]:
    """Pick the local cache when it exists, otherwise the bundled list."""
    path = cache_file or settings.cache_file
    if path.is_file():
        log.debug("using_cached_suffix_list", path=str(path))
        return SuffixSource.CACHE, read_lines(path)
    log.debug("using_bundled_suffix_list", missing_cache=str(path))
    return SuffixSource.BUNDLED, bundled_lines()


def _write_atomic(path: Path, text: str) -> None:
    """Replace ``path`` with ``text``; an interrupted write leaves it untouched."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    except OSError as e:
        raise LoadError(f"cannot write cache file {path}: {e}") from e

    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
        os.replace(tmp_name, path)
    except OSError as e:
        Path(tmp_name).unlink(missing_ok=True)
        raise LoadError(f"cannot write cache file {path}: {e}") from e


def fetch_online_source(
    url: str | None = None,
    cache_file: Path | None = None,
    timeout: float | None = None,
    session: requests.Session | None = None,
) -> str:
    """Download the canonical list and persist it to the cache file.

    Returns the downloaded text. Raises LoadError on any network failure,
    non-2xx response, empty body, or failure to write the cache file.
    """
    url = url or settings.online_source_url
    path = cache_file or settings.cache_file
    timeout = timeout if timeout is not None else settings.fetch_timeout_seconds
    http = session or requests

    log.info("fetching_suffix_list", url=url, timeout=timeout)
    try:
        resp = http.get(url, timeout=timeout)
        resp.raise_for_status()
    except requests.RequestException as e:
        raise LoadError(f"cannot fetch {url}: {e}") from e

    text = resp.text
    if not text.strip():
        raise LoadError(f"empty suffix list from {url}")

    _write_atomic(path, text)
    log.info("suffix_list_cached", path=str(path), bytes=len(text))
    return text
