"""Process-wide default parser and the library entry points built on it."""

from __future__ import annotations

import asyncio
import threading
from collections.abc import Iterable
from pathlib import Path

import structlog

from .errors import LoadError
from .models import ParsedDomain, ReloadResult, SuffixSource
from .parser import DomainParser
from .sources import bundled_lines, default_lines, fetch_online_source

log = structlog.get_logger()

_parser: DomainParser | None = None
_parser_lock = threading.Lock()


def _build_default_parser() -> DomainParser:
    parser = DomainParser()
    source, lines = default_lines()
    result = parser.reload(lines, source)
    if not result and source != SuffixSource.BUNDLED:
        log.warning("falling_back_to_bundled_list", source=str(source), error=result.error)
        parser.reload(bundled_lines(), SuffixSource.BUNDLED)
    return parser


def get_parser() -> DomainParser:
    """Return the default parser, populated from the cache or bundled list."""
    global _parser
    if _parser is None:
        with _parser_lock:
            if _parser is None:
                _parser = _build_default_parser()
    return _parser


def reset_parser() -> None:
    """Drop the default parser; the next call to get_parser rebuilds it."""
    global _parser
    with _parser_lock:
        _parser = None


def try_parse(source: str) -> ParsedDomain | None:
    """Split ``source`` with the default parser, e.g. ``www.google.com``."""
    return get_parser().try_parse(source)


def reload(lines: Iterable[str] | None = None, source: str | None = None) -> ReloadResult:
    """Rebuild the default parser's suffixes from ``lines`` or the default source."""
    if lines is None:
        default_source, lines = default_lines()
        source = source or default_source
    return get_parser().reload(lines, source or SuffixSource.LINES)


def update_online_source(url: str | None = None, cache_file: Path | None = None) -> ReloadResult:
    """Download the canonical list, cache it locally and reload from it."""
    parser = get_parser()
    try:
        text = fetch_online_source(url=url, cache_file=cache_file)
    except LoadError as e:
        kept = len(parser.suffixes)
        log.warning("online_update_failed", error=str(e), kept=kept)
        return ReloadResult(ok=False, source=SuffixSource.REMOTE, count=kept, error=str(e))
    return parser.reload(text.splitlines(), SuffixSource.REMOTE)


async def update_online_source_async(
    url: str | None = None, cache_file: Path | None = None
) -> ReloadResult:
    return await asyncio.to_thread(update_online_source, url, cache_file)
