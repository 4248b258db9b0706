"""Split hosts into subdomain, registrable domain and public suffix."""

from __future__ import annotations

import ipaddress
import threading
from collections.abc import Iterable
from urllib.parse import urlsplit

import structlog

from .errors import LoadError
from .models import ParsedDomain, ReloadResult, SuffixSource
from .suffix_set import SuffixSet

log = structlog.get_logger()

MAX_HOST_LENGTH = 253
MAX_LABEL_LENGTH = 63
_EXTRA_LABEL_CHARS = frozenset("-_")


def is_ip_literal(text: str) -> bool:
    """True for IPv4 or IPv6 textual addresses, with or without brackets."""
    if text.startswith("[") and text.endswith("]"):
        text = text[1:-1]
    try:
        ipaddress.ip_address(text)
    except ValueError:
        return False
    return True


def _valid_label(label: str) -> bool:
    if not label or len(label) > MAX_LABEL_LENGTH:
        return False
    return all(c.isalnum() or c in _EXTRA_LABEL_CHARS for c in label)


def extract_host(source: str) -> str | None:
    """Parse ``source`` as the host of an ``http://`` URL.

    Returns the lowercased host, or None when ``source`` is not a bare
    well-formed host (anything carrying userinfo, a port, a path, a query
    or a fragment is rejected).
    """
    try:
        parts = urlsplit(f"http://{source}")
        host = parts.hostname
    except ValueError:
        return None
    # urlsplit silently drops tabs and newlines, so compare against the input.
    if not host or parts.netloc != source or host != source.lower():
        return None
    if len(host) > MAX_HOST_LENGTH or is_ip_literal(host):
        return None
    if not all(_valid_label(label) for label in host.split(".")):
        return None
    return host


class DomainParser:
    """Matches hosts against a swappable SuffixSet.

    The active set is published by a single reference assignment, and each
    parse reads it once, so a concurrent reload is seen either entirely or
    not at all.
    """

    def __init__(self, suffixes: SuffixSet | None = None) -> None:
        self._suffixes = suffixes if suffixes is not None else SuffixSet.empty()
        self._reload_lock = threading.Lock()

    @property
    def suffixes(self) -> SuffixSet:
        return self._suffixes

    def try_parse(self, source: str) -> ParsedDomain | None:
        """Split ``source`` or return None if it is not a registrable host."""
        suffixes = self._suffixes
        text = source.strip()

        if is_ip_literal(text):
            return self._reject(text, "ip_literal")

        host = extract_host(text)
        if host is None:
            return self._reject(text, "invalid_host")

        labels = host.split(".")
        if len(labels) < 2:
            return self._reject(text, "single_label")

        if labels[-1] not in suffixes:
            return self._reject(text, "unknown_suffix")

        candidate = labels[-1]
        for label in reversed(labels[:-1]):
            extended = f"{label}.{candidate}"
            if candidate in suffixes and extended not in suffixes:
                suffix, registrable = candidate, extended
                break
            candidate = extended
        else:
            # Every right-anchored label sequence, the whole host included,
            # is a listed suffix.
            return self._reject(text, "is_public_suffix")

        index = text.lower().rfind(f".{registrable}")
        subdomain = text[:index] if index >= 0 else ""
        return ParsedDomain(subdomain=subdomain, registrable_domain=registrable, suffix=suffix)

    def reload(
        self, lines: Iterable[str], source: str = SuffixSource.LINES
    ) -> ReloadResult:
        """Rebuild the suffix set from ``lines`` and swap it in.

        On a read failure the current set stays active and the returned
        result carries the error.
        """
        with self._reload_lock:
            try:
                suffixes = SuffixSet.load(lines)
            except LoadError as e:
                kept = len(self._suffixes)
                log.warning("suffix_reload_failed", source=str(source), error=str(e), kept=kept)
                return ReloadResult(ok=False, source=source, count=kept, error=str(e))
            self._suffixes = suffixes

        if not suffixes:
            log.warning("suffix_set_empty", source=str(source))
        log.info("suffix_set_loaded", source=str(source), count=len(suffixes))
        return ReloadResult(ok=True, source=source, count=len(suffixes))

    @staticmethod
    def _reject(source: str, reason: str) -> None:
        log.debug("parse_rejected", source=source, reason=reason)
        return None
