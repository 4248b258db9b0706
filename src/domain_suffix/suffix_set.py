"""Public suffix set built from the line-based public_suffix_list.dat format."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

import structlog

from .errors import LoadError

log = structlog.get_logger()

COMMENT_PREFIX = "/"


class SuffixSet:
    """Immutable set of literal suffix entries.

    Entries are matched exactly and case-sensitively as loaded. Wildcard
    (``*.ck``) and exception (``!www.ck``) rules are stored as plain text.
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Iterable[str] = ()) -> None:
        self._entries = frozenset(entries)

    @classmethod
    def empty(cls) -> SuffixSet:
        return cls()

    @classmethod
    def load(cls, lines: Iterable[str]) -> SuffixSet:
        """Build a set from raw list lines, skipping blanks and comments.

        ``lines`` may be a lazy producer; it is drained to completion or to
        the first error raised while draining it, which becomes ``LoadError``.
        """
        entries: set[str] = set()
        try:
            for line in lines:
                suffix = line.strip()
                if not suffix or suffix.startswith(COMMENT_PREFIX):
                    continue
                entries.add(suffix)
        except Exception as e:
            raise LoadError(f"cannot read suffix lines: {e}") from e
        log.debug("suffix_set_built", count=len(entries))
        return cls(entries)

    def contains(self, suffix: str) -> bool:
        return suffix in self._entries

    def __contains__(self, suffix: object) -> bool:
        return suffix in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SuffixSet):
            return NotImplemented
        return self._entries == other._entries

    def __hash__(self) -> int:
        return hash(self._entries)

    def __repr__(self) -> str:
        return f"SuffixSet(<{len(self._entries)} entries>)"
