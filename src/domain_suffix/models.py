from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class SuffixSource(StrEnum):
    BUNDLED = "bundled"
    CACHE = "cache"
    REMOTE = "remote"
    LINES = "lines"


class ParsedDomain(BaseModel):
    """A host split into subdomain, registrable domain and public suffix."""

    model_config = ConfigDict(frozen=True)

    subdomain: str = ""
    registrable_domain: str = Field(min_length=1)
    suffix: str = Field(min_length=1)

    @property
    def fqdn(self) -> str:
        if self.subdomain:
            return f"{self.subdomain}.{self.registrable_domain}"
        return self.registrable_domain


class ReloadResult(BaseModel):
    """Outcome of rebuilding a parser's suffix set."""

    ok: bool
    source: str
    count: int = 0
    error: str | None = None

    def __bool__(self) -> bool:
        return self.ok
