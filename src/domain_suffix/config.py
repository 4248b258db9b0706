from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from .yaml_config import get_defaults

_defaults = get_defaults()

DEFAULT_ONLINE_SOURCE_URL = "https://publicsuffix.org/list/public_suffix_list.dat"
DEFAULT_CACHE_FILE = Path.home() / ".cache" / "domain_suffix" / "public_suffix_list.dat"


class Settings(BaseSettings):
    model_config = {"env_prefix": "DOMAIN_SUFFIX_"}

    # Remote list
    online_source_url: str = _defaults.get("online_source_url", DEFAULT_ONLINE_SOURCE_URL)
    fetch_timeout_seconds: float = _defaults.get("fetch_timeout_seconds", 30)

    # Local cache, preferred over the bundled list when present
    cache_file: Path = Field(
        default=_defaults.get("cache_file", DEFAULT_CACHE_FILE),
        validate_default=True,
    )

    @field_validator("cache_file", mode="after")
    @classmethod
    def expand_user(cls, v: Path) -> Path:
        return v.expanduser()


settings = Settings()
