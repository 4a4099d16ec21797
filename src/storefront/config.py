"""
Storefront configuration.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Dict, Any

from common.exceptions import InvalidConfigError, MissingConfigError

from . import __version__

DEFAULT_CATALOG_URL = "https://memeitizer.com/appstore/api/index.php"


@dataclass
class StoreConfig:
    """Settings for one storefront session."""
    catalog_url: str = DEFAULT_CATALOG_URL
    display_delay: float = 0.8      # seconds the loading indicator stays up
    request_timeout: float = 15.0   # seconds, enforced by the transport
    user_agent: str = f"storefront/{__version__}"

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """
        Check field values.

        Raises:
            MissingConfigError: If the catalog URL is empty
            InvalidConfigError: If a value is out of range
        """
        if not self.catalog_url:
            raise MissingConfigError("catalog_url")
        if not self.catalog_url.startswith(("http://", "https://")):
            raise InvalidConfigError("catalog_url", self.catalog_url, "must be an http(s) URL")
        if self.display_delay < 0:
            raise InvalidConfigError("display_delay", self.display_delay, "must not be negative")
        if self.request_timeout <= 0:
            raise InvalidConfigError("request_timeout", self.request_timeout, "must be positive")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StoreConfig":
        """Create from dictionary, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        for key in data:
            if key not in known:
                raise InvalidConfigError(key, data[key], "unknown setting")
        return cls(**data)
