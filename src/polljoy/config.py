"""Configuration for the polljoy connector."""

import logging
import os
from typing import Optional

DEFAULT_BACKEND_URL = "https://api.polljoy.com/3.0/poll/"

_TRUTHY = ("1", "true", "yes", "on")


def _env_flag(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUTHY


def _env_timeout() -> Optional[float]:
    value = os.environ.get("POLLJOY_TIMEOUT", "").strip()
    if not value:
        return None
    return float(value)


class Config:
    """Process-wide connector settings.

    Explicit arguments to ``init`` win over ``POLLJOY_*`` environment
    variables, which win over the defaults.
    """

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self.app_id: Optional[str] = None
        self.backend_url: str = DEFAULT_BACKEND_URL
        self.timeout: Optional[float] = None
        self.debug: bool = False
        self.enabled: bool = True
        self._initialized: bool = False

    def init(
        self,
        app_id: Optional[str] = None,
        backend_url: Optional[str] = None,
        timeout: Optional[float] = None,
        debug: Optional[bool] = None,
        enabled: Optional[bool] = None,
    ) -> "Config":
        self.app_id = app_id or os.environ.get("POLLJOY_APP_ID") or None
        url = backend_url or os.environ.get("POLLJOY_BACKEND_URL") or DEFAULT_BACKEND_URL
        self.backend_url = url if url.endswith("/") else url + "/"
        self.timeout = timeout if timeout is not None else _env_timeout()
        self.debug = debug if debug is not None else _env_flag("POLLJOY_DEBUG", False)
        self.enabled = enabled if enabled is not None else _env_flag("POLLJOY_ENABLED", True)
        self._initialized = True

        if self.debug:
            logging.getLogger("polljoy").setLevel(logging.DEBUG)
        return self

    def url_for(self, path: str) -> str:
        """Join a backend-relative path onto the configured base URL."""
        return self.backend_url + path.lstrip("/")


config = Config()
