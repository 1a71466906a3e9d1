"""Entry point for installing the polljoy connector into a web app."""

import logging
from typing import Any, Optional

from .config import config
from .middleware.flask import install_routes

logger = logging.getLogger(__name__)


class Connect:
    """Proxy between a Flask app and the polljoy backend.

    ``app_id`` defaults to the configured ``POLLJOY_APP_ID``. A request to
    ``url/<app_id>`` uses that id and makes it the default for later
    requests on this instance.
    """

    def __init__(self, app_id: Optional[str] = None) -> None:
        if not config._initialized:
            config.init()
        self.app_id = app_id or config.app_id

    def resolve_app_id(self, path_app_id: Optional[str]) -> Optional[str]:
        """Return the app id for one request, persisting a path override."""
        if path_app_id and path_app_id != self.app_id:
            logger.debug("polljoy app id switched to %s", path_app_id)
            self.app_id = path_app_id
        return self.app_id

    def create_endpoints(self, app: Any, url: str) -> None:
        """Install the polljoy routes at ``url`` on a Flask app or blueprint."""
        install_routes(app, url, self)


def init_app(app: Any, url: str, app_id: Optional[str] = None) -> Connect:
    """Create a Connect and install its routes in one call."""
    connector = Connect(app_id)
    connector.create_endpoints(app, url)
    return connector
