"""polljoy connector for Flask applications."""

from .config import config
from .connect import Connect, init_app
from .errors import MalformedBackendResponse, MissingResponseToken, PolljoyError, TransportError

__version__ = "0.1.0"

__all__ = [
    "Connect",
    "MalformedBackendResponse",
    "MissingResponseToken",
    "PolljoyError",
    "TransportError",
    "config",
    "init",
    "init_app",
]


def init(**kwargs):
    """Configure the connector. See ``polljoy.config.Config.init``."""
    return config.init(**kwargs)
