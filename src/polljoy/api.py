"""HTTP client for the polljoy backend."""

import logging
from typing import Any, Dict

import requests

from .config import config
from .errors import MalformedBackendResponse, TransportError

logger = logging.getLogger(__name__)


def post(path: str, form: Dict[str, str]) -> Any:
    """POST a form-encoded body to the backend and return the parsed JSON.

    Raises TransportError when the request fails or the backend answers
    with a non-2xx status, and MalformedBackendResponse when the body is
    not JSON. There is no retry.
    """
    url = config.url_for(path)
    logger.debug("POST %s fields=%s", url, sorted(form))

    try:
        response = requests.post(url, data=form, timeout=config.timeout)
    except requests.exceptions.RequestException as exc:
        logger.warning("polljoy backend unreachable: %s", exc)
        raise TransportError(f"Request to {path} failed: {exc}") from exc

    if not 200 <= response.status_code < 300:
        logger.warning("polljoy backend returned %s for %s", response.status_code, path)
        raise TransportError(
            f"Backend returned HTTP {response.status_code} for {path}",
            status_code=response.status_code,
        )

    try:
        return response.json()
    except ValueError as exc:
        logger.warning("polljoy backend sent non-JSON body for %s", path)
        raise MalformedBackendResponse(f"Invalid JSON from {path}: {exc}") from exc
