"""Flask routes for the polljoy connector."""

import logging
from typing import TYPE_CHECKING, Any, Dict, Optional

from flask import Response, jsonify, request

from ..config import config
from ..context import ClientContext
from ..dispatch import OperationDispatcher
from ..errors import MalformedBackendResponse, MissingResponseToken, TransportError
from ..session import FlaskSessionStore, SessionCoordinator

if TYPE_CHECKING:
    from ..connect import Connect

logger = logging.getLogger(__name__)


def install_routes(app: Any, url: str, connector: "Connect") -> None:
    """Install ``POST url`` and ``POST url/<app_id>`` on a Flask app or blueprint."""
    base = url.rstrip("/") or "/"
    endpoint = "polljoy" + base.replace("/", "_")

    def polljoy_endpoint(app_id: Optional[str] = None) -> Response:
        if _should_skip():
            return _acknowledge()

        ctx = ClientContext.build(
            request.headers, request.remote_addr, connector.resolve_app_id(app_id)
        )

        dispatcher = OperationDispatcher(SessionCoordinator(FlaskSessionStore()))
        try:
            result = dispatcher.dispatch(ctx, request.args, _get_body())
        except MissingResponseToken as exc:
            return _error(exc, 400)
        except (TransportError, MalformedBackendResponse) as exc:
            logger.warning("polljoy request failed: %s", exc)
            return _error(exc, 500)

        if result is None:
            return _acknowledge()
        if isinstance(result, str):
            return Response(result, mimetype="application/json")
        return jsonify(result)

    app.add_url_rule(base, endpoint, polljoy_endpoint, methods=["POST"])
    app.add_url_rule(
        base.rstrip("/") + "/<app_id>",
        endpoint + "_app",
        polljoy_endpoint,
        methods=["POST"],
    )


def _should_skip() -> bool:
    """Check if the connector is switched off."""
    return config._initialized and not config.enabled


def _get_body() -> Dict[str, Any]:
    """Get the request body from JSON or form data."""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()


def _acknowledge() -> Response:
    return jsonify(ok=True)


def _error(exc: Exception, status: int) -> Response:
    response = jsonify(error=str(exc))
    response.status_code = status
    return response
