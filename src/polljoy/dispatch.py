"""Selection and execution of the proxied backend operation."""

import enum
import logging
from typing import Any, Mapping, Optional

from . import api
from .context import ClientContext
from .sanitize import sanitize_polls
from .session import SessionCoordinator
from .shaping import response_params, response_path, smartget_params

logger = logging.getLogger(__name__)


class Operation(enum.Enum):
    REGISTER = "register"
    SMARTGET = "sg"
    RESPONSE = "response"


# Checked in order; the first marker present wins.
OPERATION_PRIORITY = (Operation.REGISTER, Operation.SMARTGET, Operation.RESPONSE)


def select_operation(args: Mapping[str, Any]) -> Optional[Operation]:
    """Pick the operation named by the query markers, or None for a no-op."""
    for operation in OPERATION_PRIORITY:
        if args.get(operation.value):
            return operation
    return None


class OperationDispatcher:
    """Runs one operation for a request against a session store."""

    def __init__(self, coordinator: SessionCoordinator) -> None:
        self.coordinator = coordinator

    def dispatch(
        self,
        ctx: ClientContext,
        args: Mapping[str, Any],
        body: Mapping[str, Any],
    ) -> Any:
        """Return the payload for the client, or None when no marker is present."""
        operation = select_operation(args)
        logger.debug("polljoy operation: %s", operation.value if operation else "none")

        if operation is Operation.REGISTER:
            return self.coordinator.register(ctx, body)
        if operation is Operation.SMARTGET:
            return self.smartget(ctx, body)
        if operation is Operation.RESPONSE:
            return self.respond(ctx, body, args.get("token"))
        return None

    def smartget(self, ctx: ClientContext, body: Mapping[str, Any]) -> Any:
        params = smartget_params(ctx, body, self.coordinator.stored_device_id())
        return sanitize_polls(api.post("smartget.json", params))

    def respond(self, ctx: ClientContext, body: Mapping[str, Any], token: Optional[str]) -> Any:
        path = response_path(token)
        params = response_params(ctx, body, self.coordinator.stored_device_id())
        return api.post(path, params)
