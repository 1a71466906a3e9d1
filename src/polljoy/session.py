"""Session registration and reuse.

A registered polljoy session is cached in the caller's per-user session
store together with the device id it was issued for. A register request
reuses the cached payload unless it names a different device, in which case
the cache is dropped and a new session is registered.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Protocol, Union

from flask import session as flask_session

from . import api
from .context import ClientContext
from .sanitize import sanitize_session
from .shaping import register_params

logger = logging.getLogger(__name__)

DEVICE_ID_KEY = "device_id"
CURRENT_SESSION_KEY = "current_session"


@dataclass
class SessionRecord:
    device_id: Optional[str] = None
    current_session: Optional[str] = None


class SessionStore(Protocol):
    """Persistence for one user's SessionRecord."""

    def load(self) -> SessionRecord: ...

    def save(self, record: SessionRecord) -> None: ...

    def invalidate(self) -> None: ...


class FlaskSessionStore:
    """SessionStore over ``flask.session`` of the current request."""

    def load(self) -> SessionRecord:
        return SessionRecord(
            device_id=flask_session.get(DEVICE_ID_KEY),
            current_session=flask_session.get(CURRENT_SESSION_KEY),
        )

    def save(self, record: SessionRecord) -> None:
        flask_session[DEVICE_ID_KEY] = record.device_id
        flask_session[CURRENT_SESSION_KEY] = record.current_session

    def invalidate(self) -> None:
        flask_session.pop(CURRENT_SESSION_KEY, None)


class MemorySessionStore:
    """SessionStore kept on the instance. Useful outside Flask and in tests."""

    def __init__(self, record: Optional[SessionRecord] = None) -> None:
        self.record = record or SessionRecord()

    def load(self) -> SessionRecord:
        return SessionRecord(self.record.device_id, self.record.current_session)

    def save(self, record: SessionRecord) -> None:
        self.record = SessionRecord(record.device_id, record.current_session)

    def invalidate(self) -> None:
        self.record.current_session = None


class SessionCoordinator:
    """Decides between reusing the cached session and registering a new one."""

    def __init__(self, store: SessionStore) -> None:
        self.store = store

    def stored_device_id(self) -> Optional[str]:
        return self.store.load().device_id

    def reusable_session(self, explicit_device_id: Optional[str]) -> Optional[str]:
        """Return the cached session payload if it may be reused.

        An explicit device id that differs from the stored one invalidates
        the cache first.
        """
        record = self.store.load()
        if explicit_device_id and explicit_device_id != record.device_id:
            if record.current_session:
                logger.info("Device changed, dropping cached polljoy session")
            self.store.invalidate()
            return None
        return record.current_session or None

    def remember(self, payload: Any, device_id: str) -> None:
        self.store.save(SessionRecord(device_id=device_id, current_session=json.dumps(payload)))

    def register(
        self, ctx: ClientContext, body: Mapping[str, Any]
    ) -> Union[str, Dict[str, Any]]:
        """Run the register operation.

        Returns the cached JSON string verbatim when the session is
        reusable, otherwise the sanitized payload of a fresh registration.
        Backend errors propagate and leave nothing stored.
        """
        explicit = str(body["deviceId"]) if body.get("deviceId") else None
        cached = self.reusable_session(explicit)
        if cached is not None:
            logger.info("Reusing cached polljoy session")
            return cached

        params = register_params(ctx, explicit)
        data = sanitize_session(api.post("registerSession.json", params))
        self.remember(data, params["deviceId"])
        logger.info("Registered polljoy session for app %s", ctx.app_id)
        return data
