"""Per-request client context."""

from dataclasses import dataclass
from typing import Mapping, Optional, Union

from .utils.fingerprint import device_class, device_fingerprint, find_client_ip, os_token


@dataclass(frozen=True)
class ClientContext:
    """Facts about the calling device, plus the app id in effect for the request.

    Built once at dispatch time and never mutated, so a later change to the
    connector's default app id cannot leak into a request already in flight.
    """

    ip: Optional[str]
    user_agent: Optional[str]
    os_token: Union[str, bool]
    device_class: str
    device_id: str
    app_id: Optional[str]

    @classmethod
    def build(
        cls,
        headers: Mapping[str, str],
        remote_addr: Optional[str],
        app_id: Optional[str],
    ) -> "ClientContext":
        ip = find_client_ip(headers, remote_addr)
        user_agent = headers.get("User-Agent")
        return cls(
            ip=ip,
            user_agent=user_agent,
            os_token=os_token(user_agent),
            device_class=device_class(user_agent),
            device_id=device_fingerprint(ip, user_agent),
            app_id=app_id,
        )

