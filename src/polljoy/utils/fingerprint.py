"""Device identification from request metadata.

The fingerprint is the raw User-Agent followed by SHA1(ip) in hex, which is
what the polljoy backend expects as a web ``deviceId``.
"""

import hashlib
import re
from typing import Mapping, Optional, Union

IP_HEADER = "X-Appengine-User-Ip"
MOBILE_MARKERS = ("iPad", "iPhone", "Android")

_OS_PATTERN = re.compile(r"\(([^)]+)\)")


def find_client_ip(headers: Mapping[str, str], remote_addr: Optional[str]) -> Optional[str]:
    """Resolve the client IP: App Engine header first, then the socket peer.

    Returns None when neither is available.
    """
    wanted = IP_HEADER.lower()
    for name, value in headers.items():
        if name.lower() == wanted and value:
            return value
    return remote_addr or None


def device_fingerprint(ip: Optional[str], user_agent: Optional[str]) -> str:
    """Compute the device id for an IP and User-Agent.

    A missing IP hashes the empty string, so the result stays stable.
    """
    digest = hashlib.sha1((ip or "").encode()).hexdigest()
    return (user_agent or "") + digest


def device_class(user_agent: Optional[str]) -> str:
    """Classify a User-Agent as ``mobile`` or ``desktop``."""
    agent = user_agent or ""
    if any(marker in agent for marker in MOBILE_MARKERS):
        return "mobile"
    return "desktop"


def os_token(user_agent: Optional[str]) -> Union[str, bool]:
    """Return the first parenthesized group of the User-Agent, or False."""
    match = _OS_PATTERN.search(user_agent or "")
    if match:
        return match.group(1)
    return False
