"""Outgoing parameter sets for the three backend operations."""

from typing import Any, Dict, Mapping, Optional
from urllib.parse import quote

from .context import ClientContext
from .errors import MissingResponseToken

SMARTGET_DEFAULTS = {
    "userType": "Non-Pay",
    "appVersion": "",
    "deviceId": "",
    "level": "",
    "sessionCount": "",
    "timeSinceInstall": "",
    "tags": "",
}

# Blank values for these are dropped so the backend applies its own default.
SMARTGET_OPTIONAL = ("appVersion", "level", "sessionCount", "timeSinceInstall", "tags")


def _form(params: Mapping[str, Any]) -> Dict[str, str]:
    """Stringify values for form encoding, dropping None and False."""
    form = {}
    for key, value in params.items():
        if value is None or value is False:
            continue
        form[key] = value if isinstance(value, str) else str(value)
    return form


def _fill_device_id(
    params: Dict[str, Any], ctx: ClientContext, stored_device_id: Optional[str]
) -> None:
    if not params.get("deviceId"):
        params["deviceId"] = stored_device_id or ctx.device_id


def _apply_app_id(params: Dict[str, Any], ctx: ClientContext) -> None:
    if ctx.app_id:
        params["appId"] = ctx.app_id


def register_params(ctx: ClientContext, explicit_device_id: Optional[str] = None) -> Dict[str, str]:
    """Build the registerSession body; an explicit device id replaces the fingerprint."""
    params = {
        "appId": ctx.app_id,
        "deviceId": ctx.device_id,
        "deviceModel": "web",
        "osVersion": ctx.os_token,
    }
    if explicit_device_id:
        params["deviceId"] = explicit_device_id
    return _form(params)


def smartget_params(
    ctx: ClientContext, body: Mapping[str, Any], stored_device_id: Optional[str]
) -> Dict[str, str]:
    """Build the smartget body from the client fields, defaults and device facts."""
    params = dict(body)
    for key, default in SMARTGET_DEFAULTS.items():
        if not params.get(key):
            params[key] = default

    params.update(
        deviceModel=ctx.device_class,
        platform="web",
        osVersion=ctx.os_token,
    )

    for key in SMARTGET_OPTIONAL:
        value = params.get(key)
        if isinstance(value, str) and value and not value.strip():
            del params[key]

    _fill_device_id(params, ctx, stored_device_id)
    _apply_app_id(params, ctx)
    return _form(params)


def response_params(
    ctx: ClientContext, body: Mapping[str, Any], stored_device_id: Optional[str]
) -> Dict[str, str]:
    """Build the response body, filling in a missing device id."""
    params = dict(body)
    _fill_device_id(params, ctx, stored_device_id)
    _apply_app_id(params, ctx)
    return _form(params)


def response_path(token: Optional[str]) -> str:
    """Backend path for submitting an answer to the poll identified by token."""
    if not token:
        raise MissingResponseToken("response submission requires a token")
    return f"response/{quote(token, safe='')}.json"
