"""Redaction of backend responses before they reach the browser."""

from typing import Any


def sanitize_session(data: Any) -> Any:
    """Drop the backend's internal app id from a ``session`` object."""
    if isinstance(data, dict):
        session = data.get("session")
        if isinstance(session, dict):
            session.pop("appId", None)
    return data


def sanitize_polls(data: Any) -> Any:
    """Drop the session app id and every ``PollRequest.appId`` of a smartget reply."""
    data = sanitize_session(data)
    if not isinstance(data, dict):
        return data

    polls = data.get("polls")
    if isinstance(polls, dict):
        entries = [polls[key] for key in list(polls)]
    elif isinstance(polls, list):
        entries = list(polls)
    else:
        return data

    for entry in entries:
        if isinstance(entry, dict):
            request = entry.get("PollRequest")
            if isinstance(request, dict):
                request.pop("appId", None)
    return data
