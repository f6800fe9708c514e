"""Helpers for reading HTTP responses."""

from datetime import datetime, timezone
from email.utils import format_datetime, parsedate_to_datetime
from typing import Optional

import httpx


def format_http_date(value: datetime) -> str:
    """Formats a timestamp as an RFC 7231 HTTP-date."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return format_datetime(value.astimezone(timezone.utc), usegmt=True)


def parse_date_header(response: httpx.Response, name: str) -> Optional[datetime]:
    """Returns a date header as an aware datetime or None if missing or malformed."""
    value = response.headers.get(name)
    if not value:
        return None
    try:
        return parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None


def request_url(response: httpx.Response) -> Optional[str]:
    """Returns the URL the response answers, if the response is bound to a request."""
    try:
        return str(response.request.url)
    except RuntimeError:
        return None


def process_error(response: httpx.Response) -> str:
    """Builds a diagnostic message from an unexpected response."""
    message = f"{response.status_code} {response.reason_phrase} for {request_url(response)}"
    body = response.text
    if body:
        message += f": {body}"
    return message


def utc_now() -> datetime:
    """Current time source used where the server supplies no timestamp."""
    return datetime.now(timezone.utc)
