"""Success envelope and timestamp formatting shared by the endpoints"""

from datetime import datetime
from typing import Annotated, Any

from fastapi import Request
from pydantic import PlainSerializer


def to_rfc3339(value: datetime) -> str:
    """Render a stored (naive, server local) datetime with its UTC offset"""
    return value.astimezone().isoformat()


# Response field type: naive datetimes go out as RFC3339 in server local time
LocalDateTime = Annotated[
    datetime, PlainSerializer(to_rfc3339, return_type=str, when_used="json-unless-none")
]


def current_timestamp() -> str:
    """RFC3339 timestamp in server local time"""
    return datetime.now().astimezone().isoformat(timespec="seconds")


def success_envelope(request: Request, data: Any) -> dict:
    return {
        "data": data,
        "request_id": getattr(request.state, "request_id", None),
        "timestamp": current_timestamp(),
    }
