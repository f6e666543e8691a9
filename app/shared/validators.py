"""Shared validation utilities"""

from datetime import datetime
from typing import Optional

# Accepted timestamp layouts, tried in order after RFC3339
TIMESTAMP_FORMATS = (
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d",
)


def validate_latitude(latitude: float) -> float:
    if latitude is None or not -90 <= latitude <= 90:
        raise ValueError("Latitude must be between -90 and 90")
    return latitude


def validate_longitude(longitude: float) -> float:
    if longitude is None or not -180 <= longitude <= 180:
        raise ValueError("Longitude must be between -180 and 180")
    return longitude


def validate_coordinates(latitude: float, longitude: float) -> tuple[float, float]:
    """
    Validate a latitude/longitude pair.

    Raises:
        ValueError: If either value is outside the WGS84 range
    """
    return validate_latitude(latitude), validate_longitude(longitude)


def require_reason(reason: Optional[str], message: str) -> str:
    """
    Return the stripped reason, or raise if it is missing or blank.

    Raises:
        ValueError: With ``message`` when no reason was given
    """
    if reason is None or not reason.strip():
        raise ValueError(message)
    return reason.strip()


def parse_timestamp(value) -> datetime:
    """
    Parse a timestamp sent as ``YYYY-MM-DD HH:MM:SS``, RFC3339 or ``YYYY-MM-DD``.

    Timezone-aware values are converted to server local time and made naive,
    matching how the store keeps shift windows.

    Raises:
        ValueError: If the value matches none of the accepted layouts
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        parsed = None
        try:
            # RFC3339 (with or without fractional seconds, "Z" suffix)
            if "T" in text:
                parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            parsed = None

        if parsed is None:
            for fmt in TIMESTAMP_FORMATS:
                try:
                    parsed = datetime.strptime(text, fmt)
                    break
                except ValueError:
                    continue

        if parsed is None:
            raise ValueError(f"Unrecognized timestamp: {value!r}")
    else:
        raise ValueError(f"Unrecognized timestamp: {value!r}")

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed
