"""Request-context helpers derived from the hosting platform's headers."""

from datetime import datetime, tzinfo
from typing import Mapping, Optional
from urllib.parse import quote, unquote
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

REQUEST_ID_HEADER = "x-vercel-id"
COUNTRY_HEADER = "x-vercel-ip-country"
REGION_HEADER = "x-vercel-ip-country-region"
CITY_HEADER = "x-vercel-ip-city"
TIMEZONE_HEADER = "x-vercel-ip-timezone"

DEFAULT_REQUEST_ID = "local"
UNKNOWN_LOCATION = "unknown"

# characters encodeURIComponent leaves alone, besides alphanumerics
_URI_COMPONENT_SAFE = "-_.!~*'()"


def request_id(headers: Mapping[str, str]) -> str:
    return headers.get(REQUEST_ID_HEADER) or DEFAULT_REQUEST_ID


def location(country: Optional[str], region: Optional[str], city: Optional[str]) -> str:
    """
    Human readable caller location, e.g. ``"San Francisco, CA, US"``.

    The platform percent-encodes the city name, so it is decoded here.
    Any missing part makes the whole location ``"unknown"``.
    """
    if not country or not region or not city:
        return UNKNOWN_LOCATION
    return f"{unquote(city)}, {region}, {country}"


def resolve_timezone(name: Optional[str]) -> Optional[tzinfo]:
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return None


def current_time(timezone_name: Optional[str] = None, now: Optional[datetime] = None) -> str:
    """
    Render a moment the way ``Date.toLocaleString("en-US")`` does,
    e.g. ``"10/19/2026, 3:04:05 PM"``.

    Falls back to the host's local zone when the name is missing or unknown.
    """
    now = now or datetime.now().astimezone()
    zone = resolve_timezone(timezone_name)
    moment = now.astimezone(zone) if zone else now.astimezone()

    hour = moment.hour % 12 or 12
    meridiem = "AM" if moment.hour < 12 else "PM"
    return (
        f"{moment.month}/{moment.day}/{moment.year}, "
        f"{hour}:{moment.minute:02d}:{moment.second:02d} {meridiem}"
    )


def location_from_headers(headers: Mapping[str, str]) -> str:
    return location(
        headers.get(COUNTRY_HEADER),
        headers.get(REGION_HEADER),
        headers.get(CITY_HEADER),
    )


def time_from_headers(headers: Mapping[str, str], now: Optional[datetime] = None) -> str:
    return current_time(headers.get(TIMEZONE_HEADER), now=now)


def encode_header_value(text: str) -> str:
    """Percent-encode ``text`` with ``encodeURIComponent`` rules so it is ASCII and header safe."""
    return quote(text, safe=_URI_COMPONENT_SAFE)
