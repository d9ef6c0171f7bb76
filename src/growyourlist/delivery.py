"""Delivery time preference for new subscribers."""

from __future__ import annotations

import logging
from datetime import datetime, timezone as dt_timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .models import DeliveryTimePreference

logger = logging.getLogger(__name__)

DEFAULT_TIMEZONE = "America/Vancouver"


def generate_delivery_time_preference(
    timezone: str | None = None,
    *,
    default_timezone: str = DEFAULT_TIMEZONE,
    now: datetime | None = None,
) -> DeliveryTimePreference:
    """Resolve the current hour and minute in the subscriber's timezone.

    An unknown or malformed ``timezone`` never raises: the default zone is used
    instead, a warning is logged and the result has ``honored=False``.

    Args:
        timezone: IANA zone name such as "Europe/Paris". Empty uses the default.
        default_timezone: Zone used when ``timezone`` is empty or invalid.
        now: Aware datetime to convert. Defaults to the current time.

    Returns:
        The local hour/minute and the zone actually used.
    """
    if now is None:
        now = datetime.now(dt_timezone.utc)

    honored = True
    zone = None
    if timezone:
        zone = load_zone(timezone)
        if zone is None:
            logger.warning(
                "Unknown timezone %r, falling back to %s", timezone, default_timezone
            )
            honored = False
    if zone is None:
        zone = ZoneInfo(default_timezone)

    local = now.astimezone(zone)
    return DeliveryTimePreference(
        hour=local.hour,
        minute=local.minute,
        timezone=zone.key,
        honored=honored,
    )


def load_zone(name: object) -> ZoneInfo | None:
    """Return the named zone, or None if it is unknown or malformed."""
    if not isinstance(name, str):
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        return None
