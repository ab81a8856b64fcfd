# =============================================================================
# core/clock.py  —  The get_current_time tool
# =============================================================================
#
# Reads the process clock and the IANA timezone database (zoneinfo, backed
# by the tzdata package where the OS ships no zone files) and renders the
# time in the CITY'S zone:
#
#     YYYY-MM-DD HH:MM:SS <tz-abbrev><tz-offset>
#     e.g. "2025-01-15 07:30:00 EST-0500"
#
# Never UTC, never the host's local zone.
#
# FAILURE MODES (both become error envelopes, never exceptions):
#   - city not supported          → DomainUnsupported
#   - zone key missing or invalid → LookupFailure, carrying the cause text
# =============================================================================

import logging
from datetime import datetime, tzinfo
from typing import Callable
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from core.errors import DomainUnsupported, LookupFailure
from core.locales import find_locale

logger = logging.getLogger(__name__)

TIME_FORMAT = "%Y-%m-%d %H:%M:%S %Z%z"


def get_current_time(city: str, clock: Callable[[tzinfo], datetime] = datetime.now) -> str:
    """Returns the current time in a specified city.

    Args:
        city (str): The name of the city for which to retrieve the current time.
        clock: Called with the city's tzinfo to read the time; defaults to
            datetime.now.

    Returns:
        str: The time in the city's own zone, as "YYYY-MM-DD HH:MM:SS TZ+hhmm".

    Raises:
        DomainUnsupported: The city is not a supported locale.
        LookupFailure: The city's timezone could not be loaded.
    """
    locale = find_locale(city)
    if locale is None:
        logger.warning("Timezone info for '%s' not available.", city)
        raise DomainUnsupported(f"Sorry, I don't have timezone information for {city}.")

    try:
        tz = ZoneInfo(locale.timezone)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        logger.error("Error in get_current_time for %s: %s", city, exc, exc_info=True)
        raise LookupFailure(f"Error getting time for {city}: {exc}") from exc

    now = clock(tz)
    return f"The current time in {locale.name} ({locale.timezone}) is {now.strftime(TIME_FORMAT)}"
