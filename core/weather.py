# =============================================================================
# core/weather.py  —  The get_weather tool
# =============================================================================
#
# Returns a one-sentence weather report for a supported city.  The report
# is built from the fixed conditions in core/locales.py, so two calls with
# the same city produce byte-identical envelopes.
#
# Unsupported cities raise DomainUnsupported; Tool.invoke() turns that
# into {"status": "error", "error_message": "..."}.
# =============================================================================

import logging

from core.errors import DomainUnsupported
from core.locales import find_locale

logger = logging.getLogger(__name__)


def get_weather(city: str) -> str:
    """Retrieves the current weather report for a specified city.

    Args:
        city (str): The name of the city for which to retrieve the weather report.

    Returns:
        str: A one-sentence report of the conditions and temperature.

    Raises:
        DomainUnsupported: The city is not a supported locale.
    """
    locale = find_locale(city)
    if locale is None:
        logger.warning("Weather info for '%s' not available.", city)
        raise DomainUnsupported(f"Weather information for '{city}' is not available.")

    c = locale.conditions
    return (
        f"The weather in {locale.name} is {c.description} with a temperature of "
        f"{c.temp_c} degrees Celsius ({c.temp_f} degrees Fahrenheit)."
    )
