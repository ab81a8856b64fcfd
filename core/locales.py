# =============================================================================
# core/locales.py  —  The supported-locale table
# =============================================================================
#
# The agent answers for exactly the cities listed here.  Lookup is a
# case-insensitive EXACT match on the key: "New York", "new york" and
# "NEW YORK" all resolve; "NYC", "New York City" and " new york" do not.
#
# The weather figures are fixed sample data, not a live feed.
# =============================================================================

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Conditions:
    description: str                   # "sunny"
    temp_c: int
    temp_f: int


@dataclass(frozen=True)
class Locale:
    name: str                          # Display name used in reports
    timezone: str                      # IANA zone key, e.g. "America/New_York"
    conditions: Conditions


SUPPORTED_LOCALES: dict[str, Locale] = {
    "new york": Locale(
        name="New York",
        timezone="America/New_York",
        conditions=Conditions(description="sunny", temp_c=25, temp_f=77),
    ),
}


def find_locale(city: str) -> Optional[Locale]:
    """Return the Locale for ``city`` or None if it is not supported."""
    return SUPPORTED_LOCALES.get(city.lower())
