import re
from datetime import datetime

import pytest

from core import locales
from core.clock import get_current_time
from core.errors import DomainUnsupported
from core.locales import Conditions, Locale
from core.models import Failure, Success
from core.tool import ToolParameter, tool_from_function
from core.weather import get_weather

CASE_VARIANTS = ["New York", "new york", "NEW YORK", "nEw YoRk"]
UNSUPPORTED = ["London", "Paris", "NYC", "New York City", " new york", "york"]

TIMESTAMP = re.compile(r"is (\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}) ([A-Z]{3,4}[+-]\d{4})$")


# -----------------------------------------------------------------------------
# get_weather
# -----------------------------------------------------------------------------
@pytest.mark.parametrize("city", CASE_VARIANTS)
def test_weather_supported_city_case_insensitive(registry, city):
    env = registry.get("get_weather").invoke({"city": city})
    assert isinstance(env, Success)
    assert env.report == (
        "The weather in New York is sunny with a temperature of 25 degrees "
        "Celsius (77 degrees Fahrenheit)."
    )


@pytest.mark.parametrize("city", UNSUPPORTED)
def test_weather_unsupported_city_is_error_envelope(registry, city):
    env = registry.get("get_weather").invoke({"city": city})
    assert isinstance(env, Failure)
    assert env.error_message == f"Weather information for '{city}' is not available."
    assert city in env.error_message


def test_weather_is_idempotent(registry):
    tool = registry.get("get_weather")
    first = tool.invoke({"city": "New York"}).to_dict()
    second = tool.invoke({"city": "New York"}).to_dict()
    assert first == second


def test_weather_function_raises_domain_error_directly():
    with pytest.raises(DomainUnsupported):
        get_weather("London")


# -----------------------------------------------------------------------------
# get_current_time
# -----------------------------------------------------------------------------
def test_time_renders_in_city_zone(fixed_clock):
    report = get_current_time("new york", clock=fixed_clock)
    assert report == "The current time in New York (America/New_York) is 2025-01-15 12:30:45 EST-0500"


def test_time_summer_offset():
    report = get_current_time("New York", clock=lambda tz: datetime(2025, 7, 4, 9, 0, 0, tzinfo=tz))
    assert report.endswith("2025-07-04 09:00:00 EDT-0400")


@pytest.mark.parametrize("city", CASE_VARIANTS)
def test_time_supported_city_succeeds(registry, city):
    env = registry.get("get_current_time").invoke({"city": city})
    assert isinstance(env, Success)
    assert env.report.startswith("The current time in New York (America/New_York) is ")
    assert TIMESTAMP.search(env.report)


@pytest.mark.parametrize("city", UNSUPPORTED)
def test_time_unsupported_city_is_error_envelope(registry, city):
    env = registry.get("get_current_time").invoke({"city": city})
    assert isinstance(env, Failure)
    assert env.error_message == f"Sorry, I don't have timezone information for {city}."


def test_time_calls_differ_only_in_timestamp(registry):
    tool = registry.get("get_current_time")
    first = TIMESTAMP.search(tool.invoke({"city": "New York"}).report)
    second = TIMESTAMP.search(tool.invoke({"city": "New York"}).report)
    assert first.group(2) == second.group(2)
    assert first.string[: first.start()] == second.string[: second.start()]


def test_time_bad_zone_becomes_lookup_error_envelope(monkeypatch, registry):
    monkeypatch.setitem(
        locales.SUPPORTED_LOCALES,
        "new york",
        Locale(name="New York", timezone="Mars/Olympus_Mons",
               conditions=Conditions("sunny", 25, 77)),
    )
    env = registry.get("get_current_time").invoke({"city": "New York"})
    assert isinstance(env, Failure)
    assert env.error_message.startswith("Error getting time for New York: ")
    assert "Mars/Olympus_Mons" in env.error_message


# -----------------------------------------------------------------------------
# Tool boundary: argument checks
# -----------------------------------------------------------------------------
@pytest.mark.parametrize("args", [{}, {"city": ""}, {"city": "   "}, {"city": None}, {"city": 42}])
def test_invalid_city_argument_is_error_envelope(registry, args):
    env = registry.get("get_weather").invoke(args)
    assert isinstance(env, Failure)
    assert "'city'" in env.error_message


def test_unexpected_argument_is_error_envelope(registry):
    env = registry.get("get_weather").invoke({"city": "New York", "units": "metric"})
    assert isinstance(env, Failure)
    assert "units" in env.error_message


def test_tool_from_function_schema_and_declaration(registry):
    tool = registry.get("get_current_time")
    # The injectable clock has a default and is not part of the schema.
    assert list(tool.argument_schema) == ["city"]
    decl = tool.declaration()
    assert decl["name"] == "get_current_time"
    assert decl["parameter"]["name"] == "city"
    assert decl["parameter"]["type"] == "string"
    assert decl["docstring"].startswith("Returns the current time in a specified city.")


def test_tool_from_function_uses_given_descriptions():
    def echo(text):
        """Echo the text."""
        return text

    tool = tool_from_function(echo, text="What to echo.")
    assert tool.parameters == (ToolParameter(name="text", description="What to echo."),)
    assert tool.invoke({"text": "hi"}) == Success("hi")


@pytest.mark.parametrize("name", ["get_weather", "get_current_time"])
def test_declared_docstring_describes_report_and_failure(registry, name):
    doc = registry.get(name).declaration()["docstring"]
    assert "Returns:\n    str:" in doc
    assert "DomainUnsupported" in doc
    assert "dict" not in doc
