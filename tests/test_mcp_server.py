import asyncio
import logging
from pathlib import Path

import pytest
from fastmcp import Client

from agent.weather_time_agent import create_agent, create_default_definition
from tools import mcp_server

WEATHER_REPORT = (
    "The weather in New York is sunny with a temperature of 25 degrees "
    "Celsius (77 degrees Fahrenheit)."
)


def call_mcp(name, **args):
    """Call a tool on the server in-memory and return its structured result."""

    async def _call():
        async with Client(mcp_server.mcp) as client:
            return await client.call_tool(name, args)

    return asyncio.run(_call()).structured_content


def list_mcp_tools():
    async def _list():
        async with Client(mcp_server.mcp) as client:
            return await client.list_tools()

    return [tool.name for tool in asyncio.run(_list())]


# -----------------------------------------------------------------------------
# Server side
# -----------------------------------------------------------------------------
def test_server_registry_is_frozen():
    assert mcp_server.REGISTRY.frozen
    assert mcp_server.REGISTRY.names() == ["get_weather", "get_current_time"]


def test_dispatch_returns_wire_envelopes():
    assert mcp_server._dispatch("get_weather", city="new york") == {
        "status": "success",
        "report": WEATHER_REPORT,
    }
    assert mcp_server._dispatch("get_current_time", city="Paris") == {
        "status": "error",
        "error_message": "Sorry, I don't have timezone information for Paris.",
    }


def test_server_lists_registry_tools():
    assert list_mcp_tools() == ["get_weather", "get_current_time"]


def test_mcp_weather_success_and_error():
    assert call_mcp("get_weather", city="New York") == {"status": "success", "report": WEATHER_REPORT}
    assert call_mcp("get_weather", city="London") == {
        "status": "error",
        "error_message": "Weather information for 'London' is not available.",
    }


def test_mcp_time_success_and_error():
    result = call_mcp("get_current_time", city="NEW YORK")
    assert result["status"] == "success"
    assert result["report"].startswith("The current time in New York (America/New_York) is ")

    assert call_mcp("get_current_time", city="Tokyo") == {
        "status": "error",
        "error_message": "Sorry, I don't have timezone information for Tokyo.",
    }


# -----------------------------------------------------------------------------
# Agent side: MCP transport wiring
# -----------------------------------------------------------------------------
def test_create_agent_with_mcp_transport():
    from google.adk.tools.mcp_tool import MCPToolset

    agent = create_agent(create_default_definition(), transport="mcp")
    [toolset] = agent.tools
    assert isinstance(toolset, MCPToolset)
    assert toolset.tool_filter == ["get_weather", "get_current_time"]

    server_params = toolset._connection_params.server_params
    assert server_params.args == ["-m", "tools.mcp_server"]
    assert Path(server_params.cwd) == Path(__file__).resolve().parents[1]


@pytest.mark.parametrize("transport", ["function", "mcp"])
def test_both_transports_install_refusal_callback(transport):
    agent = create_agent(create_default_definition(), transport=transport)
    assert agent.before_tool_callback is not None


def test_envelope_log_line_carries_status(caplog):
    with caplog.at_level(logging.INFO, logger="mcp_server"):
        mcp_server._dispatch("get_weather", city="London")

    [call_line, envelope_line] = [r.getMessage() for r in caplog.records if r.name == "mcp_server"]
    assert "get_weather(city='London')" in call_line
    assert "[error]" in envelope_line
    assert mcp_server._YELLOW in envelope_line
