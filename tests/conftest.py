import sys
from datetime import datetime
from pathlib import Path

import pytest
from google.adk.models.base_llm import BaseLlm
from google.adk.models.llm_response import LlmResponse
from google.genai import types

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from core.registry import build_default_registry  # noqa: E402


class ScriptedLlm(BaseLlm):
    """
    Minimal stand-in for a Gemini model:
    first turn   -> one function call (call_name, call_args)
    after a tool -> a text reply echoing the tool's envelope text
    """

    model: str = "scripted"
    call_name: str = "get_weather"
    call_args: dict = {}

    async def generate_content_async(self, llm_request, stream=False):
        last = llm_request.contents[-1] if llm_request.contents else None
        responses = [p.function_response for p in (last.parts if last and last.parts else [])
                     if p.function_response]
        if responses:
            payload = responses[0].response or {}
            text = payload.get("report") or payload.get("error_message") or str(payload)
            part = types.Part(text=text)
        else:
            part = types.Part(function_call=types.FunctionCall(name=self.call_name, args=self.call_args))
        yield LlmResponse(content=types.Content(role="model", parts=[part]))


@pytest.fixture
def registry():
    return build_default_registry()


@pytest.fixture
def fixed_clock():
    """A clock that always reads 2025-01-15 12:30:45 in the requested zone."""

    def clock(tz):
        return datetime(2025, 1, 15, 12, 30, 45, tzinfo=tz)

    return clock


@pytest.fixture
def scripted_llm():
    """Factory: scripted_llm("get_weather", city="New York")."""

    def make(call_name, **call_args):
        return ScriptedLlm(call_name=call_name, call_args=call_args)

    return make
