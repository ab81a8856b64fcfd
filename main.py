# =============================================================================
# main.py  —  Entry Point for the Weather/Time Agent
# =============================================================================
#
# HOW TO RUN:
#   cp .env.example .env      # then fill in ONE credential option
#   python main.py
#
# WHAT HAPPENS:
#   1. Credentials are resolved ONCE from the environment / .env file.
#      A ConfigurationError stops the process here, before any prompt.
#   2. The resolved config is exported for the google-genai client.
#   3. The Google ADK agent is built (agent/weather_time_agent.py).
#   4. An interactive session sends each line to the agent and prints the
#      tool calls, tool envelopes and the final reply.
#
# SETTINGS (environment):
#   AGENT_MODEL     model id (default gemini-2.0-flash; "provider/model"
#                   ids are routed through LiteLlm)
#   TOOL_TRANSPORT  "function" (default) or "mcp"
#   LOG_LEVEL       logging level (default INFO)
# =============================================================================

import asyncio
import logging
import os
import sys
from typing import Optional

from dotenv import load_dotenv

# .env must be loaded before anything reads the environment.
load_dotenv()

from google.adk.runners import Runner
from google.adk.sessions import InMemorySessionService
from google.genai import types

from agent.weather_time_agent import create_agent, create_default_definition
from core.credentials import describe, export_credentials, load_credentials
from core.errors import AgentDefinitionError, ConfigurationError

APP_NAME = "weather_time_app"
USER_ID = "demo_user"

logger = logging.getLogger("main")


async def run_agent(agent) -> None:
    """Run the agent interactively until the user quits."""
    session_service = InMemorySessionService()
    runner = Runner(agent=agent, app_name=APP_NAME, session_service=session_service)
    session = await session_service.create_session(app_name=APP_NAME, user_id=USER_ID)

    print("💬 Ask about the weather or time in New York.")
    print("   (Type 'quit' to exit)\n")
    print("-" * 70)

    while True:
        try:
            user_input = input("\n🧑 You: ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\n\n👋 Goodbye!")
            break

        if user_input.lower() in ("quit", "exit", "q"):
            print("\n👋 Goodbye!")
            break

        if not user_input:
            continue

        user_message = types.Content(role="user", parts=[types.Part(text=user_input)])

        final_response = ""
        async for event in runner.run_async(
            user_id=USER_ID,
            session_id=session.id,
            new_message=user_message,
        ):
            if not (event.content and event.content.parts):
                continue
            for part in event.content.parts:
                if part.function_call:
                    print(f"  🔧 Calling tool: {part.function_call.name}({dict(part.function_call.args or {})})")
                if part.function_response:
                    print(f"  📦 {part.function_response.name} → {part.function_response.response}")
                if part.text:
                    final_response = part.text

        if final_response:
            print(f"\n🤖 Agent: {final_response}")
        else:
            print("\n⚠️  No response generated. The agent may have encountered an error.")


def log_level(name: str) -> Optional[int]:
    """Numeric level for a level name such as "debug", or None if unknown."""
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else None


def main() -> int:
    level_name = os.environ.get("LOG_LEVEL", "INFO")
    level = log_level(level_name)
    logging.basicConfig(
        level=logging.INFO if level is None else level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    if level is None:
        logger.warning("Unknown LOG_LEVEL %r, using INFO", level_name)

    try:
        config = load_credentials()
    except ConfigurationError as exc:
        logger.error("Configuration error: %s", exc)
        print(f"\n❌ {exc}\n   Edit your .env file and choose exactly ONE option "
              f"(see .env.example).", file=sys.stderr)
        return 1
    export_credentials(config)

    try:
        definition = create_default_definition(os.environ.get("AGENT_MODEL"))
        agent = create_agent(definition, transport=os.environ.get("TOOL_TRANSPORT", "function"))
    except AgentDefinitionError as exc:
        logger.error("Agent definition error: %s", exc)
        return 1

    print("=" * 70)
    print(f"  WEATHER / TIME AGENT  ({definition.model_id}, {describe(config)})")
    print("=" * 70)
    asyncio.run(run_agent(agent))
    return 0


if __name__ == "__main__":
    sys.exit(main())
