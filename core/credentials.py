# =============================================================================
# core/credentials.py  —  Credential Resolver
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Decides HOW the model runtime reaches Gemini.  There are exactly two
#   ways, and exactly one of them must be configured:
#
#     Option 1 — Google AI Studio API key
#         GOOGLE_GENAI_USE_VERTEXAI="False"
#         GOOGLE_API_KEY="..."
#
#     Option 2 — Vertex AI on Google Cloud
#         GOOGLE_GENAI_USE_VERTEXAI="True"
#         GOOGLE_CLOUD_PROJECT="..."
#         GOOGLE_CLOUD_LOCATION="..."
#         GOOGLE_APPLICATION_CREDENTIALS="/path/key.json"   (optional)
#
#   Anything else (flag missing, required value missing, keys from both
#   options set at once) is a ConfigurationError.  No default mode is ever
#   guessed.
#
# LIFECYCLE:
#   main.py resolves the config ONCE at start-up and passes the resulting
#   value to export_credentials(), which hands it to the google-genai
#   client via the environment.  Nothing else reads these variables.
# =============================================================================

import logging
import os
from dataclasses import dataclass, field
from typing import ClassVar, Mapping, MutableMapping, Optional, Union

from dotenv import dotenv_values

from core.errors import ConfigurationError

logger = logging.getLogger(__name__)

USE_VERTEX_KEY = "GOOGLE_GENAI_USE_VERTEXAI"
API_KEY_KEY = "GOOGLE_API_KEY"
PROJECT_KEY = "GOOGLE_CLOUD_PROJECT"
LOCATION_KEY = "GOOGLE_CLOUD_LOCATION"
CREDENTIALS_PATH_KEY = "GOOGLE_APPLICATION_CREDENTIALS"

_VERTEX_KEYS = (PROJECT_KEY, LOCATION_KEY, CREDENTIALS_PATH_KEY)

_TRUE_VALUES = {"true", "1", "yes", "on"}
_FALSE_VALUES = {"false", "0", "no", "off"}


# -----------------------------------------------------------------------------
# The two variants
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class APIKeyMode:
    api_key: str = field(repr=False)   # Never printed in logs or tracebacks
    use_vertex: ClassVar[bool] = False

    def to_environment(self) -> dict[str, str]:
        return {USE_VERTEX_KEY: "False", API_KEY_KEY: self.api_key}


@dataclass(frozen=True)
class VertexMode:
    project_id: str
    location: str
    credentials_path: Optional[str] = None
    use_vertex: ClassVar[bool] = True

    def to_environment(self) -> dict[str, str]:
        env = {
            USE_VERTEX_KEY: "True",
            PROJECT_KEY: self.project_id,
            LOCATION_KEY: self.location,
        }
        if self.credentials_path:
            env[CREDENTIALS_PATH_KEY] = self.credentials_path
        return env


CredentialConfig = Union[APIKeyMode, VertexMode]


# -----------------------------------------------------------------------------
# Resolution
# -----------------------------------------------------------------------------
def _value(env: Mapping[str, str], key: str) -> Optional[str]:
    raw = env.get(key)
    if raw is None:
        return None
    raw = raw.strip()
    return raw or None


def _parse_flag(env: Mapping[str, str]) -> bool:
    raw = _value(env, USE_VERTEX_KEY)
    if raw is None:
        raise ConfigurationError(
            f"{USE_VERTEX_KEY} is not set; set it to \"False\" (API key) "
            f"or \"True\" (Vertex AI).",
            fields=(USE_VERTEX_KEY,),
        )
    lowered = raw.lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigurationError(
        f"{USE_VERTEX_KEY}={raw!r} is not a boolean; use \"True\" or \"False\".",
        fields=(USE_VERTEX_KEY,),
    )


def resolve_credentials(env: Mapping[str, str]) -> CredentialConfig:
    """Resolve exactly one credential mode from ``env``.

    Raises:
        ConfigurationError: naming the missing or conflicting key(s) in
            its ``fields`` attribute.
    """
    use_vertex = _parse_flag(env)
    api_key = _value(env, API_KEY_KEY)

    if use_vertex:
        if api_key:
            raise ConfigurationError(
                f"Ambiguous credentials: {API_KEY_KEY} is set but "
                f"{USE_VERTEX_KEY} selects Vertex AI.  Remove one of them.",
                fields=(API_KEY_KEY,),
            )
        missing = tuple(k for k in (PROJECT_KEY, LOCATION_KEY) if not _value(env, k))
        if missing:
            raise ConfigurationError(
                f"Vertex AI mode requires {', '.join(missing)}.",
                fields=missing,
            )
        return VertexMode(
            project_id=_value(env, PROJECT_KEY),
            location=_value(env, LOCATION_KEY),
            credentials_path=_value(env, CREDENTIALS_PATH_KEY),
        )

    conflicting = tuple(k for k in _VERTEX_KEYS if _value(env, k))
    if conflicting:
        raise ConfigurationError(
            f"Ambiguous credentials: {', '.join(conflicting)} set but "
            f"{USE_VERTEX_KEY} selects API-key mode.  Remove one of them.",
            fields=conflicting,
        )
    if not api_key:
        raise ConfigurationError(
            f"API-key mode requires {API_KEY_KEY}.",
            fields=(API_KEY_KEY,),
        )
    return APIKeyMode(api_key=api_key)


def load_credentials(
    dotenv_path: Optional[str] = None,
    environ: Optional[MutableMapping[str, str]] = None,
) -> CredentialConfig:
    """Merge ``.env`` into ``environ`` (default: the process environment), then resolve.

    Variables already present in ``environ`` take precedence over the file.
    """
    env = os.environ if environ is None else environ
    for key, value in dotenv_values(dotenv_path).items():
        if value is not None:
            env.setdefault(key, value)
    config = resolve_credentials(env)
    logger.info("Resolved credentials: %s", describe(config))
    return config


def export_credentials(
    config: CredentialConfig,
    environ: Optional[MutableMapping[str, str]] = None,
) -> None:
    """Publish ``config`` to the environment read by the google-genai client.

    Keys belonging to the other mode are removed so the client cannot
    pick up a stale mix of both.
    """
    env = os.environ if environ is None else environ
    if config.use_vertex:
        env.pop(API_KEY_KEY, None)
        if not config.credentials_path:
            env.pop(CREDENTIALS_PATH_KEY, None)
        elif not os.path.isfile(config.credentials_path):
            logger.warning("%s points to a missing file: %s",
                           CREDENTIALS_PATH_KEY, config.credentials_path)
    else:
        for key in _VERTEX_KEYS:
            env.pop(key, None)
    env.update(config.to_environment())


def describe(config: CredentialConfig) -> str:
    """A log-safe one-liner; never includes the API key."""
    if config.use_vertex:
        return f"Vertex AI (project={config.project_id}, location={config.location})"
    return "Google AI Studio API key"
