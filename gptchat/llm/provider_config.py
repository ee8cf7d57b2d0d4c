"""Endpoint, model, and credential configuration for the LLM layer.

Architectural role:
    Centralizes the values `gptchat.llm.client` needs to form a request and the
    system preamble the transcript starts with.

Resolution:
    `load_dotenv()` runs at import time so a local `.env` file can supply any of
    the variables below. `load_config()` then reads the process environment at
    call time, so tests and callers can patch `os.environ` freely.

Relevant environment variables:
    - `OPENAI_API_KEY` (required)
    - `OPENAI_API_URL`
    - `MODEL_NAME`
    - `REQUEST_TIMEOUT` (seconds, `0` disables the timeout)
    - `LOG_LEVEL`

Failure behavior:
    A missing or blank API key raises `ConfigurationError`. There is no fallback
    credential source.
"""

import os
from dataclasses import dataclass, replace

from dotenv import load_dotenv

load_dotenv()


OPENAI_URL = "https://api.openai.com/v1/chat/completions"
DEFAULT_MODEL = "gpt-3.5-turbo"
DEFAULT_TIMEOUT = 120.0
DEFAULT_LOG_LEVEL = "WARNING"

# Fixed preamble stored as transcript[0] for every session.
SYSTEM_MESSAGE = "You are ChatGPT, a large language model trained by OpenAI."


class ConfigurationError(RuntimeError):
    """Raised when no valid request can be formed from the environment."""


@dataclass(frozen=True)
class ClientConfig:
    """Resolved runtime configuration for `CompletionClient`."""

    api_key: str
    api_url: str = OPENAI_URL
    model: str = DEFAULT_MODEL
    timeout: float | None = DEFAULT_TIMEOUT

    def with_model(self, model):
        """Return a copy using `model`, or `self` when `model` is empty."""
        if not model:
            return self
        return replace(self, model=model)


def _parse_timeout(raw):
    """Convert `REQUEST_TIMEOUT` text to seconds; `0` or blank means no timeout."""
    if raw is None or not raw.strip():
        return DEFAULT_TIMEOUT
    try:
        value = float(raw)
    except ValueError as err:
        raise ConfigurationError(f"REQUEST_TIMEOUT must be a number, got {raw!r}") from err
    if value < 0:
        raise ConfigurationError(f"REQUEST_TIMEOUT must not be negative, got {raw!r}")
    return value or None


def load_config(environ=None) -> ClientConfig:
    """Build a `ClientConfig` from the environment.

    Args:
        environ: Mapping to read instead of `os.environ`.

    Returns:
        Frozen configuration object.

    Raises:
        ConfigurationError: `OPENAI_API_KEY` is absent or blank, or
            `REQUEST_TIMEOUT` is not a non-negative number.
    """
    env = os.environ if environ is None else environ

    api_key = (env.get("OPENAI_API_KEY") or "").strip()
    if not api_key:
        raise ConfigurationError("OPENAI_API_KEY not found")

    return ClientConfig(
        api_key=api_key,
        api_url=(env.get("OPENAI_API_URL") or OPENAI_URL).strip(),
        model=(env.get("MODEL_NAME") or DEFAULT_MODEL).strip(),
        timeout=_parse_timeout(env.get("REQUEST_TIMEOUT")),
    )


def log_level(environ=None) -> str:
    """Return the configured logging level name, upper-cased."""
    env = os.environ if environ is None else environ
    return (env.get("LOG_LEVEL") or DEFAULT_LOG_LEVEL).strip().upper()
