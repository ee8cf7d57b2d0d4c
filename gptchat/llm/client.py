"""Chat-completions transport client.

Architectural role:
    Executes one HTTP request per conversation turn against the configured
    OpenAI-compatible endpoint and maps the response body to a single `Message`.

Model invocation flow:
    `conversation.run_once` -> `CompletionClient.complete(transcript)` ->
    `complete(...)` -> `POST {model, messages}` -> parsed `Message`.

Retry behavior:
    No retry loop is implemented. Each call is attempted once, bounded by the
    configured timeout (120s unless overridden).

Failure handling model:
    - Network, TLS, and timeout failures raise `TransportError`.
    - Bodies that are not JSON or do not match `ChatResponse` raise `ParseError`
      after the raw body is logged for operator debugging.
    - A well-formed response with an empty `choices` list is not an error; it
      yields `FALLBACK_REPLY`.
"""

import logging

import requests
from pydantic import ValidationError

from gptchat.llm.messages import ChatRequest, ChatResponse, Message
from gptchat.llm.provider_config import DEFAULT_TIMEOUT, ClientConfig


logger = logging.getLogger(__name__)


FALLBACK_REPLY = Message(role="assistant", content="I don't have an answer for that.")
PARSE_ERROR_MESSAGE = "Error parsing the API response"


class CompletionError(Exception):
    """Base class for non-fatal completion failures."""


class TransportError(CompletionError):
    """The HTTP exchange itself failed."""

    def __init__(self, details):
        super().__init__(details)
        self.details = details

    def __str__(self):
        return f"Transport error: {self.details}"


class ParseError(CompletionError):
    """The response body did not match the expected schema."""

    def __init__(self, message=PARSE_ERROR_MESSAGE, raw_body=""):
        super().__init__(message)
        self.message = message
        self.raw_body = raw_body

    def __str__(self):
        return f"Parse error: {self.message}"


def build_request(model, transcript) -> dict:
    """Serialize `model` and a snapshot of `transcript` into the request body."""
    request = ChatRequest(model=model, messages=list(transcript))
    return request.model_dump()


def parse_response(raw_body: str) -> Message:
    """Map a raw response body to the reply message.

    Raises:
        ParseError: Body is not JSON or does not match `ChatResponse`. The raw
            body is logged unchanged before raising.
    """
    try:
        response = ChatResponse.model_validate_json(raw_body)
    except ValidationError as err:
        logger.error("Raw response: %s", raw_body)
        raise ParseError(raw_body=raw_body) from err

    if not response.choices:
        logger.warning("Completion returned no choices; using fallback reply")
        return FALLBACK_REPLY

    return response.choices[0].message


def complete(endpoint, api_key, model, transcript, session=None, timeout=DEFAULT_TIMEOUT) -> Message:
    """Send one chat-completion request and return the first reply.

    Args:
        endpoint: Completions URL.
        api_key: Bearer credential.
        model: Model identifier.
        transcript: Non-empty ordered sequence of `Message`; read, never mutated.
        session: Optional `requests.Session` to reuse pooled connections.
        timeout: Seconds to wait for the server, or `None` for no limit.

    Returns:
        `choices[0].message` verbatim, or `FALLBACK_REPLY` for empty `choices`.

    Raises:
        TransportError: Any `requests` failure while sending or reading.
        ParseError: Malformed or shape-mismatched body.
    """
    if not len(transcript):
        raise ValueError("transcript must not be empty")

    payload = build_request(model, transcript)
    headers = {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
    }
    http = session if session is not None else requests

    logger.debug(
        "POST %s model=%s messages=%d", endpoint, model, len(payload["messages"])
    )

    try:
        response = http.post(endpoint, headers=headers, json=payload, timeout=timeout)
        raw_body = response.text
    except requests.exceptions.RequestException as err:
        raise TransportError(str(err)) from err

    logger.debug("Response status=%s bytes=%d", response.status_code, len(raw_body))
    return parse_response(raw_body)


class CompletionClient:
    """Process-wide capability for issuing completions.

    Holds one `requests.Session` plus endpoint, credential, and model. Created
    once at process entry and passed explicitly to every call site.
    """

    def __init__(self, config: ClientConfig, session=None):
        self.config = config
        self.session = session if session is not None else requests.Session()

    @property
    def model(self):
        return self.config.model

    def complete(self, transcript) -> Message:
        return complete(
            self.config.api_url,
            self.config.api_key,
            self.config.model,
            transcript,
            session=self.session,
            timeout=self.config.timeout,
        )

    def close(self):
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
