"""LLM access package.

Architectural role:
    Provides environment configuration, message/wire schemas, and the HTTP
    transport used by the turn loop to obtain chat completions.

Module split:
    - `provider_config`: environment-driven endpoint, model, and key configuration.
    - `messages`: `Message`, `Transcript`, and request/response schemas.
    - `client`: OpenAI chat-completions transport and response parsing.
"""
