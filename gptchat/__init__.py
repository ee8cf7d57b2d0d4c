"""gptchat: terminal client for OpenAI chat completions.

Package split:
    - `llm`: configuration, message schemas, and the HTTP completion client.
    - `core`: the conversation turn loop that owns the transcript.
    - `api`: the command-line entrypoint.
"""
