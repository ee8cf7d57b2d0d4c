"""Conversation orchestration package.

Composition:
    - `conversation`: single-shot and interactive turn loops over a `Transcript`.
"""
