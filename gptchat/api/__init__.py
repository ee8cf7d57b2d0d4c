"""Command-line adapter package.

Architectural role:
- Defines the terminal interaction boundary.
- Resolves configuration and constructs the completion client once per process.
- Delegates turn handling to `gptchat.core.conversation`.
"""
