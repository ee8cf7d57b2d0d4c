"""Turn loop over a single in-memory transcript.

Request lifecycle (per turn):
1. Append the user text to the transcript.
2. Ask the completion client for a reply using the full transcript.
3. On success print the reply content and append the reply.
4. On failure print `Error: ...` to stderr and leave the user turn unanswered.

Interactive mode repeats this for each stdin line until the `exit` sentinel or
end of input. Only one request is in flight at a time.
"""

import logging
import sys

from gptchat.llm.client import CompletionError


logger = logging.getLogger(__name__)


EXIT_SENTINEL = "exit"
USER_PROMPT = "You: "
ASSISTANT_PROMPT = "ChatGPT: "


def run_once(client, input_text, transcript):
    """Run one turn and return the reply, or `None` when the completion failed.

    A failed turn keeps its user message in the transcript; nothing is rolled
    back and nothing is written to stdout.
    """
    transcript.add_user(input_text)
    logger.debug("Turn started; transcript has %d messages", len(transcript))

    try:
        reply = client.complete(transcript)
    except CompletionError as err:
        print(f"Error: {err}", file=sys.stderr)
        return None

    print(reply.content)
    transcript.append(reply)
    return reply


def run_interactive(client, transcript):
    """Read lines from stdin and run a turn for each until `exit` or EOF.

    Returns:
        Number of turns sent to the client.
    """
    turns = 0

    while True:

        try:
            line = input(USER_PROMPT)
        except (EOFError, KeyboardInterrupt):
            # Treated as an implicit `exit`; finish the prompt line.
            print()
            break

        text = line.strip()
        if text == EXIT_SENTINEL:
            break

        print(ASSISTANT_PROMPT, end="", flush=True)
        run_once(client, text, transcript)
        turns += 1

    logger.debug("Interactive session ended after %d turns", turns)
    return turns


def read_single_line(stream=None):
    """Read one stripped line for stdin single-shot mode; EOF yields `""`."""
    stream = sys.stdin if stream is None else stream
    return stream.readline().strip()
