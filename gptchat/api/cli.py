"""
Command-line entrypoint for gptchat.

Modes:
1. `gptchat "text"`: send one message given as an argument and print the reply.
2. `gptchat`: read one line from stdin, send it, print the reply.
3. `gptchat --interactive`: chat loop until `exit` or end of input.

A positional message takes precedence over `--interactive`.

Startup:
- Configure logging from `LOG_LEVEL` (stderr).
- Resolve configuration; a missing `OPENAI_API_KEY` aborts with exit status 1
  before any request is attempted.
- Create one `CompletionClient` and one `Transcript` for the whole process.

Exit status:
- 0 on normal completion, `exit`, EOF, and reported completion errors.
- 1 on configuration errors.
"""

import argparse
import logging
import sys

from gptchat.core.conversation import read_single_line, run_interactive, run_once
from gptchat.llm.client import CompletionClient
from gptchat.llm.messages import Transcript
from gptchat.llm.provider_config import ConfigurationError, load_config, log_level


logger = logging.getLogger(__name__)


def build_parser():
    parser = argparse.ArgumentParser(
        prog="gptchat",
        description="Interact with OpenAI's ChatGPT",
    )
    parser.add_argument(
        "input",
        nargs="?",
        help="Provide input message for single-message mode",
    )
    parser.add_argument(
        "-i",
        "--interactive",
        action="store_true",
        help="Enable interactive mode",
    )
    parser.add_argument(
        "-m",
        "--model",
        help="Model to use instead of MODEL_NAME",
    )
    return parser


def configure_logging():
    level = log_level()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv=None):
    """Parse arguments, build the client, and run the selected mode."""
    args = build_parser().parse_args(argv)
    configure_logging()

    try:
        config = load_config().with_model(args.model)
    except ConfigurationError as err:
        print(f"Configuration error: {err}", file=sys.stderr)
        return 1

    transcript = Transcript()

    with CompletionClient(config) as client:
        logger.debug("Using model %s at %s", config.model, config.api_url)

        if args.input is not None:
            run_once(client, args.input.strip(), transcript)
        elif args.interactive:
            run_interactive(client, transcript)
        else:
            run_once(client, read_single_line(), transcript)

    return 0


if __name__ == "__main__":
    sys.exit(main())
